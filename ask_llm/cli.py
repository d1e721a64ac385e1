"""Command line entry point for ``askllm``.

Arguments given on the command line are merged with the stored defaults
(see :mod:`ask_llm.core.defaults`) before they are parsed, so a user who
once ran ``askllm --model gpt-4o --store --prompt hi`` can afterwards just
type ``askllm what is the capital of France``.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from .core import (
    AskCommandSettings,
    AskLlmSettings,
    ChatRequest,
    DefaultsStore,
    DEFAULTS_ENV,
    API_KEY_ENV,
    build_defaults_string,
)
from .core.client import ChatEndpointService
from .utils import Ansi, ERROR_LABEL, Spinner, console, resolve_color
from .version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class AskCommand:
    """Validates one invocation, sends the prompt and renders the answer."""

    def __init__(
        self,
        service: ChatEndpointService,
        store: Optional[DefaultsStore] = None,
        output: Optional[Console] = None,
    ):
        self.service = service
        self.store = store or DefaultsStore()
        self.console = output or console

    # ---------------- Rendering ----------------

    def _render_error(self, message: str) -> None:
        self.console.print(f"{ERROR_LABEL} {escape(message)}")

    def _render_success(self, message: str) -> None:
        self.console.print(Ansi.style(message, Ansi.FG_GREEN))

    def _render_response(self, content: str, color: Optional[str]) -> None:
        self.console.print(Text(content, style=color or ""))

    # ---------------- Steps ----------------

    def _store_defaults(self, settings: AskCommandSettings) -> bool:
        defaults = build_defaults_string(settings)
        if not self.store.store(defaults):
            self._render_error(
                f"Unable to store the command defaults in the {DEFAULTS_ENV} environment variable."
            )
            return False

        if defaults:
            self._render_success(f"Stored command defaults in {DEFAULTS_ENV}.")
        else:
            self._render_success("Cleared stored command defaults.")
        return True

    def _prompt_text(self, settings: AskCommandSettings) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(prompt, error)``; the input file wins over ``--prompt``."""
        if settings.input_file and settings.input_file.strip():
            try:
                return Path(settings.input_file).read_text(encoding="utf-8"), None
            except (OSError, UnicodeDecodeError):
                logger.exception("Failed to read input file %s", settings.input_file)
                return None, "Unable to read the input file specified by --input-file."

        return settings.prompt.strip(), None

    def _write_output_file(self, path: str, content: str) -> bool:
        try:
            target = Path(path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError:
            logger.exception("Failed to write output file %s", path)
            self._render_error("Unable to write the response to the specified output file.")
            return False

        self._render_success(f"Response written to {path}")
        return True

    # ---------------- Entry point ----------------

    def execute(self, settings: AskCommandSettings) -> int:
        """Run the command and return the process exit code."""
        validation = settings.validate()
        if not validation.successful:
            self._render_error(validation.message or "Invalid command input.")
            return 1

        if settings.store_defaults and not self._store_defaults(settings):
            return 1

        try:
            color = resolve_color(settings.color)
        except ValueError:
            self._render_error("The value provided for --color is not a valid color.")
            return 1

        if not self.service.is_configured:
            self._render_error(f"The {API_KEY_ENV} environment variable is not configured.")
            return 1

        prompt, error = self._prompt_text(settings)
        if error is not None:
            self._render_error(error)
            return 1

        request = ChatRequest(prompt, settings.model.strip())

        try:
            spinner = Spinner("Requesting response from the LLM...")
            spinner.start()
            try:
                response = self.service.send_chat_request(request)
            finally:
                spinner.stop()

            if not response.success:
                self._render_error(
                    response.error_message or "The model returned an unsuccessful response."
                )
                return 1

            if settings.output_file and settings.output_file.strip():
                return 0 if self._write_output_file(settings.output_file, response.content) else 1

            self._render_response(response.content, color)
            return 0
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unhandled exception while processing ask command.")
            self._render_error("An unexpected error occurred. Please try again.")
            return 1


# ---------------------------------------------------------------------------
# Entrypoint helpers
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="askllm",
        # Stored defaults only yield to options spelled out in full
        allow_abbrev=False,
        description="Send a prompt to an LLM provider.",
        epilog=(
            f"Options given together with --store (except --prompt) are saved in "
            f"{DEFAULTS_ENV} and reused whenever they are not passed explicitly."
        ),
    )
    parser.add_argument("words", nargs="*", metavar="prompt", help="Prompt text (alternative to --prompt)")
    parser.add_argument("--model", metavar="model_name", help="The model identifier to send the request to.")
    parser.add_argument("--prompt", help="The prompt text to send to the model.")
    parser.add_argument("--input-file", metavar="path", help="Optional file path that supplies the prompt text.")
    parser.add_argument("--output-file", metavar="path", help="Optional file path to write the response to.")
    parser.add_argument("--color", help="Optional console color name used when rendering responses.")
    parser.add_argument(
        "--store",
        action="store_true",
        help="Store provided options (excluding --prompt) for future runs.",
    )
    parser.add_argument("--version", action="store_true", help="Show the application version.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def split_inline_values(arguments: Sequence[str]) -> List[str]:
    """Split ``--option=value`` into ``--option``, ``value`` so the option counts as provided."""
    split: List[str] = []
    for i, arg in enumerate(arguments):
        if arg == "--":
            split.extend(arguments[i:])
            break
        if arg.startswith("--") and "=" in arg:
            split.extend(arg.split("=", 1))
        else:
            split.append(arg)
    return split


def settings_from_args(args: argparse.Namespace) -> AskCommandSettings:
    prompt = args.prompt if args.prompt is not None else " ".join(args.words)
    return AskCommandSettings(
        prompt=prompt,
        model=(args.model or "").strip(),
        input_file=args.input_file,
        output_file=args.output_file,
        color=args.color,
        store_defaults=args.store,
    )


def run_cli(
    argv: Optional[Sequence[str]] = None,
    *,
    store: Optional[DefaultsStore] = None,
    service: Optional[ChatEndpointService] = None,
    output: Optional[Console] = None,
) -> int:
    arguments = split_inline_values(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if not arguments:
        parser.print_help()
        return 0

    store = store or DefaultsStore()
    merged = store.merge_with_stored_defaults(arguments)
    args = parser.parse_intermixed_args(merged)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    logger.debug("Arguments after applying stored defaults: %s", merged)

    out = output or console
    if args.version:
        out.print(f"askllm v{escape(__version__)}")
        return 0

    if service is None:
        service = ChatEndpointService(AskLlmSettings.from_environment())

    return AskCommand(service, store, out).execute(settings_from_args(args))


def main() -> None:  # pragma: no cover
    sys.exit(run_cli())


if __name__ == "__main__":  # pragma: no cover
    main()
