"""Stored command defaults and how they are merged into live arguments.

Running ``askllm --model gpt-4o --color cyan --store ...`` persists
``--model "gpt-4o" --color "cyan"`` in the ``ASKLLM_DEFAULTS`` variable.
Later invocations prepend nothing and override nothing: stored options are
appended after the live arguments, and only for options the user did not
pass explicitly. ``--prompt`` is never stored nor merged.

The stored string is tokenized here rather than with :mod:`shlex` because
its rules are deliberately simpler: double quotes group, a backslash
escapes the next character (inside quotes as well) and nothing is ever an
error.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional, Sequence

from .config import DEFAULTS_ENV
from .models import AskCommandSettings
from .profile import read_export, write_export

logger = logging.getLogger(__name__)

OPTION_PREFIX = "--"
PROMPT_OPTION = "--prompt"
PROFILE_MARKER = "# ask-llm command defaults"

# Options persisted by --store, in the order they are written.
STORED_OPTIONS = (
    ("--model", "model"),
    ("--input-file", "input_file"),
    ("--output-file", "output_file"),
    ("--color", "color"),
)


def is_option(token: str) -> bool:
    return token.startswith(OPTION_PREFIX)


def _fold(token: str) -> str:
    return token.casefold()


def split_arguments(command_line: Optional[str]) -> List[str]:
    """Split a stored defaults string into tokens.

    >>> split_arguments('--model "gpt-4o mini" --color red')
    ['--model', 'gpt-4o mini', '--color', 'red']
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False
    escape_next = False

    for char in command_line or "":
        if escape_next:
            current.append(char)
            escape_next = False
        elif char == "\\":
            escape_next = True
        elif char == '"':
            in_quotes = not in_quotes
        elif char.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if escape_next:
        current.append("\\")
    if current:
        tokens.append("".join(current))

    return tokens


def merge_arguments(args: Sequence[str], stored_defaults: Optional[str]) -> List[str]:
    """Return *args* followed by the stored options the user did not supply.

    Stored tokens that are not ``--option value`` pairs are dropped, as is
    any stored ``--prompt``. Neither input is modified.
    """
    if not stored_defaults or not stored_defaults.strip():
        return list(args)

    defaults = split_arguments(stored_defaults)
    if not defaults:
        return list(args)

    provided = {_fold(arg) for arg in args if is_option(arg)}
    merged = list(args)

    i = 0
    while i < len(defaults):
        token = defaults[i]
        if not is_option(token):
            i += 1
            continue

        has_value = i + 1 < len(defaults) and not is_option(defaults[i + 1])

        if _fold(token) == PROMPT_OPTION:
            i += 2 if has_value else 1
            continue

        if not has_value:
            # Valueless stored flags (e.g. a boolean switch) are not restored.
            i += 1
            continue

        if _fold(token) not in provided:
            merged.append(token)
            merged.append(defaults[i + 1])
        i += 2

    return merged


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_defaults_string(settings: AskCommandSettings) -> str:
    """Serialise the storable options of *settings* (everything but the prompt)."""
    parts: List[str] = []
    for option, attribute in STORED_OPTIONS:
        value = getattr(settings, attribute)
        if value is None or not value.strip():
            continue
        parts.append(f"{option} {_quote(value.strip())}")
    return " ".join(parts)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def _read_user_variable(name: str) -> Optional[str]:
    import winreg  # type: ignore[import-not-found]  # Windows only

    try:
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Environment") as key:
            value, _ = winreg.QueryValueEx(key, name)
    except FileNotFoundError:
        return None
    return value or None


def _write_user_variable(name: str, value: Optional[str]) -> None:
    import winreg  # type: ignore[import-not-found]  # Windows only

    with winreg.OpenKey(winreg.HKEY_CURRENT_USER, "Environment", 0, winreg.KEY_SET_VALUE) as key:
        if value:
            winreg.SetValueEx(key, name, 0, winreg.REG_SZ, value)
            return
        try:
            winreg.DeleteValue(key, name)
        except FileNotFoundError:
            pass


class DefaultsStore:
    """Loads and persists the ``ASKLLM_DEFAULTS`` string.

    On Windows the value lives in the user-level environment (registry).
    Elsewhere it is exported from the user's shell profile so new shells
    pick it up; the current process environment is updated in both cases.
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        home: Optional[Path] = None,
        windows: Optional[bool] = None,
    ) -> None:
        self.environ = os.environ if environ is None else environ
        self.home = home or Path.home()
        self.windows = os.name == "nt" if windows is None else windows

    def load(self) -> str:
        if self.windows:
            try:
                user_value = _read_user_variable(DEFAULTS_ENV)
            except OSError as exc:
                logger.debug("Could not read user-level %s: %s", DEFAULTS_ENV, exc)
                user_value = None
            return user_value or self.environ.get(DEFAULTS_ENV) or ""

        process_value = self.environ.get(DEFAULTS_ENV)
        if process_value:
            return process_value
        return read_export(DEFAULTS_ENV, self.home) or ""

    def store(self, defaults: Optional[str]) -> bool:
        """Persist *defaults*; a blank value clears them. Returns success."""
        cleared = not defaults or not defaults.strip()
        success = True
        try:
            if self.windows:
                _write_user_variable(DEFAULTS_ENV, None if cleared else defaults)
            else:
                write_export(DEFAULTS_ENV, None if cleared else defaults, self.home, PROFILE_MARKER)
        except OSError:
            logger.exception("Failed to store command defaults.")
            success = False

        if cleared:
            self.environ.pop(DEFAULTS_ENV, None)
        else:
            self.environ[DEFAULTS_ENV] = defaults
        return success

    def merge_with_stored_defaults(self, args: Sequence[str]) -> List[str]:
        return merge_arguments(args, self.load())
