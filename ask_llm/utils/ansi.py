"""Colour and styling helpers built on :mod:`rich`."""

import os
from typing import Optional

from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.style import Style


console = Console()


class Ansi:
    """Lightweight collection of style names used throughout the app."""

    BOLD = "bold"

    FG_GREEN = "green"
    FG_RED = "red"

    @staticmethod
    def style(text: str, *codes: str) -> str:
        """Return *text* wrapped in rich markup unless ``NO_COLOR`` is set.

        *text* is escaped so square brackets in user data (paths, error
        messages from the API) are never taken for markup tags.
        """
        if os.getenv("NO_COLOR") is not None:
            return escape(text)
        style = " ".join(codes)
        return f"[{style}]{escape(text)}[/]"


def resolve_color(value: Optional[str]) -> Optional[str]:
    """Return the trimmed colour/style name, or ``None`` when *value* is blank.

    Raises :class:`ValueError` if rich cannot parse the value as a style.
    """
    if value is None or not value.strip():
        return None

    trimmed = value.strip()
    try:
        Style.parse(trimmed)
    except StyleSyntaxError as exc:
        raise ValueError(f"'{trimmed}' is not a valid color") from exc
    return trimmed


# Common labels used throughout the application
ERROR_LABEL = Ansi.style("Error:", Ansi.FG_RED, Ansi.BOLD)
