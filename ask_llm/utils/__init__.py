from .ansi import (
    Ansi,
    ERROR_LABEL,
    console,
    resolve_color,
)
from .spinner import Spinner

__all__ = [
    "Ansi",
    "ERROR_LABEL",
    "console",
    "resolve_color",
    "Spinner",
]
