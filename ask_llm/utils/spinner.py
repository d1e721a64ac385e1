"""Spinner shown while waiting on the LLM, built on yaspin."""
from __future__ import annotations

from yaspin import yaspin
from yaspin.spinners import Spinners


class Spinner:
    """Display a small spinner followed by *text* while work is done."""

    def __init__(self, text: str = ""):
        self._text = text
        self._started = False
        self._spinner = yaspin(Spinners.dots, text=text)

    def start(self) -> None:
        if self._started:
            return
        self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        # yaspin clears the spinner line on stop, leaving the cursor at column 0
        self._spinner.stop()
        self._started = False

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()
