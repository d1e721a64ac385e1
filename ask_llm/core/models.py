"""Plain data types passed between the CLI, the command and the service."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ValidationResult:
    successful: bool
    message: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def error(cls, message: str) -> "ValidationResult":
        return cls(False, message)


@dataclass
class AskCommandSettings:
    """Options of a single ``askllm`` invocation, after defaults are merged."""

    prompt: str = ""
    model: str = ""
    input_file: Optional[str] = None
    output_file: Optional[str] = None
    color: Optional[str] = None
    store_defaults: bool = False

    def validate(self) -> ValidationResult:
        has_prompt = bool(self.prompt and self.prompt.strip())
        has_input_file = bool(self.input_file and self.input_file.strip())

        if not has_prompt and not has_input_file:
            return ValidationResult.error(
                "A prompt must be provided or an input file must be specified using --input-file."
            )

        if has_input_file and not os.path.isfile(self.input_file):
            return ValidationResult.error("The file specified by --input-file does not exist.")

        if not self.model or not self.model.strip():
            return ValidationResult.error("A model must be specified using --model.")

        return ValidationResult.success()


@dataclass(frozen=True)
class ChatRequest:
    message: str
    model: str


@dataclass(frozen=True)
class ChatResponse:
    content: str
    model: str
    success: bool
    error_message: Optional[str] = None
