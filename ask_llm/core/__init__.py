from .config import AskLlmSettings, API_KEY_ENV, API_ENDPOINT_ENV, DEFAULTS_ENV
from .defaults import DefaultsStore, build_defaults_string, merge_arguments, split_arguments
from .models import AskCommandSettings, ChatRequest, ChatResponse, ValidationResult

__all__ = [
    "AskLlmSettings",
    "API_KEY_ENV",
    "API_ENDPOINT_ENV",
    "DEFAULTS_ENV",
    "DefaultsStore",
    "build_defaults_string",
    "merge_arguments",
    "split_arguments",
    "AskCommandSettings",
    "ChatRequest",
    "ChatResponse",
    "ValidationResult",
]
