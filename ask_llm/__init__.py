"""Ask an LLM from your terminal via OpenAI-compatible APIs.

Usage
-----
    askllm --model MODEL --prompt "PROMPT" [--input-file PATH] [--output-file PATH]
           [--color COLOR] [--store]
    askllm PROMPT WORDS...            (once a model is stored with --store)

Environment variables
---------------------
* ASKLLM_API_KEY – API key for the endpoint (required)
* ASKLLM_API_ENDPOINT – base URL (default: https://openrouter.ai/api/v1)
* ASKLLM_DEFAULTS – stored command defaults, written by --store

Run `python -m ask_llm` or the `askllm` console script.
"""
# Re-export useful symbols for convenience
from .core import (
    AskCommandSettings,
    AskLlmSettings,
    ChatRequest,
    ChatResponse,
    DefaultsStore,
    merge_arguments,
    split_arguments,
)
from .core.client import ChatEndpointService
from .cli import AskCommand, run_cli
from .version import __version__

__all__ = [
    "AskCommandSettings",
    "AskLlmSettings",
    "ChatRequest",
    "ChatResponse",
    "DefaultsStore",
    "merge_arguments",
    "split_arguments",
    "ChatEndpointService",
    "AskCommand",
    "run_cli",
    "__version__",
]
