"""Runtime configuration read from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlparse

from .profile import read_export

API_KEY_ENV = "ASKLLM_API_KEY"
API_ENDPOINT_ENV = "ASKLLM_API_ENDPOINT"
DEFAULTS_ENV = "ASKLLM_DEFAULTS"

DEFAULT_API_ENDPOINT = "https://openrouter.ai/api/v1"


@dataclass(frozen=True)
class AskLlmSettings:
    """API credentials and endpoint for the chat service."""

    api_key: str
    api_endpoint: str = DEFAULT_API_ENDPOINT

    @property
    def is_valid(self) -> bool:
        if not self.api_key.strip():
            return False
        parsed = urlparse(self.api_endpoint)
        return bool(parsed.scheme and parsed.netloc)

    @classmethod
    def from_environment(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        home: Optional[Path] = None,
    ) -> "AskLlmSettings":
        """Build settings from the environment.

        When the API key isn't exported in the current process we fall back
        to reading it from the shell profile, which helps when the tool is
        launched from a non-login shell.
        """
        environ = os.environ if environ is None else environ

        api_key = environ.get(API_KEY_ENV) or ""
        if not api_key.strip():
            api_key = read_export(API_KEY_ENV, home or Path.home()) or ""

        endpoint = environ.get(API_ENDPOINT_ENV) or ""
        if not endpoint.strip():
            endpoint = DEFAULT_API_ENDPOINT

        return cls(api_key=api_key.strip(), api_endpoint=endpoint.strip())
