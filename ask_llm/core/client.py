"""Chat endpoint service built on the OpenAI Python SDK."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import openai
from openai import OpenAI  # type: ignore

from .config import AskLlmSettings
from .models import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "The chat endpoint service is not configured."
NO_CONTENT_MESSAGE = "The model did not return any content."


class ChatEndpointService:
    """Sends a single prompt to an OpenAI-compatible chat completion endpoint."""

    def __init__(self, settings: AskLlmSettings, client: Optional[OpenAI] = None):
        self.settings = settings
        # Created on first use so a missing API key never reaches the SDK.
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self.settings.is_valid

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.api_endpoint,
            )
        return self._client

    # ------------------------------------------------------------------
    # Helper methods
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_text(completion: Any) -> str:
        """Return the text of the first choice of a chat completion."""
        choices = getattr(completion, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if isinstance(content, str):
            return content

        # Some compatible providers return a list of content parts instead.
        texts: List[str] = []
        for part in content or []:
            text = part.get("text") if isinstance(part, dict) else getattr(part, "text", None)
            if isinstance(text, str) and text.strip():
                texts.append(text)
        return "\n".join(texts)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def send_chat_request(self, request: ChatRequest) -> ChatResponse:
        if not request.message or not request.message.strip():
            raise ValueError("The message must not be empty.")
        if not request.model or not request.model.strip():
            raise ValueError("The model must not be empty.")

        if not self.is_configured:
            logger.error(NOT_CONFIGURED_MESSAGE)
            return ChatResponse("", request.model, False, NOT_CONFIGURED_MESSAGE)

        try:
            completion = self.client.chat.completions.create(
                model=request.model,
                messages=[{"role": "user", "content": request.message}],
            )
        except openai.OpenAIError as exc:
            logger.error("Failed to send chat request: %s", exc)
            return ChatResponse("", request.model, False, str(exc))

        text = self._extract_text(completion).strip()
        if not text:
            logger.warning(NO_CONTENT_MESSAGE)
            return ChatResponse("", request.model, False, NO_CONTENT_MESSAGE)

        return ChatResponse(text, request.model, True)
