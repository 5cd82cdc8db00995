# src/tasklog/llm/client.py

from __future__ import annotations

import logging
from typing import Any

import openai
from openai import OpenAI

from ..core.app_config import DEFAULT_CONFIG, AppConfig
from ..core.ports import ChatMessage
from ..errors import ExternalServiceError

logger = logging.getLogger(__name__)


def _is_auth_error(exc: Exception) -> bool:
    return isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError))


def _is_rate_limit_error(exc: Exception) -> bool:
    return isinstance(exc, openai.RateLimitError)


def _is_connection_error(exc: Exception) -> bool:
    # APITimeoutError is a subclass of APIConnectionError.
    return isinstance(exc, openai.APIConnectionError)


def _is_not_found_error(exc: Exception) -> bool:
    return isinstance(exc, openai.NotFoundError)


def friendly_llm_error_message(err: Exception, *, model: str, base_url: str) -> str:
    if _is_auth_error(err):
        return f"LLM authentication failed at {base_url}. Check apiKey (tasklog config-set apiKey ...)."
    if _is_rate_limit_error(err):
        return "LLM is rate-limited. Try again later."
    if _is_connection_error(err):
        return f"Could not reach the LLM endpoint at {base_url}: {err}"
    if _is_not_found_error(err):
        return f"Model {model!r} is not available at {base_url}."
    return str(err).strip() or "LLM error."


class OpenAIChatBackend:
    """
    OpenAI-compatible chat-completion client (Ollama, OpenRouter, OpenAI, ...).

    Automatic retries are disabled: a failed request is reported, not repeated.
    The request timeout is the SDK default.
    """

    def __init__(self, *, base_url: str, api_key: str, model: str, client: Any = None) -> None:
        if not base_url.strip():
            raise ExternalServiceError("LLM base URL is not set. Use `tasklog config-set baseURL <url>`.")
        if not model.strip():
            raise ExternalServiceError("LLM model is not set. Use `tasklog config-set model <name>`.")
        self.base_url = base_url
        self.model = model
        self._client = client or OpenAI(base_url=base_url, api_key=api_key, max_retries=0)

    @classmethod
    def from_config(cls, config: AppConfig) -> OpenAIChatBackend:
        return cls(
            base_url=config.base_url or DEFAULT_CONFIG.base_url or "",
            api_key=config.api_key or DEFAULT_CONFIG.api_key or "",
            model=config.model or DEFAULT_CONFIG.model or "",
        )

    def complete(self, messages: list[ChatMessage]) -> str:
        logger.info("LLM: requesting completion model=%s base_url=%s", self.model, self.base_url)
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
            )
        except openai.OpenAIError as e:
            logger.debug("LLM request failed", exc_info=True)
            raise ExternalServiceError(
                friendly_llm_error_message(e, model=self.model, base_url=self.base_url)
            ) from e

        choices = getattr(response, "choices", None) or []
        if not choices:
            raise ExternalServiceError(f"Model {self.model!r} returned no choices.")
        content = getattr(choices[0].message, "content", None)
        if content is None:
            raise ExternalServiceError(f"Model {self.model!r} returned an empty reply (content is null).")
        logger.debug("LLM: reply len=%d", len(content))
        return content
