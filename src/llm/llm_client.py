import logging
import os
from typing import Optional

import httpx

from llm.providers.base import LLMProvider
from meeting_calendar.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = 'Summarize this text concisely: "{text}"'

DATES_PROMPT = (
    "List every calendar date mentioned in the text below. "
    "Resolve relative dates where possible. "
    "Return ONLY the dates in YYYY-MM-DD format, one per line, "
    "with no other words.\n\n"
    'Text: "{text}"'
)


def build_provider(name: Optional[str] = None) -> LLMProvider:
    """Instantiate the provider selected by ``name`` or ``LLM_PROVIDER``.

    Raises ConfigurationError when the provider is unknown or lacks a credential.
    """
    name = (name or os.getenv("LLM_PROVIDER", "gemini")).strip().lower()

    if name == "gemini":
        from llm.providers.gemini_provider import GeminiProvider
        return GeminiProvider()
    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()

    raise ConfigurationError(f"Unknown LLM_PROVIDER: {name!r}")


class LLMClient:
    """Thin wrapper around the external generation service.

    The provider is built lazily so a missing credential surfaces per call
    (as ConfigurationError) instead of at import time.
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self._provider = build_provider()
        return self._provider

    def complete(self, prompt: str) -> str:
        provider = self.provider
        try:
            return provider.generate(user=prompt) or ""
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"generation service returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"generation request failed: {e}") from e
        except ValueError as e:
            # undecodable JSON body
            raise TransportError(f"invalid generation response: {e}") from e

    def summarize(self, text: str) -> str:
        return self.complete(SUMMARY_PROMPT.format(text=text))

    def extract_dates(self, text: str) -> str:
        """Ask the service for the dates in ``text``; returns the raw reply."""
        return self.complete(DATES_PROMPT.format(text=text))
