from __future__ import annotations
import os
from typing import Optional

import httpx

from meeting_calendar.config import LLM_TIMEOUT_S
from meeting_calendar.errors import ConfigurationError
from .base import LLMProvider

class GeminiProvider(LLMProvider):
    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.api_key = os.getenv("GEMINI_API_KEY", "").strip()
        self.model = os.getenv("GEMINI_MODEL", "gemini-1.5-flash").strip()
        self.base_url = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1"
        ).strip().rstrip("/")
        self._transport = transport

        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is missing")

    def generate(self, *, user: str) -> str:
        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": user}]}],
        }

        with httpx.Client(timeout=LLM_TIMEOUT_S, transport=self._transport) as client:
            r = client.post(
                url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=payload,
            )
            r.raise_for_status()
            data = r.json()

        return first_candidate_text(data)


def first_candidate_text(data: dict) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response, or ""."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""
