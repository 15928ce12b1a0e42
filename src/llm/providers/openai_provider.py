from __future__ import annotations
import os
from typing import Optional

import httpx

from meeting_calendar.config import LLM_TIMEOUT_S
from meeting_calendar.errors import ConfigurationError
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
        self._transport = transport

        if not self.api_key:
            raise ConfigurationError("OPENAI_API_KEY is missing")

    def generate(self, *, user: str) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": user}],
            "temperature": 0.2,
        }

        with httpx.Client(timeout=LLM_TIMEOUT_S, transport=self._transport) as client:
            r = client.post(url, headers=headers, json=payload)
            r.raise_for_status()
            data = r.json()

        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""
