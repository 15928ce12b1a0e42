from __future__ import annotations
import os
from typing import Optional

import httpx

from meeting_calendar.config import LLM_TIMEOUT_S
from .base import LLMProvider

class OllamaProvider(LLMProvider):
    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").strip()
        self._transport = transport

    def generate(self, *, user: str) -> str:
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": self.model,
            "stream": False,
            "messages": [{"role": "user", "content": user}],
            "options": {"temperature": 0.2},
        }

        with httpx.Client(timeout=LLM_TIMEOUT_S, transport=self._transport) as client:
            r = client.post(url, json=payload)
            r.raise_for_status()
            data = r.json()

        return (data.get("message") or {}).get("content") or ""
