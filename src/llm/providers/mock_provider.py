from __future__ import annotations
import re
from llm.providers.base import LLMProvider

_QUOTED = re.compile(r'"(.*)"', re.DOTALL)
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

class MockProvider(LLMProvider):
    def generate(self, *, user: str) -> str:
        """
        Offline stand-in for the generation service, keyed on the prompt content.
        """
        m = _QUOTED.search(user)
        body = m.group(1).strip() if m else user

        # Date extraction request: echo any ISO dates wrapped in some chatter,
        # the way a real model tends to answer.
        if "YYYY-MM-DD" in user:
            dates = _ISO_DATE.findall(body)
            if not dates:
                return "I could not find any dates."
            return "Sure! The dates are:\n" + "\n".join(dates)

        # Summarization request: first two sentences of the input
        if user.startswith("Summarize"):
            sentences = re.split(r"(?<=[.!?])\s+", body)
            return " ".join(sentences[:2]).strip()

        # Default fallback
        return ""
