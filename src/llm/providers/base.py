from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, user: str) -> str:
        """
        Send a single user-role text part and return the first response text.
        Return "" when the service answered without usable content.
        """
        raise NotImplementedError
