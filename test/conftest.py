import pytest

class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def generate(self, *, user: str) -> str:
        self.prompts.append(user)
        return self._response_text

class FailingProvider:
    def __init__(self, exc: Exception):
        self._exc = exc
        self.calls = 0

    def generate(self, *, user: str) -> str:
        self.calls += 1
        raise self._exc

@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make

@pytest.fixture
def failing_provider_factory():
    def _make(exc: Exception):
        return FailingProvider(exc)
    return _make
