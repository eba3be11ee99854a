# tests/fakes.py

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from zenith_tasks.llm.advisor import AdvisorResult


class FakeSlot:
    """In-memory StorageSlot; counts writes for persistence assertions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> str | None:
        return self.data.get(key)

    def write(self, key: str, payload: str) -> None:
        self.writes += 1
        self.data[key] = payload


class FakeAdvisor:
    """
    Deterministic SubtaskAdvisor for session/command tests.

    - Captures calls for assertions
    - Returns a predefined AdvisorResult
    """

    def __init__(self, result: AdvisorResult | None = None, configured: bool = True) -> None:
        self.result = result or AdvisorResult(suggestions=["a", "b"], tokens=10)
        self.configured = configured
        self.calls: list[tuple[str, str]] = []

    def is_configured(self) -> bool:
        return self.configured

    def suggest(self, title: str, description: str) -> AdvisorResult:
        self.calls.append((title, description))
        return self.result


class FakeCompletions:
    """Mimics client.chat.completions of the OpenAI SDK."""

    def __init__(self, content: str = "", total_tokens: int | None = 0, error: Exception | None = None) -> None:
        self.content = content
        self.total_tokens = total_tokens
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        usage = None if self.total_tokens is None else SimpleNamespace(total_tokens=self.total_tokens)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)], usage=usage)


class FakeOpenAIClient:
    def __init__(self, **kwargs: Any) -> None:
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


# Named like the SDK/httpx exceptions: classification works by class name too.
class AuthenticationError(Exception):
    pass


class APIConnectionError(Exception):
    pass


class BadRequestError(Exception):
    pass
