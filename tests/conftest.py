from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from core.config import AppSettings
from core.interfaces.completion import CompletionError


@dataclass
class FakeCompletionClient:
    """Returns canned responses in order; an exception instance is raised instead."""

    responses: list[object] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.calls.append(
            {"messages": messages, "model": model, "temperature": temperature, "max_tokens": max_tokens}
        )
        if not self.responses:
            raise CompletionError("No response from AI provider")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return str(response)


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(ai_api_key=None, ai_model="test-model", data_dir=tmp_path / "courses")


@pytest.fixture
def fake_client() -> FakeCompletionClient:
    return FakeCompletionClient()
