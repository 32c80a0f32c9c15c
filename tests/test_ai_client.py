import asyncio
from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from adapters.ai_client import OpenAICompletionClient, build_completion_client
from core.config import AppSettings
from core.interfaces.completion import CompletionClient, CompletionError


class _FakeCompletions:
    def __init__(self, result):
        self._result = result
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


def _sdk(result):
    completions = _FakeCompletions(result)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _complete(client: OpenAICompletionClient) -> str:
    return asyncio.run(
        client.complete([{"role": "user", "content": "hi"}], model="m", temperature=0.5, max_tokens=10)
    )


def test_complete_returns_content():
    sdk, completions = _sdk(_completion('{"answer": "x"}'))
    client = OpenAICompletionClient(sdk)
    assert isinstance(client, CompletionClient)
    assert _complete(client) == '{"answer": "x"}'
    assert completions.kwargs["max_tokens"] == 10
    assert completions.kwargs["model"] == "m"


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_content_is_an_error(content):
    sdk, _ = _sdk(_completion(content))
    with pytest.raises(CompletionError, match="No response"):
        _complete(OpenAICompletionClient(sdk))


def test_sdk_errors_are_translated():
    error = APIConnectionError(request=httpx.Request("POST", "https://example.invalid/v1/chat/completions"))
    sdk, _ = _sdk(error)
    with pytest.raises(CompletionError):
        _complete(OpenAICompletionClient(sdk))


def test_no_key_means_no_client():
    settings = AppSettings(ai_api_key=None, ai_base_url="https://api.groq.com/openai/v1")
    assert build_completion_client(settings) is None


def test_local_server_does_not_need_a_key():
    settings = AppSettings(ai_api_key=None, ai_base_url="http://localhost:11434/v1")
    client = build_completion_client(settings)
    assert client is not None
    asyncio.run(client.aclose())
