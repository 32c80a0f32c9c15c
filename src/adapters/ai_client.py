"""Adaptador del proveedor IA (OpenAI SDK, compatible con Groq/OpenRouter/Ollama).

Responsabilidad:
- Implementar `core.interfaces.completion.CompletionClient` sobre `AsyncOpenAI`.
- Traducir errores del SDK (red, timeout, status, rate limit) y respuestas
  vacías a `CompletionError`, el único fallo que conoce el orquestador.

Nota:
- Sin reintentos (`max_retries=0`): ante cualquier fallo el orquestador cae a
  su resultado local.
"""

from __future__ import annotations

import logging

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI, OpenAIError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.interfaces.completion import CompletionError

logger = logging.getLogger(__name__)


def is_local_base_url(url: str) -> bool:
    url_l = (url or "").strip().lower()
    return url_l.startswith("http://localhost") or url_l.startswith("http://127.0.0.1") or url_l.startswith(
        "http://0.0.0.0"
    )


class OpenAICompletionClient:
    """Chat-completions client for any OpenAI-compatible endpoint."""

    def __init__(self, client: AsyncOpenAI) -> None:
        self._client = client

    async def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        try:
            completion = await self._client.chat.completions.create(
                model=model,
                messages=messages,  # type: ignore[arg-type]
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as exc:
            raise CompletionError(f"provider returned HTTP {exc.status_code}: {exc.message}") from exc
        except (APITimeoutError, APIConnectionError) as exc:
            raise CompletionError(f"provider unreachable: {exc}") from exc
        except OpenAIError as exc:
            raise CompletionError(str(exc)) from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise CompletionError("No response from AI provider")
        logger.debug("Received %d chars from %s", len(content), model)
        return content

    async def aclose(self) -> None:
        await self._client.close()


def build_completion_client(settings: AppSettings | None = None) -> OpenAICompletionClient | None:
    """Build the model client, or `None` when no credentials are configured.

    Local OpenAI-compatible servers (Ollama, LM Studio) accept a dummy key.
    """

    settings = settings or AppSettings()
    api_key = (settings.ai_api_key or "").strip()
    if not api_key:
        if not is_local_base_url(settings.ai_base_url):
            logger.warning("Missing NEURALEARN_AI_API_KEY; AI features will use local fallbacks")
            return None
        api_key = "local"

    client = AsyncOpenAI(
        api_key=api_key,
        base_url=settings.ai_base_url,
        timeout=settings.ai_timeout_seconds,
        max_retries=0,
        http_client=build_async_client(settings),
    )
    return OpenAICompletionClient(client)
