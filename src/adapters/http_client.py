"""Transporte HTTP compartido (httpx).

El SDK de OpenAI acepta un `httpx.AsyncClient` propio: así el timeout y el
User-Agent salen de `AppSettings`, y `doctor` usa exactamente el mismo
transporte para comprobar el endpoint.
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug("%s %s -> HTTP %s", request.method, request.url, response.status_code)


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """AsyncClient with the provider timeout, User-Agent and a debug response hook."""

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.ai_timeout_seconds),
        headers={"User-Agent": settings.user_agent, **(extra_headers or {})},
        follow_redirects=True,
        event_hooks={"response": [_log_response]},
    )
