"""Logging de la CLI (Rich).

El Core y los adapters solo usan `logging.getLogger(__name__)`; aquí se
decide el handler y el nivel una única vez por proceso.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING
    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console or Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # The OpenAI SDK and httpx log every request at INFO.
    for noisy in ("httpx", "openai"):
        logging.getLogger(noisy).setLevel(max(resolved, logging.WARNING))
