"""Response normalizer: strips code-fence wrapping from model output."""

from __future__ import annotations

import re

# Opening fence plus an optional language tag on the same line (```json, ```JSON5, ```).
_LEADING_FENCE_RE = re.compile(r"^```[A-Za-z0-9_+.-]*[ \t]*")
_TRAILING_FENCE = "```"


def normalize_response(raw: str | None) -> str:
    """Remove a leading/trailing fence marker and trim outer whitespace.

    Never fails: text without fences is only trimmed.
    """

    text = (raw or "").strip()
    text = _LEADING_FENCE_RE.sub("", text, count=1).strip()
    if text.endswith(_TRAILING_FENCE):
        text = text[: -len(_TRAILING_FENCE)].strip()
    return text
