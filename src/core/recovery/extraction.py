"""Structured parser with per-field fallback extraction.

Por qué dos caminos:
- El camino estricto (`json.loads`) es el común con respuestas bien formadas.
- Cuando falla, un regex independiente por campo rescata lo que se pueda sin
  exigir que el documento completo sea válido. Nunca lanza: el fallo total es
  un mapping vacío.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from core.domain.models import ResultKind

logger = logging.getLogger(__name__)

FieldType = Literal["text", "list", "number"]

# Flat fields salvageable per variant. Plans and quizzes are nested, so a
# per-field regex cannot rebuild them; they fall through to local content.
EXTRACTABLE_FIELDS: dict[ResultKind, tuple[tuple[str, FieldType], ...]] = {
    ResultKind.DETAILED_CONTENT: (
        ("content", "text"),
        ("keyPoints", "list"),
        ("examples", "list"),
        ("practicalApplications", "list"),
    ),
    ResultKind.TUTOR_ANSWER: (
        ("answer", "text"),
        ("codeExamples", "list"),
        ("relatedConcepts", "list"),
        ("furtherReading", "list"),
    ),
    ResultKind.GRADING: (
        ("score", "number"),
        ("feedback", "text"),
        ("strengths", "list"),
        ("improvements", "list"),
    ),
    ResultKind.LEARNING_PLAN: (),
    ResultKind.QUIZ_QUESTIONS: (),
}

_UNESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\", "/": "/"}
_ESCAPE_SEQ_RE = re.compile(r"\\(.)", re.DOTALL)
_QUOTE_WRAP_RE = re.compile(r"^[\"']|[\"']$")


@dataclass(frozen=True)
class ParseOutcome:
    """Generic mapping recovered from a response plus how it was obtained."""

    data: dict[str, Any] = field(default_factory=dict)
    strict: bool = False

    @property
    def usable(self) -> bool:
        return bool(self.data)


def _strict_mapping(text: str) -> dict[str, Any] | None:
    try:
        value = json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return None
    return value if isinstance(value, dict) else None


def _embedded_object(text: str) -> dict[str, Any] | None:
    """Obtiene el primer objeto JSON embebido entre prosa (primer `{` .. último `}`)."""

    start = text.find("{")
    end = text.rfind("}")
    if 0 <= start < end:
        return _strict_mapping(text[start : end + 1])
    return None


def _unescape(value: str) -> str:
    return _ESCAPE_SEQ_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(0)), value)


def _extract_text(source: str, name: str) -> str | None:
    pattern = re.compile(
        r'"' + re.escape(name) + r'"\s*:\s*(?:`([^`]*)(?:`|\Z)|"((?:[^"\\]|\\.)*)(?:"|\Z))',
        re.DOTALL,
    )
    match = pattern.search(source)
    if not match:
        return None
    if match.group(1) is not None:
        return match.group(1)
    return _unescape(match.group(2))


def _extract_list(source: str, name: str) -> list[str] | None:
    match = re.search(r'"' + re.escape(name) + r'"\s*:\s*\[(.*?)\]', source, re.DOTALL)
    if not match:
        return None
    items = [_QUOTE_WRAP_RE.sub("", item.strip()) for item in match.group(1).split(",")]
    return [item for item in items if item]


def _extract_number(source: str, name: str) -> str | None:
    match = re.search(r'"' + re.escape(name) + r'"\s*:\s*"?(-?\d+(?:\.\d+)?)', source)
    return match.group(1) if match else None


_EXTRACTORS = {
    "text": _extract_text,
    "list": _extract_list,
    "number": _extract_number,
}


def extract_fields(source: str, kind: ResultKind) -> dict[str, Any]:
    """Per-field regex salvage; only fields that were actually found are returned."""

    out: dict[str, Any] = {}
    for name, field_type in EXTRACTABLE_FIELDS[kind]:
        value = _EXTRACTORS[field_type](source, name)
        if value is not None:
            out[name] = value
    return out


def parse_structured(text: str, kind: ResultKind, *, fallback_source: str | None = None) -> ParseOutcome:
    """Strict parse of `text`; on failure, salvage fields from `fallback_source`.

    `fallback_source` defaults to `text`. Callers pass the pre-repair text so a
    truncation cut does not hide fields from the extractor.
    """

    data = _strict_mapping(text)
    if data is None:
        data = _embedded_object(text)
    if data:
        return ParseOutcome(data=data, strict=True)

    source = fallback_source if fallback_source is not None else text
    logger.debug("Strict JSON parse failed for %s; falling back to field extraction", kind.value)
    extracted = extract_fields(source, kind)
    if not extracted and data is not None:
        # Strict parse produced an empty object: still a strict success.
        return ParseOutcome(data={}, strict=True)
    return ParseOutcome(data=extracted, strict=False)
