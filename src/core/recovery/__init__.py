"""Structured-output recovery pipeline.

Normalize -> Repair -> Parse-or-Extract -> Coerce. Each stage is a pure
function and can be used (and tested) on its own; `recover` chains them.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.models import DomainResult, ResultKind
from core.recovery.coercion import coerce
from core.recovery.extraction import ParseOutcome, parse_structured
from core.recovery.normalizer import normalize_response
from core.recovery.repair import repair_json_text


@dataclass(frozen=True)
class Recovery:
    """Result of running the pipeline over one raw model response."""

    result: DomainResult
    outcome: ParseOutcome
    normalized: str
    repaired: str


def recover(raw: str, kind: ResultKind) -> Recovery:
    normalized = normalize_response(raw)
    repaired = repair_json_text(normalized)
    outcome = parse_structured(repaired, kind, fallback_source=normalized)
    return Recovery(
        result=coerce(outcome.data, kind),
        outcome=outcome,
        normalized=normalized,
        repaired=repaired,
    )


__all__ = [
    "ParseOutcome",
    "Recovery",
    "coerce",
    "normalize_response",
    "parse_structured",
    "recover",
    "repair_json_text",
]
