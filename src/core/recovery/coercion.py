"""Domain coercion layer.

Maps a generic `ParsedObject` (dict) into one of the five result models.
Every field is defaulted when missing or of the wrong type, so this layer
never raises.
"""

from __future__ import annotations

import math
from typing import Any, Callable

from core.domain.models import (
    DayPlan,
    DetailedContent,
    DomainResult,
    GradingResult,
    LearningPlan,
    McqQuestion,
    QuizQuestionSet,
    ResultKind,
    TheoryQuestion,
    TutorAnswer,
)

CONTENT_NOT_AVAILABLE = "Content not available"
NO_FEEDBACK_AVAILABLE = "No feedback available"

SCORE_MIN = 0.0
SCORE_MAX = 10.0


def as_text(value: object, default: str = "") -> str:
    """String value, or `default` for missing/empty/structured values."""

    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value
    return default


def as_text_list(value: object) -> list[str]:
    """List of non-empty strings; anything that is not a list becomes `[]`."""

    if not isinstance(value, list):
        return []
    out: list[str] = []
    for item in value:
        if isinstance(item, (dict, list)) or item is None or item is False:
            continue
        text = str(item).strip()
        if text:
            out.append(text)
    return out


def as_score(value: object) -> float:
    """Numeric score clamped to [0, 10]; non-numeric or missing -> 0."""

    if isinstance(value, bool) or value is None:
        return SCORE_MIN
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return SCORE_MIN
    else:
        return SCORE_MIN
    if math.isnan(number):
        return SCORE_MIN
    return max(SCORE_MIN, min(SCORE_MAX, number))


def _as_day_number(value: object, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _dicts(value: object) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def coerce_learning_plan(data: dict[str, Any]) -> LearningPlan:
    days: list[DayPlan] = []
    for position, item in enumerate(_dicts(data.get("days")), start=1):
        day = _as_day_number(item.get("day"), position)
        days.append(
            DayPlan(
                day=day,
                title=as_text(item.get("title"), f"Day {day}"),
                subtopics=as_text_list(item.get("subtopics")),
                explanations=as_text_list(item.get("explanations")),
            )
        )
    return LearningPlan(days=days)


def coerce_detailed_content(data: dict[str, Any]) -> DetailedContent:
    return DetailedContent(
        content=as_text(data.get("content"), CONTENT_NOT_AVAILABLE),
        key_points=as_text_list(data.get("keyPoints")),
        examples=as_text_list(data.get("examples")),
        practical_applications=as_text_list(data.get("practicalApplications")),
    )


def coerce_quiz_questions(data: dict[str, Any]) -> QuizQuestionSet:
    mcq = [
        McqQuestion(
            question=as_text(q.get("question")),
            options=as_text_list(q.get("options")),
            correct_answer=as_text(q.get("correct_answer")),
            explanation=as_text(q.get("explanation")),
        )
        for q in _dicts(data.get("mcq"))
    ]
    theory = [
        TheoryQuestion(
            question=as_text(q.get("question")),
            correct_answer=as_text(q.get("correct_answer")),
            key_points=as_text_list(q.get("key_points")),
        )
        for q in _dicts(data.get("theory"))
    ]
    return QuizQuestionSet(mcq=mcq, theory=theory)


def coerce_grading(data: dict[str, Any]) -> GradingResult:
    return GradingResult(
        score=as_score(data.get("score")),
        feedback=as_text(data.get("feedback"), NO_FEEDBACK_AVAILABLE),
        strengths=as_text_list(data.get("strengths")),
        improvements=as_text_list(data.get("improvements")),
    )


def coerce_tutor_answer(data: dict[str, Any]) -> TutorAnswer:
    return TutorAnswer(
        answer=as_text(data.get("answer")),
        code_examples=as_text_list(data.get("codeExamples")),
        related_concepts=as_text_list(data.get("relatedConcepts")),
        further_reading=as_text_list(data.get("furtherReading")),
    )


_COERCERS: dict[ResultKind, Callable[[dict[str, Any]], DomainResult]] = {
    ResultKind.LEARNING_PLAN: coerce_learning_plan,
    ResultKind.DETAILED_CONTENT: coerce_detailed_content,
    ResultKind.QUIZ_QUESTIONS: coerce_quiz_questions,
    ResultKind.GRADING: coerce_grading,
    ResultKind.TUTOR_ANSWER: coerce_tutor_answer,
}


def coerce(data: object, kind: ResultKind) -> DomainResult:
    """Build the `kind` result from a parsed mapping (non-mappings count as empty)."""

    mapping = data if isinstance(data, dict) else {}
    return _COERCERS[kind](mapping)
