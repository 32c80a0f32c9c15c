"""Quiz scoring and course progress.

Pure helpers shared by the CLI and any other entry point: answer checking
for multiple-choice questions, session summaries and calendar-based course
progress.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from core.domain.models import Course, GradingResult, McqQuestion, QuizResponse

MAX_QUESTION_SCORE = 10
THEORY_PASS_SCORE = 7


@dataclass(frozen=True)
class AnswerEvaluation:
    is_correct: bool
    score: float
    feedback: str


@dataclass(frozen=True)
class QuizSummary:
    total_score: float
    max_score: int
    percentage: int
    correct_answers: int

    @property
    def grade(self) -> str:
        if self.percentage >= 80:
            return "A"
        if self.percentage >= 70:
            return "B"
        if self.percentage >= 60:
            return "C"
        return "F"


def evaluate_mcq(question: McqQuestion, answer: str) -> AnswerEvaluation:
    explanation = question.explanation
    if answer == question.correct_answer:
        return AnswerEvaluation(
            is_correct=True,
            score=MAX_QUESTION_SCORE,
            feedback="Correct! " + (explanation or "Well done!"),
        )
    return AnswerEvaluation(
        is_correct=False,
        score=0,
        feedback=f"Incorrect. The correct answer is: {question.correct_answer}. {explanation}".strip(),
    )


def evaluate_theory(grading: GradingResult) -> AnswerEvaluation:
    return AnswerEvaluation(
        is_correct=grading.score >= THEORY_PASS_SCORE,
        score=grading.score,
        feedback=grading.feedback,
    )


def summarize_quiz(responses: Sequence[QuizResponse], question_count: int) -> QuizSummary:
    total = sum(r.score or 0 for r in responses)
    max_score = question_count * MAX_QUESTION_SCORE
    percentage = round(total / max_score * 100) if max_score else 0
    return QuizSummary(
        total_score=total,
        max_score=max_score,
        percentage=percentage,
        correct_answers=sum(1 for r in responses if r.is_correct),
    )


def _days_passed(course: Course, today: date) -> int:
    return (today - course.start_date).days


def course_progress_percent(course: Course, today: date | None = None) -> int:
    """Calendar progress: elapsed days over duration, clamped to 0..100."""

    today = today or date.today()
    ratio = _days_passed(course, today) / course.duration_days
    return round(min(max(ratio, 0.0), 1.0) * 100)


def days_remaining(course: Course, today: date | None = None) -> int:
    today = today or date.today()
    return max(math.ceil(course.duration_days - _days_passed(course, today)), 0)


def current_day(course: Course, today: date | None = None) -> int:
    today = today or date.today()
    return min(max(_days_passed(course, today) + 1, 1), course.duration_days)


def day_progress_percent(course: Course, day_number: int) -> float:
    """Completed subtopics of `day_number` over its subtopic count (0 when empty)."""

    lesson = course.lesson_for_day(day_number)
    total = len(lesson.subtopics) if lesson else 0
    if total == 0:
        return 0.0
    completed = sum(1 for p in course.progress if p.day_number == day_number and p.completed)
    return completed / total * 100
