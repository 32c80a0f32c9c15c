from datetime import date

import pytest

from core.domain.models import (
    Course,
    DailyLesson,
    GradingResult,
    McqQuestion,
    ProgressEntry,
    QuizResponse,
)
from core.progress import (
    QuizSummary,
    course_progress_percent,
    current_day,
    day_progress_percent,
    days_remaining,
    evaluate_mcq,
    evaluate_theory,
    summarize_quiz,
)


@pytest.fixture
def course() -> Course:
    return Course(
        id="abc",
        topic="Rust",
        duration_days=10,
        start_date=date(2026, 1, 1),
        lessons=[DailyLesson(day_number=1, title="Basics", subtopics=["a", "b", "c", "d"])],
        progress=[
            ProgressEntry(day_number=1, subtopic_index=0, completed=True),
            ProgressEntry(day_number=1, subtopic_index=1, completed=False),
        ],
    )


def test_mcq_evaluation():
    question = McqQuestion(question="Q", options=["A", "B"], correct_answer="A", explanation="Because.")
    right = evaluate_mcq(question, "A")
    wrong = evaluate_mcq(question, "B")
    assert right.is_correct and right.score == 10
    assert right.feedback == "Correct! Because."
    assert not wrong.is_correct and wrong.score == 0
    assert wrong.feedback == "Incorrect. The correct answer is: A. Because."


def test_theory_pass_threshold():
    assert evaluate_theory(GradingResult(score=7)).is_correct
    assert not evaluate_theory(GradingResult(score=6.5)).is_correct


def test_quiz_summary():
    responses = [
        QuizResponse(day_number=1, question="q1", type="mcq", user_answer="A", is_correct=True, score=10),
        QuizResponse(day_number=1, question="q2", type="theory", user_answer="x", is_correct=False, score=5),
    ]
    summary = summarize_quiz(responses, 2)
    assert summary.total_score == 15
    assert summary.max_score == 20
    assert summary.percentage == 75
    assert summary.correct_answers == 1
    assert summary.grade == "B"


@pytest.mark.parametrize(("percentage", "grade"), [(80, "A"), (70, "B"), (60, "C"), (59, "F")])
def test_grade_letters(percentage, grade):
    assert QuizSummary(0, 0, percentage, 0).grade == grade


def test_empty_quiz_summary():
    assert summarize_quiz([], 0).percentage == 0


@pytest.mark.parametrize(
    ("today", "percent", "remaining", "day"),
    [
        (date(2026, 1, 6), 50, 5, 6),
        (date(2025, 12, 30), 0, 12, 1),
        (date(2026, 2, 1), 100, 0, 10),
    ],
)
def test_calendar_progress(course, today, percent, remaining, day):
    assert course_progress_percent(course, today) == percent
    assert days_remaining(course, today) == remaining
    assert current_day(course, today) == day


def test_day_progress(course):
    assert day_progress_percent(course, 1) == 25
    assert day_progress_percent(course, 2) == 0
