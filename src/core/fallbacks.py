"""Deterministic local results used when the model is unavailable.

Por qué existe:
- La aplicación debe seguir siendo usable sin credenciales ni red: cada
  operación tiene un resultado local calculado solo con sus entradas.
"""

from __future__ import annotations

from typing import Sequence

from core.domain.models import (
    DayPlan,
    DetailedContent,
    GradingResult,
    LearningPlan,
    McqQuestion,
    QuizQuestionSet,
    TheoryQuestion,
    TutorAnswer,
)

MAX_FALLBACK_DAYS = 7
CONTENT_NOT_EXTRACTED = "Content could not be extracted from the response."
NO_TUTOR_RESPONSE = "Sorry, I could not generate a response."


def fallback_learning_plan(topic: str, duration_days: int) -> LearningPlan:
    days = [
        DayPlan(
            day=n,
            title=f"Day {n}: Introduction to {topic}",
            subtopics=[
                f"Basic concepts of {topic}",
                f"Getting started with {topic}",
                "Practical applications",
            ],
            explanations=[
                f"Learn the fundamental concepts and principles of {topic}.",
                "Set up your development environment and create your first project.",
                "Explore real-world applications and use cases.",
            ],
        )
        for n in range(1, min(duration_days, MAX_FALLBACK_DAYS) + 1)
    ]
    return LearningPlan(days=days)


def fallback_detailed_content(topic: str, subtopic: str) -> DetailedContent:
    return DetailedContent(
        content=(
            f"# {subtopic}\n\nThis is a detailed explanation of {subtopic} in the context of {topic}. "
            "The content would normally be generated by AI, but the API is not currently available."
        ),
        key_points=[f"Key concept 1 about {subtopic}", f"Key concept 2 about {subtopic}"],
        examples=[f"Example 1 for {subtopic}", f"Example 2 for {subtopic}"],
        practical_applications=[f"Application 1 of {subtopic}", f"Application 2 of {subtopic}"],
    )


def fallback_quiz_questions(
    day_title: str,
    subtopics: Sequence[str],
    explanations: Sequence[str],
) -> QuizQuestionSet:
    return QuizQuestionSet(
        mcq=[
            McqQuestion(
                question=f"What is the main focus of {day_title}?",
                options=list(subtopics[:4]),
                correct_answer=subtopics[0] if subtopics else "Understanding the basics",
                explanation="This question tests understanding of the lesson structure.",
            )
        ],
        theory=[
            TheoryQuestion(
                question=f"Explain the key concepts covered in {day_title}.",
                correct_answer=f"The lesson covers: {', '.join(subtopics)}. {' '.join(explanations)}".strip(),
                key_points=list(subtopics[:3]),
            )
        ],
    )


def fallback_grading(user_answer: str) -> GradingResult:
    score = 7 if len(user_answer) > 50 else 5
    quality = "good" if score >= 7 else "basic"
    return GradingResult(
        score=score,
        feedback=f"Your answer shows {quality} understanding. Consider elaborating more on the key concepts.",
        strengths=["Attempted to answer the question"],
        improvements=["Provide more detailed explanations", "Include specific examples"],
    )


def fallback_tutor_answer(question: str) -> TutorAnswer:
    return TutorAnswer(
        answer=(
            f'I understand you\'re asking about: "{question}". While I can\'t provide a detailed AI-generated '
            "response right now, I recommend reviewing the lesson content and exploring the detailed "
            "explanations for each subtopic."
        ),
    )
