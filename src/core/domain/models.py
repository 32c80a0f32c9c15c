"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación y documentación autocontenida (Field) sin acoplar el Core a
  librerías de I/O.
- Los nombres de campo del proveedor IA (camelCase) se conservan como alias,
  así `model_dump(by_alias=True)` devuelve exactamente el contrato del prompt.

Nota:
- Estos modelos describen *qué* produce la generación, no *cómo* se recupera.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ResultKind(str, Enum):
    """Tag for the five result shapes produced by the generation core."""

    LEARNING_PLAN = "learning_plan"
    DETAILED_CONTENT = "detailed_content"
    QUIZ_QUESTIONS = "quiz_questions"
    GRADING = "grading"
    TUTOR_ANSWER = "tutor_answer"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class DayPlan(_WireModel):
    day: int = Field(..., ge=1, description="1-based day number.")
    title: str = Field(default="", description="Day title.")
    subtopics: list[str] = Field(default_factory=list)
    explanations: list[str] = Field(
        default_factory=list,
        description="Brief overview per subtopic (same order as `subtopics`).",
    )


class LearningPlan(_WireModel):
    kind: Literal[ResultKind.LEARNING_PLAN] = Field(default=ResultKind.LEARNING_PLAN, exclude=True)
    days: list[DayPlan] = Field(default_factory=list)


class DetailedContent(_WireModel):
    kind: Literal[ResultKind.DETAILED_CONTENT] = Field(default=ResultKind.DETAILED_CONTENT, exclude=True)
    content: str = Field(default="Content not available", description="Markdown lesson body.")
    key_points: list[str] = Field(default_factory=list, alias="keyPoints")
    examples: list[str] = Field(default_factory=list)
    practical_applications: list[str] = Field(default_factory=list, alias="practicalApplications")


class McqQuestion(_WireModel):
    question: str = ""
    options: list[str] = Field(default_factory=list)
    correct_answer: str = ""
    explanation: str = ""


class TheoryQuestion(_WireModel):
    question: str = ""
    correct_answer: str = ""
    key_points: list[str] = Field(default_factory=list)


class QuizQuestionSet(_WireModel):
    kind: Literal[ResultKind.QUIZ_QUESTIONS] = Field(default=ResultKind.QUIZ_QUESTIONS, exclude=True)
    mcq: list[McqQuestion] = Field(default_factory=list)
    theory: list[TheoryQuestion] = Field(default_factory=list)


class GradingResult(_WireModel):
    kind: Literal[ResultKind.GRADING] = Field(default=ResultKind.GRADING, exclude=True)
    score: float = Field(default=0, ge=0, le=10, description="Score on a 0..10 scale.")
    feedback: str = "No feedback available"
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class TutorAnswer(_WireModel):
    kind: Literal[ResultKind.TUTOR_ANSWER] = Field(default=ResultKind.TUTOR_ANSWER, exclude=True)
    answer: str = ""
    code_examples: list[str] = Field(default_factory=list, alias="codeExamples")
    related_concepts: list[str] = Field(default_factory=list, alias="relatedConcepts")
    further_reading: list[str] = Field(default_factory=list, alias="furtherReading")


DomainResult = Union[LearningPlan, DetailedContent, QuizQuestionSet, GradingResult, TutorAnswer]


class LearningPreferences(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    include_code: bool = Field(default=True, alias="includeCode")
    preferred_example_types: list[str] = Field(default_factory=list, alias="preferredExampleTypes")
    focus_areas: list[str] = Field(default_factory=list, alias="focusAreas")


class UserProfile(BaseModel):
    """Perfil del estudiante (solo lectura para el Core).

    Por qué existe:
    - Ajusta el texto del prompt (profesión, código sí/no, tipos de ejemplo).
    """

    highest_qualification: str = ""
    specialization: str = ""
    profession: str = ""
    learning_preferences: LearningPreferences = Field(default_factory=LearningPreferences)


class DailyLesson(BaseModel):
    day_number: int = Field(..., ge=1)
    title: str
    subtopics: list[str] = Field(default_factory=list)
    explanations: list[str] = Field(default_factory=list)


class ProgressEntry(BaseModel):
    day_number: int = Field(..., ge=1)
    subtopic_index: int = Field(..., ge=0)
    completed: bool = False
    completed_at: datetime | None = None


class QuizResponse(BaseModel):
    day_number: int = Field(..., ge=1)
    question: str
    type: Literal["mcq", "theory"]
    user_answer: str
    is_correct: bool = False
    score: float | None = None
    feedback: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Course(BaseModel):
    """Agregado persistido: un plan de aprendizaje con su progreso.

    Por qué un agregado:
    - Un único documento por curso facilita exportación y persistencia local.
    """

    id: str = Field(..., min_length=1)
    topic: str = Field(..., min_length=1)
    duration_days: int = Field(..., ge=1)
    current_level: str = ""
    daily_time: str = ""
    start_date: date = Field(default_factory=date.today)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    lessons: list[DailyLesson] = Field(default_factory=list)
    progress: list[ProgressEntry] = Field(default_factory=list)
    quiz_responses: list[QuizResponse] = Field(default_factory=list)

    def lesson_for_day(self, day_number: int) -> DailyLesson | None:
        for lesson in self.lessons:
            if lesson.day_number == day_number:
                return lesson
        return None
