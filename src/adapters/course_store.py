"""Persistencia local de cursos (JSON por curso).

Por qué JSON en disco:
- Un documento por curso (plan + progreso + respuestas de quiz) cubre las
  operaciones fila-a-fila que necesita la aplicación sin un servidor de BD.
- Mismo formato estable que el exportador JSON (UTF-8, claves ordenadas).

Los errores de persistencia se propagan: el Core no depende de este módulo.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date, datetime
from pathlib import Path

from core.config import AppSettings
from core.domain.models import (
    Course,
    DailyLesson,
    LearningPlan,
    ProgressEntry,
    QuizResponse,
    UserProfile,
)

logger = logging.getLogger(__name__)

_PROFILE_FILE = "profile.json"


class CourseNotFoundError(LookupError):
    """No course is stored under the requested id."""

    def __init__(self, course_id: str) -> None:
        super().__init__(f"Course not found: {course_id}")
        self.course_id = course_id


def lessons_from_plan(plan: LearningPlan) -> list[DailyLesson]:
    return [
        DailyLesson(
            day_number=day.day,
            title=day.title,
            subtopics=list(day.subtopics),
            explanations=list(day.explanations),
        )
        for day in plan.days
    ]


def write_json(path: Path, payload: object) -> None:
    """Stable UTF-8 JSON (sorted keys, 2-space indent) shared by the store and exports."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )


class CourseStore:
    """CRUD sobre `<root>/<course_id>.json` y el perfil del usuario."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "CourseStore":
        settings = settings or AppSettings()
        return cls(settings.resolved_data_dir())

    @property
    def root(self) -> Path:
        return self._root

    def _course_path(self, course_id: str) -> Path:
        if not course_id or "/" in course_id or "\\" in course_id or course_id.startswith("."):
            raise CourseNotFoundError(course_id)
        return self._root / f"{course_id}.json"

    def save_course(self, course: Course) -> Course:
        course.updated_at = datetime.utcnow()
        write_json(self._course_path(course.id), course.model_dump(mode="json"))
        return course

    def create_course(
        self,
        *,
        topic: str,
        duration_days: int,
        current_level: str,
        daily_time: str,
        plan: LearningPlan,
        start_date: date | None = None,
    ) -> Course:
        course = Course(
            id=uuid.uuid4().hex[:12],
            topic=topic,
            duration_days=duration_days,
            current_level=current_level,
            daily_time=daily_time,
            start_date=start_date or date.today(),
            lessons=lessons_from_plan(plan),
        )
        logger.info("Created course %s (%s, %d lessons)", course.id, topic, len(course.lessons))
        return self.save_course(course)

    def get_course(self, course_id: str) -> Course:
        path = self._course_path(course_id)
        if not path.is_file():
            raise CourseNotFoundError(course_id)
        return Course.model_validate_json(path.read_text(encoding="utf-8"))

    def list_courses(self) -> list[Course]:
        if not self._root.is_dir():
            return []
        courses: list[Course] = []
        for path in self._root.glob("*.json"):
            if path.name == _PROFILE_FILE:
                continue
            try:
                courses.append(Course.model_validate_json(path.read_text(encoding="utf-8")))
            except ValueError as exc:
                logger.warning("Skipping unreadable course file %s: %s", path, exc)
        return sorted(courses, key=lambda c: c.created_at, reverse=True)

    def delete_course(self, course_id: str) -> None:
        path = self._course_path(course_id)
        if not path.is_file():
            raise CourseNotFoundError(course_id)
        path.unlink()

    def toggle_progress(self, course_id: str, day_number: int, subtopic_index: int) -> ProgressEntry:
        """Flip completion of one subtopic (upsert on day/subtopic)."""

        course = self.get_course(course_id)
        entry = next(
            (
                p
                for p in course.progress
                if p.day_number == day_number and p.subtopic_index == subtopic_index
            ),
            None,
        )
        if entry is None:
            entry = ProgressEntry(day_number=day_number, subtopic_index=subtopic_index)
            course.progress.append(entry)
        entry.completed = not entry.completed
        entry.completed_at = datetime.utcnow() if entry.completed else None
        self.save_course(course)
        return entry

    def get_progress(self, course_id: str, day_number: int | None = None) -> list[ProgressEntry]:
        progress = self.get_course(course_id).progress
        if day_number is None:
            return list(progress)
        return [p for p in progress if p.day_number == day_number]

    def record_quiz_response(self, course_id: str, response: QuizResponse) -> QuizResponse:
        course = self.get_course(course_id)
        course.quiz_responses.append(response)
        self.save_course(course)
        return response

    def list_quiz_responses(self, course_id: str, day_number: int | None = None) -> list[QuizResponse]:
        responses = self.get_course(course_id).quiz_responses
        if day_number is None:
            return list(responses)
        return [r for r in responses if r.day_number == day_number]

    def save_profile(self, profile: UserProfile) -> Path:
        path = self._root / _PROFILE_FILE
        write_json(path, profile.model_dump(mode="json", by_alias=True))
        return path

    def load_profile(self) -> UserProfile | None:
        path = self._root / _PROFILE_FILE
        if not path.is_file():
            return None
        return UserProfile.model_validate_json(path.read_text(encoding="utf-8"))
