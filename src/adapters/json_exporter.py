"""Exportación JSON de un curso.

El documento es el mismo que guarda el store más un bloque `summary` con el
progreso calculado a la fecha de exportación, para que otras herramientas no
tengan que reimplementar las reglas de calendario.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from adapters.course_store import write_json
from core.domain.models import Course
from core.progress import course_progress_percent, current_day, day_progress_percent, days_remaining


def course_summary(course: Course, today: date | None = None) -> dict[str, Any]:
    today = today or date.today()
    return {
        "as_of": today.isoformat(),
        "progress_percent": course_progress_percent(course, today),
        "days_remaining": days_remaining(course, today),
        "current_day": current_day(course, today),
        "day_progress": {
            str(lesson.day_number): round(day_progress_percent(course, lesson.day_number))
            for lesson in course.lessons
        },
        "quiz_responses": len(course.quiz_responses),
    }


def export_course_json(*, course: Course, output_path: Path, today: date | None = None) -> Path:
    payload = course.model_dump(mode="json")
    payload["summary"] = course_summary(course, today)
    write_json(output_path, payload)
    return output_path
