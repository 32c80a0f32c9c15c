"""Exportación de planes de aprendizaje (HTML/PDF).

Por qué está en adapters:
- PDF/HTML son detalles de infraestructura (WeasyPrint/Jinja2).
- El Core solo conoce el agregado `Course`.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import Course
from core.progress import course_progress_percent, current_day, day_progress_percent, days_remaining

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_course_html(*, course: Course, today: date | None = None) -> str:
    """Renderiza un HTML autocontenido con el plan y el progreso del curso."""

    today = today or date.today()
    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")

    lessons = sorted(course.lessons, key=lambda lesson: lesson.day_number)
    completed = {(p.day_number, p.subtopic_index) for p in course.progress if p.completed}
    day_progress = {lesson.day_number: round(day_progress_percent(course, lesson.day_number)) for lesson in lessons}

    template = _get_env().get_template("course.html")
    return template.render(
        course=course,
        lessons=lessons,
        completed=completed,
        day_progress=day_progress,
        generated_at=generated_at,
        progress_percent=course_progress_percent(course, today),
        days_remaining=days_remaining(course, today),
        current_day=current_day(course, today),
    )


def export_course_html(*, course: Course, output_path: Path) -> Path:
    """Exporta el curso como HTML.

    Por qué existe:
    - Sirve como fallback cuando el render PDF no está soportado por el entorno.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_course_html(course=course), encoding="utf-8")
    return output_path


def export_course_pdf(*, course: Course, output_path: Path) -> Path:
    """Exporta el curso como PDF.

    Diseño:
    - Sincrónico: WeasyPrint es CPU/IO local.
    - Import perezoso: WeasyPrint necesita librerías nativas (Pango); si faltan,
      el error llega al llamador, que cae a HTML.
    """

    from weasyprint import HTML  # noqa: PLC0415

    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_course_html(course=course)
    HTML(string=html, base_url=str(_TEMPLATES_DIR)).write_pdf(str(output_path))
    return output_path
