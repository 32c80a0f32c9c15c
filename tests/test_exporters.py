import json
from datetime import date

from adapters.course_store import lessons_from_plan
from adapters.json_exporter import export_course_json
from adapters.plan_exporter import export_course_html, render_course_html
from core.domain.models import Course, ProgressEntry
from core.fallbacks import fallback_learning_plan


def _course() -> Course:
    return Course(
        id="c0ffee",
        topic="Rust <basics>",
        duration_days=2,
        current_level="beginner",
        daily_time="1 hour",
        start_date=date(2026, 1, 1),
        lessons=lessons_from_plan(fallback_learning_plan("Rust", 2)),
        progress=[ProgressEntry(day_number=1, subtopic_index=0, completed=True)],
    )


def test_json_export(tmp_path):
    path = export_course_json(course=_course(), output_path=tmp_path / "out" / "course.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["id"] == "c0ffee"
    assert data["start_date"] == "2026-01-01"
    assert len(data["lessons"]) == 2


def test_html_render():
    html = render_course_html(course=_course(), today=date(2026, 1, 2))
    assert "Rust &lt;basics&gt;" in html
    assert "<h2>Day 1: Introduction to Rust</h2>" in html
    assert "Course progress: 50%" in html
    assert "Basic concepts of Rust ✓" in html
    assert "Learn the fundamental concepts and principles of Rust." in html


def test_html_export(tmp_path):
    path = export_course_html(course=_course(), output_path=tmp_path / "course.html")
    assert path.read_text(encoding="utf-8").startswith("<!doctype html>")


def test_json_export_includes_progress_summary(tmp_path):
    path = export_course_json(course=_course(), output_path=tmp_path / "course.json", today=date(2026, 1, 2))
    summary = json.loads(path.read_text(encoding="utf-8"))["summary"]
    assert summary == {
        "as_of": "2026-01-02",
        "progress_percent": 50,
        "days_remaining": 1,
        "current_day": 2,
        "day_progress": {"1": 33, "2": 0},
        "quiz_responses": 0,
    }
