import asyncio
import json
import sys

import pytest
from typer.testing import CliRunner

from adapters.course_store import CourseStore
from cli import doctor
from cli.main import app, grade_quiz_session, sanitize_for_filename
from core.config import AppSettings, read_env_file
from core.domain.models import McqQuestion, QuizQuestionSet, TheoryQuestion
from core.services.generation import LearningAssistant

runner = CliRunner()


@pytest.fixture
def data_dir(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NEURALEARN_AI_API_KEY", "")
    monkeypatch.setenv("NEURALEARN_AI_BASE_URL", "https://api.groq.com/openai/v1")
    monkeypatch.setenv("NEURALEARN_DATA_DIR", str(tmp_path / "courses"))
    return tmp_path / "courses"


def _plan(data_dir, topic: str = "Rust", days: int = 3) -> str:
    result = runner.invoke(app, ["plan", topic, "--days", str(days)])
    assert result.exit_code == 0, result.output
    assert "Saved course" in result.output
    return CourseStore(data_dir).list_courses()[0].id


def test_plan_offline_saves_fallback_course(data_dir):
    course_id = _plan(data_dir)
    course = CourseStore(data_dir).get_course(course_id)
    assert [lesson.title for lesson in course.lessons] == [f"Day {n}: Introduction to Rust" for n in (1, 2, 3)]

    result = runner.invoke(app, ["courses"])
    assert result.exit_code == 0
    assert course_id in result.output


def test_quiz_offline_records_responses(data_dir):
    course_id = _plan(data_dir)
    result = runner.invoke(app, ["quiz", course_id, "1"], input="1\nshort answer\n")
    assert result.exit_code == 0, result.output

    responses = CourseStore(data_dir).list_quiz_responses(course_id)
    assert [r.type for r in responses] == ["mcq", "theory"]
    assert responses[0].is_correct
    assert responses[1].score == 5
    assert "75%" in result.output


def test_progress_toggle(data_dir):
    course_id = _plan(data_dir)
    result = runner.invoke(app, ["progress", course_id, "1", "0"])
    assert result.exit_code == 0
    assert "completed" in result.output
    assert CourseStore(data_dir).get_progress(course_id)[0].completed


def test_unknown_course(data_dir):
    result = runner.invoke(app, ["lesson", "missing", "1", "0"])
    assert result.exit_code == 1
    assert "Course not found" in result.output


def test_export_json(data_dir, tmp_path):
    course_id = _plan(data_dir)
    out = tmp_path / "course.json"
    result = runner.invoke(app, ["export", course_id, "--format", "json", "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["id"] == course_id


def test_delete(data_dir):
    course_id = _plan(data_dir)
    result = runner.invoke(app, ["delete", course_id, "--yes"])
    assert result.exit_code == 0
    assert CourseStore(data_dir).list_courses() == []


def test_sanitize_for_filename():
    assert sanitize_for_filename("Rust / Async") == "Rust---Async"
    assert sanitize_for_filename("  ") == "course"


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="XDG config dir")
def test_setup_ai_local_preset_skips_key(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    result = runner.invoke(app, ["doctor", "setup-ai"], input="ollama\n\n\n")
    assert result.exit_code == 0, result.output

    env = read_env_file(tmp_path / "xdg" / "neuralearn" / ".env")
    assert env == {"NEURALEARN_AI_BASE_URL": "http://localhost:11434/v1", "NEURALEARN_AI_MODEL": "llama3"}


def test_store_check(tmp_path):
    result = doctor._check_store(AppSettings(data_dir=tmp_path / "store"))
    assert not result.failed
    assert result.detail == str(tmp_path / "store")


def test_quiz_session_grades_collected_answers(settings, fake_client):
    questions = QuizQuestionSet(
        mcq=[McqQuestion(question="Q1", options=["A", "B"], correct_answer="B", explanation="E")],
        theory=[TheoryQuestion(question="Q2", correct_answer="C", key_points=["k"])],
    )
    fake_client.responses.append('{"score": 8, "feedback": "Solid"}')

    graded = asyncio.run(
        grade_quiz_session(
            LearningAssistant(fake_client, settings),
            questions,
            day=2,
            mcq_answers=["A"],
            theory_answers=["my answer"],
        )
    )

    assert [g.response.type for g in graded] == ["mcq", "theory"]
    assert not graded[0].response.is_correct and graded[0].grading is None
    assert graded[1].response.is_correct and graded[1].response.score == 8
    assert graded[1].grading.feedback == "Solid"
    assert all(g.response.day_number == 2 for g in graded)
    assert "User Answer: my answer" in fake_client.calls[0]["messages"][0]["content"]
