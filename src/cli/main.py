"""CLI principal (Typer).

Por qué aquí:
- La CLI solo compone: settings -> cliente IA -> `LearningAssistant` -> store.
- Toda la lógica de generación/recuperación vive en el Core; aquí solo hay
  prompts interactivos y presentación (Rich).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Sequence, TypeVar

import typer
from rich.console import Console

from adapters.ai_client import build_completion_client
from adapters.course_store import CourseNotFoundError, CourseStore
from adapters.json_exporter import export_course_json
from adapters.plan_exporter import export_course_html, export_course_pdf
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_content_panel,
    build_courses_table,
    build_grading_panel,
    build_plan_table,
    build_quiz_summary_panel,
    build_tutor_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import (
    Course,
    DailyLesson,
    GradingResult,
    LearningPreferences,
    McqQuestion,
    QuizQuestionSet,
    QuizResponse,
    TheoryQuestion,
    UserProfile,
)
from core.domain.professions import known_professions
from core.progress import day_progress_percent, evaluate_mcq, evaluate_theory, summarize_quiz
from core.prompts import lesson_context
from core.services.generation import LearningAssistant

app = typer.Typer(no_args_is_help=True, help="AI-assisted learning plans, lessons, quizzes and tutoring.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

T = TypeVar("T")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _run_with_assistant(settings: AppSettings, action: Callable[[LearningAssistant], Awaitable[T]]) -> T:
    async def _runner() -> T:
        client = build_completion_client(settings)
        assistant = LearningAssistant(client, settings)
        try:
            return await action(assistant)
        finally:
            if client is not None:
                await client.aclose()

    return asyncio.run(_runner())


def _load_course(store: CourseStore, course_id: str) -> Course:
    try:
        return store.get_course(course_id)
    except CourseNotFoundError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


def _load_lesson(course: Course, day: int) -> DailyLesson:
    lesson = course.lesson_for_day(day)
    if lesson is None:
        _console.print(f"[red]Course {course.id} has no lesson for day {day}.[/red]")
        raise typer.Exit(code=1)
    return lesson


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def sanitize_for_filename(value: str) -> str:
    """Generate a filesystem-friendly slug for exports."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_", "."):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_")
    return cleaned or "course"


@app.command()
def plan(
    topic: str = typer.Argument(..., help="What you want to learn."),
    days: int = typer.Option(7, "--days", "-d", min=1, max=90, help="Plan length in days."),
    level: str = typer.Option("beginner", "--level", "-l", help="beginner, intermediate or advanced."),
    daily_time: str = typer.Option("30 minutes", "--daily-time", "-t", help="Study time per day."),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the plan as a course."),
) -> None:
    """Generate a multi-day learning plan."""

    settings = AppSettings()
    store = CourseStore.from_settings(settings)
    profile = store.load_profile()
    print_banner(_console)

    with _console.status("Generating learning plan..."):
        learning_plan = _run_with_assistant(
            settings,
            lambda assistant: assistant.generate_learning_plan(topic, days, level, daily_time, profile),
        )

    _console.print(build_plan_table(learning_plan, title=f"{topic} ({level})"))
    if save:
        course = store.create_course(
            topic=topic,
            duration_days=days,
            current_level=level,
            daily_time=daily_time,
            plan=learning_plan,
        )
        _console.print(f"[green]Saved course[/green] [bold]{course.id}[/bold]")


@app.command()
def lesson(
    course_id: str = typer.Argument(...),
    day: int = typer.Argument(..., min=1),
    subtopic_index: int = typer.Argument(..., min=0),
) -> None:
    """Show detailed content for one subtopic."""

    settings = AppSettings()
    store = CourseStore.from_settings(settings)
    course = _load_course(store, course_id)
    daily = _load_lesson(course, day)
    if subtopic_index >= len(daily.subtopics):
        _console.print(f"[red]Day {day} has {len(daily.subtopics)} subtopics.[/red]")
        raise typer.Exit(code=1)
    subtopic = daily.subtopics[subtopic_index]

    with _console.status(f"Loading {subtopic}..."):
        content = _run_with_assistant(
            settings,
            lambda assistant: assistant.get_detailed_subtopic_content(
                course.topic, daily.title, subtopic, course.current_level, store.load_profile()
            ),
        )
    _console.print(build_content_panel(content, title=f"Day {day} · {subtopic}"))


@dataclass(frozen=True)
class GradedAnswer:
    response: QuizResponse
    grading: GradingResult | None = None


def _ask_mcq(number: int, mcq: McqQuestion) -> str:
    _console.print(f"\n[bold]Q{number}.[/bold] {mcq.question}")
    for idx, option in enumerate(mcq.options, start=1):
        _console.print(f"  {idx}. {option}")
    choice = typer.prompt("Your answer (number)", type=int, default=1)
    return mcq.options[choice - 1] if 1 <= choice <= len(mcq.options) else ""


def _ask_theory(number: int, theory: TheoryQuestion) -> str:
    _console.print(f"\n[bold]Q{number}.[/bold] {theory.question}")
    return typer.prompt("Your answer")


async def grade_quiz_session(
    assistant: LearningAssistant,
    questions: QuizQuestionSet,
    *,
    day: int,
    mcq_answers: Sequence[str],
    theory_answers: Sequence[str],
) -> list[GradedAnswer]:
    """Score answers already collected from the user; theory answers go to the model."""

    graded: list[GradedAnswer] = []
    for mcq, answer in zip(questions.mcq, mcq_answers):
        evaluation = evaluate_mcq(mcq, answer)
        graded.append(
            GradedAnswer(
                QuizResponse(
                    day_number=day,
                    question=mcq.question,
                    type="mcq",
                    user_answer=answer,
                    is_correct=evaluation.is_correct,
                    score=evaluation.score,
                    feedback=evaluation.feedback,
                )
            )
        )

    for theory, answer in zip(questions.theory, theory_answers):
        grading = await assistant.grade_theory_answer(
            theory.question, answer, theory.correct_answer, theory.key_points
        )
        evaluation = evaluate_theory(grading)
        graded.append(
            GradedAnswer(
                QuizResponse(
                    day_number=day,
                    question=theory.question,
                    type="theory",
                    user_answer=answer,
                    is_correct=evaluation.is_correct,
                    score=evaluation.score,
                    feedback=evaluation.feedback,
                ),
                grading,
            )
        )
    return graded


@app.command()
def quiz(
    course_id: str = typer.Argument(...),
    day: int = typer.Argument(..., min=1),
) -> None:
    """Take an interactive quiz for one day; answers are graded and stored."""

    settings = AppSettings()
    store = CourseStore.from_settings(settings)
    course = _load_course(store, course_id)
    daily = _load_lesson(course, day)
    profile = store.load_profile()

    with _console.status("Preparing quiz..."):
        questions = _run_with_assistant(
            settings,
            lambda assistant: assistant.generate_quiz_questions(
                daily.title, daily.subtopics, daily.explanations, profile
            ),
        )

    # Input is read outside the event loop; only grading is async.
    mcq_answers = [_ask_mcq(number, mcq) for number, mcq in enumerate(questions.mcq, start=1)]
    offset = len(questions.mcq)
    theory_answers = [
        _ask_theory(number, theory) for number, theory in enumerate(questions.theory, start=offset + 1)
    ]

    with _console.status("Grading answers..."):
        graded = _run_with_assistant(
            settings,
            lambda assistant: grade_quiz_session(
                assistant,
                questions,
                day=day,
                mcq_answers=mcq_answers,
                theory_answers=theory_answers,
            ),
        )

    for number, item in enumerate(graded, start=1):
        if item.grading is None:
            color = "green" if item.response.is_correct else "red"
            _console.print(f"Q{number}: [{color}]{item.response.feedback}[/{color}]")
        else:
            _console.print(build_grading_panel(item.grading, title=f"Q{number} grading"))
        store.record_quiz_response(course.id, item.response)

    responses = [item.response for item in graded]
    _console.print(build_quiz_summary_panel(summarize_quiz(responses, len(responses))))


@app.command()
def ask(
    course_id: str = typer.Argument(...),
    day: int = typer.Argument(..., min=1),
    question: str = typer.Argument(..., help="Your question for the AI tutor."),
) -> None:
    """Ask the AI tutor a question about one day's lesson."""

    settings = AppSettings()
    store = CourseStore.from_settings(settings)
    course = _load_course(store, course_id)
    daily = _load_lesson(course, day)
    context = lesson_context(f"Day {day}: {daily.title}", daily.subtopics, daily.explanations)

    with _console.status("Asking the tutor..."):
        answer = _run_with_assistant(
            settings,
            lambda assistant: assistant.ask_tutor_question(context, question, store.load_profile()),
        )
    _console.print(build_tutor_panel(answer))


@app.command()
def grade(
    question: str = typer.Argument(...),
    answer: str = typer.Argument(...),
    correct_answer: str = typer.Option("", "--correct", "-c", help="Reference answer."),
    key_points: list[str] = typer.Option([], "--key-point", "-k", help="Key point to cover (repeatable)."),
) -> None:
    """Grade a free-text answer on a 0-10 scale."""

    settings = AppSettings()
    grading = _run_with_assistant(
        settings,
        lambda assistant: assistant.grade_theory_answer(question, answer, correct_answer, key_points),
    )
    _console.print(build_grading_panel(grading))


@app.command()
def courses() -> None:
    """List stored courses with their calendar progress."""

    store = CourseStore.from_settings(AppSettings())
    stored = store.list_courses()
    if not stored:
        _console.print("[yellow]No courses yet. Create one with `plan`.[/yellow]")
        return
    _console.print(build_courses_table(stored))


@app.command()
def progress(
    course_id: str = typer.Argument(...),
    day: int = typer.Argument(..., min=1),
    subtopic_index: int = typer.Argument(..., min=0),
) -> None:
    """Toggle completion of a subtopic."""

    store = CourseStore.from_settings(AppSettings())
    course = _load_course(store, course_id)
    _load_lesson(course, day)
    entry = store.toggle_progress(course_id, day, subtopic_index)
    state = "[green]completed[/green]" if entry.completed else "[yellow]not completed[/yellow]"
    percent = day_progress_percent(store.get_course(course_id), day)
    _console.print(f"Day {day}, subtopic {subtopic_index}: {state} (day progress {percent:.0f}%)")


@app.command()
def delete(
    course_id: str = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation."),
) -> None:
    """Delete a stored course."""

    store = CourseStore.from_settings(AppSettings())
    course = _load_course(store, course_id)
    if not yes and not typer.confirm(f"Delete course '{course.topic}'?"):
        raise typer.Abort()
    store.delete_course(course_id)
    _console.print(f"[green]Deleted[/green] {course_id}")


@app.command()
def profile() -> None:
    """Interactive onboarding: store the learner profile used to personalize content."""

    store = CourseStore.from_settings(AppSettings())
    current = store.load_profile() or UserProfile()
    prefs = current.learning_preferences

    _console.print("Known professions: " + ", ".join(known_professions()))
    updated = UserProfile(
        highest_qualification=typer.prompt("Highest qualification", default=current.highest_qualification),
        specialization=typer.prompt("Specialization", default=current.specialization),
        profession=typer.prompt("Profession", default=current.profession or "software-developer"),
        learning_preferences=LearningPreferences(
            include_code=typer.confirm("Include code examples?", default=prefs.include_code),
            preferred_example_types=_split_csv(
                typer.prompt(
                    "Preferred example types (comma separated)",
                    default=", ".join(prefs.preferred_example_types),
                    show_default=bool(prefs.preferred_example_types),
                )
            ),
            focus_areas=_split_csv(
                typer.prompt(
                    "Focus areas (comma separated)",
                    default=", ".join(prefs.focus_areas),
                    show_default=bool(prefs.focus_areas),
                )
            ),
        ),
    )
    path = store.save_profile(updated)
    _console.print(f"[green]Saved profile to:[/green] {path}")


@app.command()
def export(
    course_id: str = typer.Argument(...),
    fmt: str = typer.Option("html", "--format", "-f", help="json, html or pdf."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file."),
) -> None:
    """Export a course (plan + progress)."""

    fmt = fmt.lower()
    if fmt not in ("json", "html", "pdf"):
        raise typer.BadParameter("format must be json, html or pdf")

    store = CourseStore.from_settings(AppSettings())
    course = _load_course(store, course_id)
    output = output or Path("exports") / f"{sanitize_for_filename(course.topic)}-{course.id}.{fmt}"

    if fmt == "json":
        path = export_course_json(course=course, output_path=output)
    elif fmt == "html":
        path = export_course_html(course=course, output_path=output)
    else:
        try:
            path = export_course_pdf(course=course, output_path=output)
        except Exception as exc:
            _console.print(f"[yellow]PDF export failed ({exc}); writing HTML instead.[/yellow]")
            path = export_course_html(course=course, output_path=output.with_suffix(".html"))
    _console.print(f"[green]Exported:[/green] {path}")


def run() -> None:
    app()
