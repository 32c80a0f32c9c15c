"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from datetime import date

from rich.align import Align
from rich.console import Console, Group
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Course, DetailedContent, GradingResult, LearningPlan, TutorAnswer
from core.progress import QuizSummary, course_progress_percent, days_remaining


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("NeuraLearn", style="bold cyan")
    subtitle = Text("Learning plans • Lessons • Quizzes • AI tutor", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _bullets(title: str, items: list[str]) -> Text:
    body = Text()
    if not items:
        return body
    body.append(f"\n{title}:\n", style="bold")
    for item in items:
        body.append(f"- {item}\n")
    return body


def build_plan_table(plan: LearningPlan, *, title: str = "Learning Plan") -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("Day", style="cyan", no_wrap=True)
    table.add_column("Title", style="bold white")
    table.add_column("Subtopics", style="white")
    for day in plan.days:
        subtopics = "\n".join(f"{i}. {s}" for i, s in enumerate(day.subtopics))
        table.add_row(str(day.day), day.title, subtopics)
    return table


def build_courses_table(courses: list[Course], *, today: date | None = None) -> Table:
    table = Table(title="Courses")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Topic", style="white")
    table.add_column("Level", style="magenta")
    table.add_column("Days", justify="right")
    table.add_column("Progress", justify="right", style="green")
    table.add_column("Remaining", justify="right", style="yellow")
    for course in courses:
        table.add_row(
            course.id,
            course.topic,
            course.current_level,
            str(course.duration_days),
            f"{course_progress_percent(course, today)}%",
            f"{days_remaining(course, today)}d",
        )
    return table


def build_content_panel(content: DetailedContent, *, title: str) -> Panel:
    extras = Text()
    extras.append_text(_bullets("Key points", content.key_points))
    extras.append_text(_bullets("Examples", content.examples))
    extras.append_text(_bullets("Practical applications", content.practical_applications))
    return Panel(Group(Markdown(content.content), extras), title=title, border_style="blue")


def build_tutor_panel(answer: TutorAnswer) -> Panel:
    extras = Text()
    extras.append_text(_bullets("Code examples", answer.code_examples))
    extras.append_text(_bullets("Related concepts", answer.related_concepts))
    extras.append_text(_bullets("Further reading", answer.further_reading))
    return Panel(Group(Markdown(answer.answer), extras), title="AI Tutor", border_style="yellow")


def build_grading_panel(grading: GradingResult, *, title: str = "Grading") -> Panel:
    body = Text()
    body.append(f"Score: {grading.score:g}/10\n\n", style="bold")
    body.append(grading.feedback.strip() + "\n")
    body.append_text(_bullets("Strengths", grading.strengths))
    body.append_text(_bullets("Improvements", grading.improvements))
    style = "green" if grading.score >= 7 else "red"
    return Panel(body, title=title, border_style=style)


def build_quiz_summary_panel(summary: QuizSummary) -> Panel:
    body = Text()
    body.append(f"{summary.percentage}%  ", style="bold")
    body.append(f"grade {summary.grade}\n", style="bold cyan")
    body.append(f"Score: {summary.total_score:g}/{summary.max_score}\n")
    body.append(f"Correct answers: {summary.correct_answers}")
    return Panel(body, title="Quiz results", border_style="magenta")
