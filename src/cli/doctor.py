"""`neuralearn doctor`: environment diagnostics and AI provider setup."""

from __future__ import annotations

import asyncio
import tempfile
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.ai_client import is_local_base_url
from adapters.http_client import build_async_client
from adapters.plan_exporter import export_course_pdf
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import Course, DailyLesson

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and AI provider setup.")

_console = Console()

# provider -> (base_url, default model)
PROVIDER_PRESETS: dict[str, tuple[str, str]] = {
    "groq": ("https://api.groq.com/openai/v1", "llama-3.1-8b-instant"),
    "groq-70b": ("https://api.groq.com/openai/v1", "llama-3.3-70b-versatile"),
    "openai": ("https://api.openai.com/v1", "gpt-4o-mini"),
    "openrouter": ("https://openrouter.ai/api/v1", "openai/gpt-4o-mini"),
    "ollama": ("http://localhost:11434/v1", "llama3"),
}


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: str
    detail: str

    @property
    def failed(self) -> bool:
        return self.status == "FAIL"


async def _check_endpoint(settings: AppSettings) -> CheckResult:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.ai_base_url.rstrip("/") + "/models")
    except Exception as exc:
        return CheckResult("AI endpoint", "FAIL", f"{type(exc).__name__}: {exc}")
    # 401 still proves the endpoint is reachable.
    return CheckResult("AI endpoint", "OK", f"HTTP {response.status_code}")


def _check_store(settings: AppSettings) -> CheckResult:
    data_dir = settings.resolved_data_dir()
    probe = data_dir / ".doctor_probe"
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        probe.write_text("ok", encoding="utf-8")
        probe.unlink()
    except OSError as exc:
        return CheckResult("Course store", "FAIL", f"{data_dir}: {exc}")
    return CheckResult("Course store", "OK", str(data_dir))


def _check_pdf() -> CheckResult:
    """Render a one-lesson course to PDF to surface missing WeasyPrint native libs."""

    sample = Course(
        id="doctor",
        topic="Doctor",
        duration_days=1,
        lessons=[DailyLesson(day_number=1, title="Check", subtopics=["PDF"], explanations=["Render test."])],
    )
    try:
        with tempfile.TemporaryDirectory() as tmp:
            export_course_pdf(course=sample, output_path=Path(tmp) / "doctor.pdf")
    except Exception as exc:
        return CheckResult("WeasyPrint PDF", "FAIL", str(exc))
    return CheckResult("WeasyPrint PDF", "OK", "PDF export available")


def collect_checks(settings: AppSettings) -> list[CheckResult]:
    if settings.ai_api_key:
        key = CheckResult("AI key", "OK", "remote generation enabled")
    elif is_local_base_url(settings.ai_base_url):
        key = CheckResult("AI key", "OK", "local server, no key needed")
    else:
        key = CheckResult("AI key", "OPTIONAL", "not set, local fallback content is used")

    return [
        key,
        CheckResult("AI provider", "OK", f"{settings.ai_model} @ {settings.ai_base_url}"),
        asyncio.run(_check_endpoint(settings)),
        _check_store(settings),
        _check_pdf(),
    ]


@app.command()
def run() -> None:
    """Check AI configuration, endpoint reachability, course store and PDF export."""

    results = collect_checks(AppSettings())

    table = Table(title="NeuraLearn Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")
    for result in results:
        color = "red" if result.failed else "green" if result.status == "OK" else "yellow"
        table.add_row(result.name, f"[{color}]{result.status}[/{color}]", result.detail)
    _console.print(table)

    if any(r.failed and r.name == "WeasyPrint PDF" for r in results):
        _console.print("\n[yellow]Note:[/yellow] `export --format pdf` falls back to HTML on this machine.")


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Pick a provider preset and store it in the user .env."""

    _console.print("Presets: " + ", ".join(PROVIDER_PRESETS))
    provider = typer.prompt("AI provider", default="groq").strip().lower()
    base_url, model = PROVIDER_PRESETS.get(provider, ("", ""))
    if not base_url:
        _console.print("[yellow]Unknown preset, enter the endpoint manually.[/yellow]")

    base_url = typer.prompt("AI base URL", default=base_url or None).strip()
    model = typer.prompt("AI model", default=model or None).strip()
    if not base_url or not model:
        raise typer.BadParameter("base URL and model are required")

    api_key = ""
    if not is_local_base_url(base_url):
        api_key = typer.prompt("AI API key", hide_input=True).strip()

    env_path = write_user_env_vars(
        {
            "NEURALEARN_AI_BASE_URL": base_url,
            "NEURALEARN_AI_MODEL": model,
            "NEURALEARN_AI_API_KEY": api_key or None,
        },
        env_path=get_user_env_file(),
    )
    _console.print(f"[green]Saved AI settings to:[/green] {env_path}")
