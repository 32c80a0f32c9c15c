"""Settings de NeuraLearn.

Fuentes, de mayor a menor prioridad:
- argumentos explícitos (`AppSettings(ai_model=...)`, útil en tests),
- variables de entorno `NEURALEARN_*`,
- `.env` del directorio actual,
- `.env` del usuario (lo escribe `neuralearn doctor setup-ai`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "neuralearn"
_ENV_HEADER = "# NeuraLearn user settings (managed by `neuralearn doctor setup-ai`)"


def get_user_config_dir() -> Path:
    """Per-user config directory: %APPDATA%, ~/Library/Application Support or XDG."""

    home = Path.home()
    if sys.platform.startswith("win"):
        root = Path(os.environ.get("APPDATA") or home)
    elif sys.platform == "darwin":
        root = home / "Library" / "Application Support"
    else:
        root = Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config")
    return root / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def read_env_file(path: Path) -> dict[str, str]:
    """`KEY=value` pairs of a dotenv file; comments, blanks and junk lines are skipped."""

    if not path.is_file():
        return {}
    pairs: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        pairs[key] = value.strip().strip("\"'")
    return pairs


def write_user_env_vars(values: Mapping[str, str | None], *, env_path: Path | None = None) -> Path:
    """Merge `values` into the user .env (None values are ignored) and rewrite it sorted."""

    env_path = env_path or get_user_env_file()
    merged = read_env_file(env_path)
    merged.update({key: value for key, value in values.items() if value is not None})

    body = [_ENV_HEADER, *(f"{key}={merged[key]}" for key in sorted(merged))]
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text("\n".join(body) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Proveedor IA, almacenamiento local de cursos y logging.

    El proveedor es cualquier endpoint compatible con la API de OpenAI
    (Groq por defecto, también OpenAI, OpenRouter u Ollama en local).
    """

    model_config = SettingsConfigDict(
        env_prefix="NEURALEARN_",
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ai_api_key: str | None = Field(default=None, description="Provider API key; unset -> local fallbacks.")
    ai_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        min_length=8,
        description="OpenAI-compatible base URL.",
    )
    ai_model: str = Field(default="llama-3.1-8b-instant", min_length=1, description="Model used for every call.")
    ai_timeout_seconds: float = Field(default=45.0, gt=0, description="Per-request timeout in seconds.")
    user_agent: str = Field(default="neuralearn/0.1", min_length=1, description="User-Agent for provider calls.")

    data_dir: Path | None = Field(
        default=None,
        description="Course store directory (defaults to <user config dir>/courses).",
    )
    log_level: str = Field(default="WARNING", description="CLI log level (DEBUG, INFO, WARNING, ERROR).")

    def resolved_data_dir(self) -> Path:
        return self.data_dir if self.data_dir is not None else get_user_config_dir() / "courses"
