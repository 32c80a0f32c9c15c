"""Escape repair engine.

Responsabilidad:
- Recibir texto normalizado que puede fallar en `json.loads` y aplicar una
  secuencia ordenada de transformaciones textuales para volverlo parseable.

Nota:
- Es heurístico y con pérdida: cubre los fallos observados en modelos pequeños
  (backticks como comillas, saltos de línea crudos, viñetas markdown, salidas
  truncadas por `max_tokens`). No pretende arreglar cualquier JSON.
"""

from __future__ import annotations

import json
import logging
import re

logger = logging.getLogger(__name__)

# Free-text fields where the model tends to emit raw prose/markdown.
FREE_TEXT_FIELDS: tuple[str, ...] = ("content", "answer")

_JSON_STRING = r'"(?:[^"\\]|\\.)*"'

_BACKTICK_CONTENT_RE = re.compile(r'"content":\s*`([^`]*)`', re.DOTALL)
_BACKTICK_FIELD_RE = re.compile(r'"(\w+)":\s*`([^`]*)`', re.DOTALL)
_FREE_TEXT_RE = re.compile(
    r'"(' + "|".join(FREE_TEXT_FIELDS) + r')":\s*"((?:[^"\\]|\\.)*)"',
    re.DOTALL,
)
_CONTENT_VALUE_RE = re.compile(r'"content":\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
# A bullet glyph (or a run of them) at the start of a line, raw or already escaped.
_LIST_MARKER_RE = re.compile(r"(^|\\n|\n)[ \t]*(?:[-*•+][ \t]+)+")
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x1f]")
_PAIR_RE = re.compile(
    _JSON_STRING + r"\s*:\s*(?:" + _JSON_STRING + r"|[^\s\[{\",}\]][^,}\]\n]*?)(?=\s*[,}\]])",
)

_CLOSERS = {"{": "}", "[": "]"}


def is_strict_json(text: str) -> bool:
    try:
        json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return False
    return True


def escape_json_text(text: str) -> str:
    """Escape raw text so it can live between double quotes in JSON.

    Backslashes go first; escaping them later would double-escape the
    sequences introduced by the other replacements.
    """

    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\f", "\\f")
        .replace("\b", "\\b")
    )


def _already_escaped(value: str) -> bool:
    return "\\n" in value or '\\"' in value


def _requote_backtick_content(text: str) -> str:
    return _BACKTICK_CONTENT_RE.sub(
        lambda m: f'"content": "{escape_json_text(m.group(1))}"',
        text,
    )


def _requote_backtick_fields(text: str) -> str:
    return _BACKTICK_FIELD_RE.sub(
        lambda m: f'"{m.group(1)}": "{escape_json_text(m.group(2))}"',
        text,
    )


def _escape_raw_free_text(text: str) -> str:
    def _sub(match: re.Match[str]) -> str:
        field, value = match.group(1), match.group(2)
        if _already_escaped(value) or not _CONTROL_CHARS_RE.search(value):
            return match.group(0)
        return f'"{field}": "{escape_json_text(value)}"'

    return _FREE_TEXT_RE.sub(_sub, text)


def _strip_list_markers(text: str) -> str:
    def _sub(match: re.Match[str]) -> str:
        cleaned = _LIST_MARKER_RE.sub(lambda m: m.group(1), match.group(1))
        return f'"content": "{cleaned}"'

    return _CONTENT_VALUE_RE.sub(_sub, text)


class _Structure:
    """String-aware scan of a JSON-ish text.

    - `stack`: brackets still open at the end of the text.
    - `in_string`: whether the text ends inside a string literal.
    - `closed_at`: offsets just after every bracket that closed a value.
    - `string_starts`: offsets of the quotes that opened a string literal.
    """

    __slots__ = ("stack", "in_string", "closed_at", "string_starts")

    def __init__(self) -> None:
        self.stack: list[str] = []
        self.in_string = False
        self.closed_at: list[int] = []
        self.string_starts: set[int] = set()


def _scan_structure(text: str) -> _Structure:
    scan = _Structure()
    stack = scan.stack
    in_string = False
    escaped = False
    for idx, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
            scan.string_starts.add(idx)
        elif ch in _CLOSERS:
            stack.append(ch)
        elif ch in ("}", "]"):
            if stack and _CLOSERS[stack[-1]] == ch:
                stack.pop()
                scan.closed_at.append(idx + 1)
    scan.in_string = in_string
    return scan


def _close_open_brackets(prefix: str) -> str:
    stack = _scan_structure(prefix).stack
    prefix = prefix.rstrip().rstrip(",").rstrip()
    return prefix + "".join(_CLOSERS[ch] for ch in reversed(stack))


def _needs_truncation_repair(text: str) -> bool:
    stripped = text.rstrip()
    if not stripped.endswith(("}", "]")):
        return True
    scan = _scan_structure(stripped)
    return bool(scan.stack) or scan.in_string


def _recover_truncated(text: str) -> str:
    """Cut after the last syntactically complete value and close the structure."""

    scan = _scan_structure(text)
    candidates = list(scan.closed_at)
    # A key only counts when its opening quote really starts a string literal.
    for match in _PAIR_RE.finditer(text):
        if match.start() in scan.string_starts:
            candidates.append(match.end())

    if candidates:
        cut = max(candidates)
        return _close_open_brackets(text[:cut])

    for idx, ch in enumerate(text):
        if ch in _CLOSERS:
            return text[: idx + 1] + _CLOSERS[ch]
    return text


def repair_json_text(text: str) -> str:
    """Best-effort repair of a normalized model response.

    Orden:
    1) Si ya es JSON válido, se devuelve tal cual.
    2) Backticks -> comillas dobles escapadas (primero `content`, luego el resto).
    3) Campos de texto libre con caracteres de control crudos -> re-escapado.
    4) Viñetas markdown al inicio de línea dentro de `content` -> eliminadas.
    5) Salida truncada -> corte tras el último valor completo y cierre.
    """

    if is_strict_json(text):
        return text

    fixed = _requote_backtick_content(text)
    fixed = _requote_backtick_fields(fixed)
    fixed = _escape_raw_free_text(fixed)
    fixed = _strip_list_markers(fixed)

    if _needs_truncation_repair(fixed):
        logger.debug("Model output looks truncated (%d chars); closing structure", len(fixed))
        fixed = _recover_truncated(fixed.rstrip())

    return fixed
