"""Entry point para desarrollo sin instalar el paquete.

Uso:
- `python main.py plan "Rust" --days 5`
- `python main.py doctor run`

El código vive en `src/`; el script `neuralearn` (pyproject) es el entrypoint
normal tras `pip install -e .`.
"""

from __future__ import annotations

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(_SRC) not in sys.path:
        sys.path.insert(0, str(_SRC))

    # Rich panels use box-drawing glyphs that cp1252 consoles cannot encode.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
