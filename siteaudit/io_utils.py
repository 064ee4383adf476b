"""Utility helpers for file IO, JSON output and diagnostics."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any


def stable_json_dumps(obj: object) -> str:
    """Serialize JSON in a stable, human-readable way with a trailing newline."""
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_text(path: Path, content: str) -> Path:
    """Write UTF-8 text, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_json_stable(path: Path, data: Any) -> Path:
    return write_text(path, stable_json_dumps(data))


def read_page_text(path: Path) -> str:
    """Read an HTML page as UTF-8; a BOM is dropped if present."""
    return path.read_text(encoding="utf-8-sig")


def warn(msg: str) -> None:
    print(msg, file=sys.stderr)
