from pathlib import Path
from typing import Callable

import pytest


def html_page(body: str = "", head: str = "") -> str:
    return f"<!doctype html><html><head>{head}</head><body>{body}</body></html>"


@pytest.fixture
def dist(tmp_path: Path) -> Path:
    root = tmp_path / "dist"
    root.mkdir()
    return root


@pytest.fixture
def write_page(dist: Path) -> Callable[..., Path]:
    def _write(rel_path: str, body: str = "", head: str = "") -> Path:
        path = dist / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html_page(body, head), encoding="utf-8")
        return path

    return _write
