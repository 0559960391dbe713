"""Shared fixtures for pmv tests."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + bytes(range(256)) + b"foo"


def make_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create files under root from a {relative path: content} mapping."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8", newline="")
    return root


@pytest.fixture
def console() -> Console:
    """Console that writes to a string buffer instead of the terminal."""
    return Console(file=io.StringIO(), width=200)


def console_output(console: Console) -> str:
    """Everything printed to a console created by the console fixture."""
    return console.file.getvalue()  # type: ignore[attr-defined]


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small project called `foo` with text, binary and ignored files."""
    root = tmp_path / "foo"
    make_tree(
        root,
        {
            "a.txt": "hello foo world",
            "logo.png": PNG_BYTES,
            "README.md": "# foo\n\nThe foo project.\n",
            "src/foo/__init__.py": "from foo.core import run\n",
            "src/foo/core.py": "def run():\n    return 'fooBarService'\n",
            "build/out.txt": "foo build artifact",
            ".gitignore": "build/\n",
            ".hidden.txt": "foo hidden",
            ".git/config": "[remote] url = git@github.com:me/foo.git",
        },
    )
    return root
