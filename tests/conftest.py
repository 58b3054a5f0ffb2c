"""Shared test fixtures and configuration."""

from pathlib import Path

import pytest


CONFIG_ENV_VARS = (
    "NOTES_DIR",
    "NOTE_SUFFIX",
    "INDEX_NAME",
    "TAG_COLUMNS",
    "DATE_COLUMNS",
    "COLUMN_PADDING",
    "PRUNE_MALFORMED",
    "LOG_LEVEL",
    "LOG_JSON",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate Settings from the developer's environment and .env file."""
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _write_note(
    directory: Path,
    name: str,
    *,
    title: str = "Untitled",
    created: str | None = "20240101 09:00",
    tags: str | None = "misc",
    third_line: str = "Id: 1",
    body: str = "Body text\n",
) -> Path:
    """Write a note with the standard five-line header."""
    lines = ["---", f"Title: {title}", third_line]
    lines.append(f"Created: {created}" if created is not None else "Modified: never")
    lines.append(f"Tags: {tags}" if tags is not None else "Status: draft")
    path = directory / f"{name}.md"
    path.write_text("\n".join(lines) + "\n" + body, encoding="utf-8")
    return path


@pytest.fixture(name="write_note")
def write_note_fixture():
    return _write_note
