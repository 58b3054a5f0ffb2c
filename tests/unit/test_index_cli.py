"""Unit tests for the note-indexer CLI."""

import json
import logging
from pathlib import Path

import pytest

from note_indexer import index_cli


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_argument_parser_defaults() -> None:
    args = index_cli.build_argument_parser().parse_args([])

    assert args.notes_dir is None
    assert args.log_level is None
    assert args.json_logs is None
    assert args.no_prune is False
    assert args.dry_run is False


def test_argument_parser_rejects_extra_positionals() -> None:
    with pytest.raises(SystemExit):
        index_cli.build_argument_parser().parse_args(["a", "b"])


def test_settings_from_args_applies_overrides(tmp_path: Path) -> None:
    args = index_cli.build_argument_parser().parse_args([str(tmp_path), "--log-level", "debug", "--dry-run"])

    settings = index_cli._settings_from_args(args)

    assert settings.notes_dir == tmp_path
    assert settings.log_level == "debug"
    assert settings.prune_malformed is False


def test_main_missing_directory(tmp_path: Path) -> None:
    assert index_cli.main([str(tmp_path / "missing")]) == 1


def test_main_rejects_file_path(tmp_path: Path) -> None:
    path = tmp_path / "file.md"
    path.write_text("x", encoding="utf-8")

    assert index_cli.main([str(path)]) == 1


def test_main_uses_notes_dir_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], write_note
) -> None:
    notes = tmp_path / "notes"
    notes.mkdir()
    write_note(notes, "n", tags="alpha")
    monkeypatch.setenv("NOTES_DIR", str(notes))

    assert index_cli.main([]) == 0

    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["documents_indexed"] == 1
    assert (notes / "alpha.md").exists()


def test_main_dry_run_writes_and_deletes_nothing(tmp_path: Path, capsys: pytest.CaptureFixture[str], write_note) -> None:
    write_note(tmp_path, "n", tags="alpha")
    stub = tmp_path / "old.md"
    stub.write_text("---\nTitle: old\n---\n", encoding="utf-8")

    assert index_cli.main([str(tmp_path), "--dry-run"]) == 0

    summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert summary["dry_run"] is True
    assert summary["pages"] == 3
    assert stub.exists()
    assert not (tmp_path / "alpha.md").exists()
    assert not (tmp_path / "index.md").exists()


def test_main_returns_one_on_fatal_error(tmp_path: Path, write_note) -> None:
    write_note(tmp_path, "bad", created="march 10:00")

    assert index_cli.main([str(tmp_path)]) == 1
    assert not (tmp_path / "index.md").exists()


def test_main_json_logs(tmp_path: Path, capsys: pytest.CaptureFixture[str], write_note) -> None:
    write_note(tmp_path, "n")

    assert index_cli.main([str(tmp_path), "--json-logs"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    records = [json.loads(line) for line in lines[:-1]]
    assert any(record["message"] == f"Processing note {tmp_path.resolve() / 'n.md'}" for record in records)
    assert len({record["run_id"] for record in records}) == 1
