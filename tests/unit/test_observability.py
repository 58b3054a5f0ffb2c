"""Unit tests for observability module."""

import json
import logging
from pathlib import Path
import sys

import pytest

from note_indexer.adapters.filesystem_repository import FakeNoteRepository
from note_indexer.config import Settings
from note_indexer.observability import (
    JsonFormatter,
    RunContextFilter,
    configure_logging,
    get_run_context,
    indexing_run,
)
from note_indexer.observability.context import run_context
from note_indexer.search.indexer import NoteIndexer


def _record(msg: str = "test message", level: int = logging.INFO, name: str = "note_indexer.search.indexer"):
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def reset_run_context():
    token = run_context.set(None)
    yield
    run_context.reset(token)


@pytest.mark.unit
class TestJsonFormatter:
    """Tests for structured JSON logging."""

    def test_format_includes_run_context_from_filter(self):
        record = _record()

        with indexing_run(notes_dir="/notes") as ctx:
            assert RunContextFilter().filter(record) is True
        data = json.loads(JsonFormatter().format(record))

        assert data["message"] == "test message"
        assert data["level"] == "INFO"
        assert data["run_id"] == ctx["run_id"]
        assert data["notes_dir"] == "/notes"
        assert data["component"] == "indexer"
        assert "timestamp" in data

    def test_format_without_filter_falls_back_to_current_run(self):
        data = json.loads(JsonFormatter().format(_record()))

        assert data["run_id"] == get_run_context()["run_id"]
        assert "notes_dir" not in data

    def test_format_includes_extra_fields(self):
        record = _record()
        record.document_id = "note-1"
        record.paths = {Path("b"), Path("a")}

        data = json.loads(JsonFormatter().format(record))

        assert data["document_id"] == "note-1"
        assert data["paths"] == ["a", "b"]

    def test_format_truncates_long_messages(self):
        data = json.loads(JsonFormatter().format(_record("x" * 5000)))

        assert len(data["message"]) == JsonFormatter.MAX_MESSAGE_LEN + 3

    def test_format_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in data["exception"]


@pytest.mark.unit
class TestRunContext:
    def test_get_run_context_generates_id(self):
        ctx = get_run_context()

        assert len(ctx["run_id"]) == 12
        assert get_run_context() is ctx

    def test_indexing_run_binds_and_restores(self):
        outer = get_run_context()

        with indexing_run(notes_dir="/tmp/notes") as ctx:
            assert get_run_context() is ctx
            assert ctx["notes_dir"] == "/tmp/notes"
            assert ctx["run_id"] != outer["run_id"]

        assert get_run_context() is outer


@pytest.mark.unit
class TestPipelineLogRecords:
    def test_note_records_carry_document_id(self, caplog, tmp_path):
        repository = FakeNoteRepository(
            {
                "weekly": "---\nTitle: Weekly\nId: 1\nCreated: 20240101 09:00\nTags: work\n",
                "stub": "---\nTitle: stub\n---\n",
            }
        )

        with caplog.at_level(logging.INFO, logger="note_indexer.search.indexer"):
            NoteIndexer(repository, Settings(notes_dir=tmp_path)).build()

        per_note = [record for record in caplog.records if hasattr(record, "document_id")]
        assert {record.document_id for record in per_note} == {"weekly", "stub"}
        removed = next(record for record in per_note if record.getMessage().startswith("Removed"))
        assert json.loads(JsonFormatter().format(removed))["document_id"] == "stub"


@pytest.mark.unit
class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers = root.handlers[:]
        level = root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_json_output_uses_json_formatter(self):
        configure_logging("debug", json_output=True)

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert any(isinstance(item, RunContextFilter) for item in root.handlers[0].filters)

    def test_plain_output_includes_run_id(self, capsys):
        configure_logging("warning")

        with indexing_run() as ctx:
            logging.getLogger("note_indexer.test").warning("hello")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert f"run={ctx['run_id']} hello" in capsys.readouterr().out

    def test_unknown_level_falls_back_to_info(self):
        configure_logging("loud")

        assert logging.getLogger().level == logging.INFO
