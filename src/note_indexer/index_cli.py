"""CLI for rebuilding the tag, date and master index pages of a notes directory."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
from pathlib import Path
import sys

from pydantic import ValidationError

from note_indexer.adapters.filesystem_repository import FileSystemNoteRepository
from note_indexer.config import Settings
from note_indexer.domain.model import NoteIndexError
from note_indexer.observability import configure_logging, indexing_run
from note_indexer.search.indexer import IndexBuildResult, NoteIndexer


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-indexer",
        description="Build per-tag, per-date and master index pages for a directory of notes",
    )
    parser.add_argument(
        "notes_dir",
        nargs="?",
        type=Path,
        help="Directory of notes (defaults to NOTES_DIR or $HOME/.data)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Override LOG_LEVEL",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Emit structured JSON logs",
    )
    parser.add_argument(
        "--no-prune",
        action="store_true",
        help="Skip malformed notes instead of deleting them",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render every page but write and delete nothing",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.notes_dir is not None:
        overrides["notes_dir"] = args.notes_dir
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    if args.json_logs is not None:
        overrides["log_json"] = args.json_logs
    if args.no_prune or args.dry_run:
        overrides["prune_malformed"] = False
    return Settings(**overrides)


def _validate_notes_dir(notes_dir: Path) -> None:
    if not notes_dir.exists():
        raise ValueError(f"Path '{notes_dir}' does not exist")
    if not notes_dir.is_dir():
        raise ValueError(f"'{notes_dir}' is not a directory")


def _print_summary(result: IndexBuildResult) -> None:
    payload = {
        "documents_indexed": result.documents_indexed,
        "documents_skipped": result.documents_skipped,
        "documents_pruned": result.documents_pruned,
        "tag_keys": result.tag_keys,
        "date_keys": result.date_keys,
        "pages": len(result.pages),
        "dry_run": result.dry_run,
    }
    sys.stdout.write(json.dumps(payload, sort_keys=True) + "\n")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ValidationError as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return 1

    configure_logging(settings.log_level, settings.log_json)

    notes_dir = settings.notes_dir.expanduser()
    try:
        _validate_notes_dir(notes_dir)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    repository = FileSystemNoteRepository(notes_dir, settings.note_suffix)
    indexer = NoteIndexer(repository, settings)

    with indexing_run(notes_dir=str(repository.notes_dir)):
        try:
            result = indexer.build(persist=not args.dry_run)
        except NoteIndexError as exc:
            logger.error("Indexing aborted: %s", exc)
            return 1
        except OSError as exc:
            logger.error("Cannot read notes directory %s: %s", repository.notes_dir, exc)
            return 1

    _print_summary(result)
    if result.errors:
        logger.warning("%d note(s) could not be read", len(result.errors))
    return 0


if __name__ == "__main__":
    sys.exit(main())
