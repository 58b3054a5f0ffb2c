"""Indexing pipeline: notes in, tag/date/master pages out.

The pipeline owns one tag index and one date index for the duration of a run.
It drives the header extractor over every note, feeds both indexes, renders
all pages in memory and only then hands them to the repository. Any fatal
``NoteIndexError`` propagates and aborts the run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging

from note_indexer.adapters.filesystem_repository import AbstractNoteRepository, DocumentLoadError
from note_indexer.config import Settings
from note_indexer.domain.model import NoteHeader
from note_indexer.search.column_formatter import ColumnFormatter
from note_indexer.search.inverted_index import InvertedIndex
from note_indexer.search.renderer import IndexRenderer
from note_indexer.utils.front_matter import MalformedHeaderError, parse_note_header


logger = logging.getLogger(__name__)

MalformedNoteCallback = Callable[[str], None]


@dataclass(frozen=True)
class IndexBuildResult:
    """Outcome of an indexing run."""

    documents_indexed: int
    documents_skipped: int
    documents_pruned: int
    tag_keys: int
    date_keys: int
    pages: tuple[str, ...]
    errors: tuple[str, ...]
    dry_run: bool = False


class NoteIndexer:
    """Coordinate header extraction, indexing and page rendering for one notes directory."""

    def __init__(
        self,
        repository: AbstractNoteRepository,
        settings: Settings | None = None,
        *,
        on_malformed: MalformedNoteCallback | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.repository = repository
        self.tags = InvertedIndex("tags")
        self.dates = InvertedIndex("dates")
        self.renderer = IndexRenderer(
            tag_formatter=ColumnFormatter(self.settings.tag_columns, padding=self.settings.column_padding),
            date_formatter=ColumnFormatter(self.settings.date_columns, padding=self.settings.column_padding),
            index_name=self.settings.index_name,
        )
        if on_malformed is not None:
            self._on_malformed = on_malformed
        elif self.settings.prune_malformed:
            self._on_malformed = repository.delete_note
        else:
            self._on_malformed = None

    def add_header(self, header: NoteHeader) -> None:
        """Feed one extracted header into both indexes."""
        if header.created_date is not None:
            self.dates.add(header.created_date, header.document_id, header.title, header.created_time)
        self.tags.add_many(header.tags, header.document_id, header.title)

    def build(self, *, persist: bool = True) -> IndexBuildResult:
        """Index every note and write the generated pages.

        Args:
            persist: When False, render everything but write nothing. This
                powers the CLI dry-run flow.
        """
        self.tags = InvertedIndex("tags")
        self.dates = InvertedIndex("dates")
        documents_indexed = 0
        documents_skipped = 0
        documents_pruned = 0
        errors: list[str] = []

        for document_id in self.repository.list_note_ids():
            location = self.repository.describe(document_id)
            note_fields = {"document_id": document_id}
            logger.info("Processing note %s", location, extra=note_fields)

            try:
                lines = self.repository.read_header_lines(document_id)
            except DocumentLoadError as exc:
                logger.error("Skipping unreadable note: %s", exc, extra=note_fields)
                errors.append(str(exc))
                documents_skipped += 1
                continue

            try:
                header = parse_note_header(document_id, lines)
            except MalformedHeaderError as exc:
                documents_skipped += 1
                if self._on_malformed is None:
                    logger.info("Skipping malformed note: %s", exc, extra=note_fields)
                    continue
                self._on_malformed(document_id)
                documents_pruned += 1
                logger.info("Removed malformed note %s", location, extra=note_fields)
                continue

            if header.is_truncated:
                logger.warning("Note %s has only %d header lines", location, header.line_count, extra=note_fields)
            if header.missing_fields:
                logger.debug(
                    "Note %s is missing %s", location, ", ".join(header.missing_fields), extra=note_fields
                )

            self.add_header(header)
            documents_indexed += 1

        pages = self.renderer.render_all(self.tags, self.dates)
        if persist:
            written = self.repository.write_pages(pages)
        else:
            written = [page.name for page in pages]

        logger.info(
            "Index build complete: %d notes indexed, %d tags, %d dates",
            documents_indexed,
            len(self.tags),
            len(self.dates),
        )

        return IndexBuildResult(
            documents_indexed=documents_indexed,
            documents_skipped=documents_skipped,
            documents_pruned=documents_pruned,
            tag_keys=len(self.tags),
            date_keys=len(self.dates),
            pages=tuple(written),
            errors=tuple(errors),
            dry_run=not persist,
        )
