"""Filesystem-based note repository implementation."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from itertools import islice
import logging
from pathlib import Path

from note_indexer.domain.model import HEADER_LINES, NoteIndexError
from note_indexer.search.renderer import RenderedPage


logger = logging.getLogger(__name__)


class DocumentLoadError(RuntimeError):
    """Raised when a note's header cannot be read; the note is skipped."""


class NoteDeleteError(NoteIndexError):
    """Raised when a malformed note cannot be removed."""


class OutputWriteError(NoteIndexError):
    """Raised when a generated page cannot be written."""


class AbstractNoteRepository(ABC):
    """Abstract source of notes and sink for generated pages."""

    @abstractmethod
    def list_note_ids(self) -> list[str]:
        """List document ids of every note, in processing order."""
        raise NotImplementedError

    @abstractmethod
    def read_header_lines(self, document_id: str) -> list[str]:
        """Return at most ``HEADER_LINES`` header lines without terminators.

        Raises:
            DocumentLoadError: the note cannot be read or decoded
        """
        raise NotImplementedError

    @abstractmethod
    def delete_note(self, document_id: str) -> None:
        """Remove a malformed note.

        Raises:
            NoteDeleteError: the note exists but cannot be removed
        """
        raise NotImplementedError

    @abstractmethod
    def write_pages(self, pages: Sequence[RenderedPage]) -> list[str]:
        """Persist generated pages and return where each one went.

        Raises:
            OutputWriteError: on the first page that cannot be written
        """
        raise NotImplementedError

    def describe(self, document_id: str) -> str:
        """Human-readable location of a note for log messages."""
        return document_id


class FileSystemNoteRepository(AbstractNoteRepository):
    """Notes are ``<notes_dir>/<document_id><suffix>`` files; pages are written beside them."""

    def __init__(self, notes_dir: Path, suffix: str = ".md") -> None:
        self.notes_dir = notes_dir.expanduser().resolve(strict=False)
        self.suffix = suffix

    def _path_for(self, document_id: str) -> Path:
        return self.notes_dir / f"{document_id}{self.suffix}"

    def describe(self, document_id: str) -> str:
        return str(self._path_for(document_id))

    def list_note_ids(self) -> list[str]:
        if not self.notes_dir.is_dir():
            raise FileNotFoundError(f"Notes directory does not exist: {self.notes_dir}")
        return sorted(
            entry.name.removesuffix(self.suffix)
            for entry in self.notes_dir.iterdir()
            if entry.name.endswith(self.suffix) and entry.name != self.suffix and entry.is_file()
        )

    def read_header_lines(self, document_id: str) -> list[str]:
        path = self._path_for(document_id)
        try:
            with path.open("r", encoding="utf-8", newline="\n") as handle:
                return [line.rstrip("\r\n") for line in islice(handle, HEADER_LINES)]
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc

    def delete_note(self, document_id: str) -> None:
        path = self._path_for(document_id)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Malformed note already gone: %s", path)
        except OSError as exc:
            raise NoteDeleteError(f"Failed to delete {path}: {exc}") from exc

    def write_pages(self, pages: Sequence[RenderedPage]) -> list[str]:
        written: list[str] = []
        for page in pages:
            path = self._page_path(page.name)
            self._atomic_write_text(path, page.text)
            written.append(str(path))
        return written

    def _page_path(self, name: str) -> Path:
        if not name or Path(name).name != name or name in {".", ".."}:
            raise OutputWriteError(f"Refusing to write page with unsafe name {name!r} into {self.notes_dir}")
        return self._path_for(name)

    def _atomic_write_text(self, path: Path, text: str) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(text, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise OutputWriteError(f"Failed to write {path}: {exc}") from exc


class FakeNoteRepository(AbstractNoteRepository):
    """In-memory repository for testing."""

    def __init__(self, notes: dict[str, str] | None = None) -> None:
        self.notes: dict[str, str] = dict(notes or {})
        self.pages: dict[str, str] = {}
        self.deleted: list[str] = []

    def list_note_ids(self) -> list[str]:
        return sorted(self.notes)

    def read_header_lines(self, document_id: str) -> list[str]:
        try:
            text = self.notes[document_id]
        except KeyError as exc:
            raise DocumentLoadError(f"Unknown note {document_id}") from exc
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        return [line.rstrip("\r") for line in lines[:HEADER_LINES]]

    def delete_note(self, document_id: str) -> None:
        if self.notes.pop(document_id, None) is not None:
            self.deleted.append(document_id)

    def write_pages(self, pages: Sequence[RenderedPage]) -> list[str]:
        for page in pages:
            self.pages[page.name] = page.text
        return [page.name for page in pages]
