"""Domain model - value objects for notes and index postings.

The domain layer has no filesystem or logging dependencies. Header records are
Pydantic dataclasses so malformed extractor output is rejected at construction;
postings are plain frozen dataclasses because the index creates many of them.
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic.dataclasses import dataclass as pydantic_dataclass


# Number of lines that make up a note header
HEADER_LINES = 5


class NoteIndexError(RuntimeError):
    """Fatal condition that aborts the whole indexing run."""


@dataclass(frozen=True, slots=True)
class DocumentRef:
    """A posting: one note carrying one key.

    ``sort_field`` is key-universe specific. Tag postings leave it empty; date
    postings store the time of day used to order a date page.
    """

    document_id: str
    title: str
    sort_field: str = ""

    def link(self, *, with_sort_field: bool = False) -> str:
        """Render the ``[[id|title]]`` cross-reference (``[[id|sort|title]]`` for dates)."""
        if with_sort_field:
            return f"[[{self.document_id}|{self.sort_field}|{self.title}]]"
        return f"[[{self.document_id}|{self.title}]]"


@pydantic_dataclass(frozen=True)
class NoteHeader:
    """Structured view of a note's fixed five-line header.

    ``created_date`` is None when the note has no ``Created:`` line. Fields that
    were expected but not found are listed in ``missing_fields``.
    """

    document_id: str = Field(min_length=1)
    title: str = ""
    created_date: str | None = None
    created_time: str = ""
    tags: tuple[str, ...] = ()
    line_count: int = Field(default=0, ge=0)
    missing_fields: tuple[str, ...] = ()

    @property
    def is_truncated(self) -> bool:
        return self.line_count < HEADER_LINES
