"""Render populated indexes into key pages and the master index.

Everything here is pure: pages are produced as text and handed to the
repository for writing. Date keys are validated while the master index is
rendered, so a bad key aborts the run before any file is touched.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import re

from note_indexer.domain.model import DocumentRef, NoteIndexError
from note_indexer.search.column_formatter import ColumnFormatter
from note_indexer.search.inverted_index import InvertedIndex
from note_indexer.utils.front_matter import serialize_header


LIST_MARKER = "#list"
TAGS_HEADING = "# Tags"
DATES_HEADING = "# Dates"

DEFAULT_TAG_COLUMNS = 5
DEFAULT_DATE_COLUMNS = 7

_DATE_KEY_PATTERN = re.compile(r"[0-9]+")


class DateKeyError(NoteIndexError, ValueError):
    """Raised when a date key cannot be read as a non-negative integer."""


@dataclass(frozen=True, slots=True)
class RenderedPage:
    """A generated page: ``name`` is the page title and file stem."""

    name: str
    text: str


def render_key_page(key: str, postings: Sequence[DocumentRef], *, dated: bool = False) -> str:
    """Render one key page.

    Date pages list postings ordered by time of day (stable for equal times);
    tag pages keep insertion order.
    """
    if dated:
        postings = sorted(postings, key=lambda ref: ref.sort_field)
    body = "".join(f"{ref.link(with_sort_field=dated)}\n" for ref in postings)
    return f"{serialize_header(key)}\n{LIST_MARKER}\n{body}"


def render_key_pages(index: InvertedIndex, *, dated: bool = False) -> list[RenderedPage]:
    pages = []
    for key in sorted(index.all_keys()):
        postings = index.postings_of(key) or ()
        pages.append(RenderedPage(key, render_key_page(key, postings, dated=dated)))
    return pages


def parse_date_key(key: str) -> int:
    if not _DATE_KEY_PATTERN.fullmatch(key):
        raise DateKeyError(f"Date key {key!r} is not a non-negative integer")
    return int(key)


def tag_summary_tokens(index: InvertedIndex) -> list[str]:
    """``key(count)`` tokens, most frequent first, ties by key."""
    ordered = sorted(index.counts().items(), key=lambda item: (-item[1], item[0]))
    return [f"{key}({count})" for key, count in ordered]


def date_summary_tokens(index: InvertedIndex) -> list[str]:
    """``[[date]](count)`` tokens, newest (largest integer) first."""
    parsed = [(parse_date_key(key), key, count) for key, count in index.counts().items()]
    parsed.sort(key=lambda item: (-item[0], item[1]))
    return [f"[[{key}]]({count})" for _, key, count in parsed]


class IndexRenderer:
    """Render the master index and every key page for a tag and a date index."""

    def __init__(
        self,
        *,
        tag_formatter: ColumnFormatter | None = None,
        date_formatter: ColumnFormatter | None = None,
        index_name: str = "index",
    ) -> None:
        self.tag_formatter = tag_formatter or ColumnFormatter(DEFAULT_TAG_COLUMNS, padding=2)
        self.date_formatter = date_formatter or ColumnFormatter(DEFAULT_DATE_COLUMNS)
        self.index_name = index_name

    def render_master_index(self, tags: InvertedIndex, dates: InvertedIndex) -> str:
        # Each formatted block ends with its own newline; the extra one keeps a
        # blank line before the next heading.
        tag_block = self.tag_formatter.format(tag_summary_tokens(tags))
        date_block = self.date_formatter.format(date_summary_tokens(dates))
        return (
            f"{serialize_header(self.index_name)}\n"
            f"{TAGS_HEADING}\n{tag_block}\n"
            f"{DATES_HEADING}\n{date_block}\n"
        )

    def render_all(self, tags: InvertedIndex, dates: InvertedIndex) -> list[RenderedPage]:
        """Render every page; raises DateKeyError before returning anything."""
        master = RenderedPage(self.index_name, self.render_master_index(tags, dates))
        pages = render_key_pages(tags)
        pages.extend(render_key_pages(dates, dated=True))
        pages.append(master)
        return pages
