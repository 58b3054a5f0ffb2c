"""Note header utilities.

Notes carry a fixed five-line header. Fields are identified by line position and
prefix, not by a YAML parser, because generated pages must round-trip byte for
byte in the external note viewer.

Example note header:
    ---
    Title: Weekly planning
    Id: 42
    Created: 20240101 09:15
    Tags: work planning

Generated pages close the header on the third line instead:
    ---
    Title: planning
    ---
"""

from collections.abc import Sequence

from note_indexer.domain.model import HEADER_LINES, NoteHeader, NoteIndexError


# Header delimiter (3 dashes)
DELIMITER = "---"

TITLE_PREFIX = "Title: "
CREATED_PREFIX = "Created:"
TAGS_PREFIX = "Tags:"

_TITLE_LINE = 1
_TERMINATOR_LINE = 2
_CREATED_LINE = 3
_TAGS_LINE = 4


class MalformedHeaderError(ValueError):
    """Raised when a header closes before its Created/Tags lines."""


class MissingCreatedError(NoteIndexError):
    """Raised when a ``Created:`` line carries neither a date nor a time."""


def parse_note_header(document_id: str, lines: Sequence[str]) -> NoteHeader:
    """Parse the header region of a note.

    Args:
        document_id: Filename-derived identifier (no suffix)
        lines: Header lines, without line terminators. Only the first
            ``HEADER_LINES`` entries are inspected.

    Returns:
        NoteHeader with whatever fields were present. Absent fields are
        listed in ``missing_fields``.

    Raises:
        MalformedHeaderError: the third line starts with ``---``
        MissingCreatedError: the ``Created:`` line has no tokens

    Example:
        >>> header = parse_note_header("n1", ["---", "Title: A", "Id: 1", "Created: 20240101 09:15", "Tags: x y"])
        >>> header.created_date, header.created_time, header.tags
        ('20240101', '09:15', ('x', 'y'))
    """
    lines = list(lines[:HEADER_LINES])
    title = ""
    created_date: str | None = None
    created_time = ""
    tags: tuple[str, ...] = ()
    missing: list[str] = []

    if len(lines) > _TERMINATOR_LINE and lines[_TERMINATOR_LINE].startswith(DELIMITER):
        raise MalformedHeaderError(f"{document_id}: header terminates on line {_TERMINATOR_LINE + 1}")

    if len(lines) > _TITLE_LINE and lines[_TITLE_LINE].startswith(TITLE_PREFIX):
        title = lines[_TITLE_LINE].removeprefix(TITLE_PREFIX)
    else:
        missing.append("title")

    if len(lines) > _CREATED_LINE and lines[_CREATED_LINE].startswith(CREATED_PREFIX):
        tokens = lines[_CREATED_LINE].removeprefix(CREATED_PREFIX).split()
        if not tokens:
            raise MissingCreatedError(f"{document_id}: 'Created:' line has no date or time")
        created_date = tokens[0]
        if len(tokens) > 1:
            created_time = tokens[1]
        else:
            missing.append("created_time")
    else:
        missing.append("created")

    if len(lines) > _TAGS_LINE and lines[_TAGS_LINE].startswith(TAGS_PREFIX):
        tags = tuple(lines[_TAGS_LINE].removeprefix(TAGS_PREFIX).split())
        if not tags:
            missing.append("tags")
    else:
        missing.append("tags")

    return NoteHeader(
        document_id=document_id,
        title=title,
        created_date=created_date,
        created_time=created_time,
        tags=tags,
        line_count=len(lines),
        missing_fields=tuple(missing),
    )


def serialize_header(title: str) -> str:
    """Serialize the header block of a generated page.

    Example:
        >>> serialize_header("index")
        '---\\nTitle: index\\n---\\n'
    """
    return f"{DELIMITER}\n{TITLE_PREFIX}{title}\n{DELIMITER}\n"
