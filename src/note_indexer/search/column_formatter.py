"""Column-aligned layout for whitespace-delimited token streams."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ColumnFormatter:
    """Lay tokens out in rows of ``columns_per_row`` left-justified columns.

    Token ``i`` lands in column ``i % columns_per_row``; each column is as wide
    as its widest token. Columns are separated by ``padding`` spaces and every
    row ends with a newline. An empty stream formats to the empty string.

    Example:
        >>> print(ColumnFormatter(2, padding=1).format("a bb ccc dd"), end="")
        a   bb
        ccc dd
    """

    columns_per_row: int
    padding: int = 2

    def __post_init__(self) -> None:
        if self.columns_per_row < 1:
            raise ValueError("columns_per_row must be >= 1")
        if self.padding < 0:
            raise ValueError("padding must be >= 0")

    def format(self, tokens: str | Iterable[str]) -> str:
        if isinstance(tokens, str):
            words = tokens.split()
        else:
            words = [word for token in tokens for word in token.split()]
        if not words:
            return ""

        widths = [0] * self.columns_per_row
        for position, word in enumerate(words):
            column = position % self.columns_per_row
            widths[column] = max(widths[column], len(word))

        gap = " " * self.padding
        parts: list[str] = []
        for position, word in enumerate(words):
            column = position % self.columns_per_row
            parts.append(word.ljust(widths[column]))
            parts.append(gap if column < self.columns_per_row - 1 else "\n")

        output = "".join(parts)
        if not output.endswith("\n"):
            output += "\n"
        return output
