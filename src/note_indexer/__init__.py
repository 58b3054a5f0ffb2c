"""Static tag/date index generator for markdown note directories."""

from note_indexer.search.column_formatter import ColumnFormatter
from note_indexer.search.indexer import IndexBuildResult, NoteIndexer
from note_indexer.search.inverted_index import InvertedIndex, normalize_key


__all__ = [
    "ColumnFormatter",
    "IndexBuildResult",
    "InvertedIndex",
    "NoteIndexer",
    "normalize_key",
]
