"""Domain layer: value objects shared by the extractor, index and renderer."""

from note_indexer.domain.model import DocumentRef, NoteHeader, NoteIndexError


__all__ = ["DocumentRef", "NoteHeader", "NoteIndexError"]
