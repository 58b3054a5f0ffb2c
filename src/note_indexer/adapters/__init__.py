"""Adapters layer - note repository implementations."""

from .filesystem_repository import (
    AbstractNoteRepository,
    DocumentLoadError,
    FakeNoteRepository,
    FileSystemNoteRepository,
    NoteDeleteError,
    OutputWriteError,
)


__all__ = [
    "AbstractNoteRepository",
    "DocumentLoadError",
    "FakeNoteRepository",
    "FileSystemNoteRepository",
    "NoteDeleteError",
    "OutputWriteError",
]
