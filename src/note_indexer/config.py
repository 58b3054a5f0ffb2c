"""Centralized configuration for note-indexer using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_notes_dir() -> Path:
    return Path.home() / ".data"


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every value can be overridden from the command line; the environment (and an
    optional ``.env`` file) only supplies defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    notes_dir: Path = Field(default_factory=_default_notes_dir, description="Directory holding the notes to index")
    note_suffix: str = Field(default=".md", min_length=1, description="File suffix of notes and generated pages")
    index_name: str = Field(default="index", min_length=1, description="Page name of the master index")

    # Master index layout
    tag_columns: int = Field(default=5, ge=1, description="Columns per row in the tag summary")
    date_columns: int = Field(default=7, ge=1, description="Columns per row in the date summary")
    column_padding: int = Field(default=2, ge=0, description="Spaces between summary columns")

    # Lifecycle
    prune_malformed: bool = Field(
        default=True,
        description="Delete notes whose header terminates early (previously generated pages)",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Logging level"
    )
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("note_suffix")
    @classmethod
    def _check_suffix(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("NOTE_SUFFIX must start with '.' (e.g. '.md')")
        return value
