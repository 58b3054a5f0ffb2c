"""Observability module: structured logging with run correlation."""

from note_indexer.observability.context import get_run_context, indexing_run
from note_indexer.observability.logging import JsonFormatter, RunContextFilter, configure_logging


__all__ = [
    "JsonFormatter",
    "RunContextFilter",
    "configure_logging",
    "get_run_context",
    "indexing_run",
]
