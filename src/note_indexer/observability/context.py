"""Run-scoped context propagated into every log record."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4


run_context: ContextVar[dict | None] = ContextVar("run_context", default=None)


def generate_run_id() -> str:
    """Generate a 12-char hex run ID."""
    return uuid4().hex[:12]


def get_run_context() -> dict:
    """Get the current run context, creating a run_id on first use."""
    ctx = run_context.get()
    if ctx is None or not ctx.get("run_id"):
        ctx = {"run_id": generate_run_id()}
        run_context.set(ctx)
    return ctx


@contextmanager
def indexing_run(**extra: object) -> Iterator[dict]:
    """Bind a fresh run_id (plus ``extra``) for the duration of one indexing run."""
    ctx = {"run_id": generate_run_id(), **extra}
    token = run_context.set(ctx)
    try:
        yield ctx
    finally:
        run_context.reset(token)
