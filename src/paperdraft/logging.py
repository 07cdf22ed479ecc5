"""Logging utilities."""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Any

from rich.logging import RichHandler


_document_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "paperdraft_document_id", default="-"
)
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("paperdraft_step", default="-")


class _ContextFilter(logging.Filter):
    """Inject document context into log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.document_id = _document_id_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def document_context(*, document_id: str, step: str | None = None) -> Any:
    """Temporarily bind document context for structured logging.

    Args:
        document_id: Identifier of the paper being edited.
        step: Optional step identifier.
    """

    token_doc = _document_id_var.set(document_id)
    token_step = _step_var.set(step or _step_var.get())
    try:
        yield
    finally:
        _document_id_var.reset(token_doc)
        _step_var.reset(token_step)


def set_step(step: str) -> None:
    """Update current step in context."""

    _step_var.set(step)


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Logging level name.
    """

    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    handler.addFilter(_ContextFilter())

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s doc=%(document_id)s step=%(step)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    # configure_logging may run once per CLI command and once per API app
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if isinstance(h, RichHandler):
                h.addFilter(_ContextFilter())
                h.setFormatter(formatter)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, *, section_id: str | None = None) -> None:
    """Log the active exception, naming the section it concerns.

    The document id and step come from :func:`document_context` via the record filter.
    """

    if section_id is None:
        logger.exception("%s", msg)
    else:
        logger.exception("%s [section=%s]", msg, section_id)
