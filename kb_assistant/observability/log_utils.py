"""
Structured log context helpers.

Attach key/value context to log records as ``extra`` fields. Values are
rendered to short strings first: embedding vectors, numpy arrays and
chunk records are summarized so a log line never carries a whole vector
or document body.

Dependencies: logging (stdlib), numpy, pydantic
System role: Logging helper functions
"""

import logging
from typing import Any

import numpy as np
from pydantic import BaseModel

from kb_assistant.core.exceptions import KnowledgeBaseError
from kb_assistant.models.chunk import Chunk, ScoredChunk

MAX_VALUE_LENGTH = 500


def _summarize(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return value
    if isinstance(value, np.ndarray):
        return f"ndarray(shape={value.shape}, dtype={value.dtype})"
    if isinstance(value, ScoredChunk):
        return f"{value.chunk.id}@{value.score:.4f}"
    if isinstance(value, Chunk):
        return f"Chunk({value.id})"
    if isinstance(value, BaseModel):
        return type(value).__name__
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    return str(value)


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Args:
        value: Any value
        max_length: Longest rendering kept before truncation

    Returns:
        str: Short representation; never raises
    """
    try:
        rendered = _summarize(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"
    if len(rendered) > max_length:
        return rendered[:max_length] + f"... (truncated, {len(rendered)} total)"
    return rendered


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any,
) -> None:
    """Log message at level with each context value passed through safe_log_value."""
    logger.log(level, message, extra={key: safe_log_value(val) for key, val in context.items()})


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context: Any,
) -> None:
    """
    Log an exception with its traceback and context.

    Domain errors contribute their ``details`` (path, model, field, ...)
    as context; explicit keyword context wins on a clash.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception being reported
        **context: Additional context
    """
    merged: dict[str, Any] = {}
    if isinstance(exc, KnowledgeBaseError):
        merged.update(exc.details)
    merged.update(context)
    merged["error_type"] = type(exc).__name__
    merged["error_msg"] = exc.message if isinstance(exc, KnowledgeBaseError) else str(exc)
    logger.error(
        message,
        exc_info=exc,
        extra={key: safe_log_value(val) for key, val in merged.items()},
    )
