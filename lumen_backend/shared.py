"""Backend-facing alias for shared utilities."""

from __future__ import annotations

from lumen_shared import (
    EXTENSIONS,
    MIME_TYPES,
    SUPPORTED_EXTENSIONS,
    ErrorCode,
    FileKind,
    Result,
    classify_file,
    get_logger,
    guess_mime_type,
    log_structured,
    log_success,
    request_id_var,
    sanitize_error_message,
    timer,
)

__all__ = [
    "Result",
    "ErrorCode",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "classify_file",
    "guess_mime_type",
    "sanitize_error_message",
    "timer",
    "FileKind",
    "EXTENSIONS",
    "MIME_TYPES",
    "SUPPORTED_EXTENSIONS",
]
