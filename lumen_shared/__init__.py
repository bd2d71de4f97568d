"""Shared utilities for the Lumen media server."""
from .errors import sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import timer
from .types import (
    EXTENSIONS,
    MIME_TYPES,
    SUPPORTED_EXTENSIONS,
    ErrorCode,
    FileKind,
    classify_file,
    guess_mime_type,
)

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "timer",
    "FileKind",
    "ErrorCode",
    "EXTENSIONS",
    "MIME_TYPES",
    "SUPPORTED_EXTENSIONS",
    "classify_file",
    "guess_mime_type",
    "sanitize_error_message",
]
