"""
Client-safe error messages.

Storage errors carry host paths (in meta and sometimes in the message); HTTP
handlers pass messages through `sanitize_error_message` so no filesystem
layout reaches a client.
"""
from __future__ import annotations

import os
import re
from typing import Any

from .log import get_logger

logger = get_logger(__name__)

_DEBUG_ERRORS = os.getenv("LUMEN_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
_MAX_DETAIL_CHARS = 200
_PATH_MASK = "[path]"
_PATH_PATTERNS = (
    re.compile(r"[A-Za-z]:\\\S+"),  # C:\media\a.jpg
    re.compile(r"\\\\[^\s\\]+\\\S+"),  # \\nas\share\a.jpg
    re.compile(r"(?<![A-Za-z0-9:/?&=#%])/(?!/)[^\s#?'\"]+"),  # /srv/media/a.jpg
)


def mask_paths(text: str) -> str:
    for pattern in _PATH_PATTERNS:
        text = pattern.sub(_PATH_MASK, text)
    return text


def sanitize_error_message(error: Any, fallback: str) -> str:
    """
    Build the message sent to clients for a failed operation.

    Args:
        error: Error text or exception (None allowed)
        fallback: Operation summary, e.g. "Library scan failed"

    Returns:
        "<fallback>: <detail>" with paths masked and the detail flattened to
        one line and capped, or `fallback` alone when there is no detail
    """
    detail = " ".join(mask_paths(str(error or "")).split())[:_MAX_DETAIL_CHARS]
    if _DEBUG_ERRORS and detail:
        logger.debug("Client error detail: %s", detail)
    return f"{fallback}: {detail}" if detail else fallback
