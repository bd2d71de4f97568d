"""
Shared path normalization and safety helpers.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path


def normalize_path(value: str) -> Path | None:
    """Expand and absolutize a user-supplied path without requiring it to exist."""
    if not value:
        return None
    if "\x00" in str(value):
        return None
    try:
        return Path(value).expanduser().resolve(strict=False)
    except (OSError, ValueError, RuntimeError):
        return None


def is_within_root(candidate: Path, root: Path) -> bool:
    try:
        root_resolved = root.resolve(strict=True)
        cand_resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    return cand_resolved == root_resolved or cand_resolved.is_relative_to(root_resolved)


def relative_parts(path: str, base: str) -> str:
    """Return ``path`` relative to ``base`` with forward slashes ('' for the base itself)."""
    try:
        rel = os.path.relpath(path, base)
    except ValueError:
        return ""
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def is_under_any_root(value: str, roots: Sequence[str]) -> bool:
    """
    True when `value` is one of `roots` or below one of them.

    Unlike `is_within_root` the path does not have to exist yet; symlinks in
    the existing part of the path are still resolved.
    """
    candidate = normalize_path(value)
    if candidate is None:
        return False
    for raw_root in roots:
        root = normalize_path(raw_root)
        if root is not None and (candidate == root or candidate.is_relative_to(root)):
            return True
    return False
