"""
Map OS errors onto the storage error taxonomy.
"""
from __future__ import annotations

import errno
from typing import Any

from ...shared import ErrorCode, Result

_ERRNO_NAMES: dict[str, ErrorCode] = {
    "ENOENT": ErrorCode.NOT_FOUND,
    "ENOTDIR": ErrorCode.NOT_FOUND,
    "EACCES": ErrorCode.PERMISSION_DENIED,
    "EPERM": ErrorCode.PERMISSION_DENIED,
    "EROFS": ErrorCode.PERMISSION_DENIED,
    "ENOSPC": ErrorCode.DISK_FULL,
    "EDQUOT": ErrorCode.DISK_FULL,
    "ENOTEMPTY": ErrorCode.DIRECTORY_NOT_EMPTY,
    "EEXIST": ErrorCode.DIRECTORY_NOT_EMPTY,
    "EXDEV": ErrorCode.CROSS_DEVICE,
}

# EDQUOT is not defined on every platform.
_ERRNO_CODES: dict[int, ErrorCode] = {
    getattr(errno, name): code for name, code in _ERRNO_NAMES.items() if hasattr(errno, name)
}


def classify_os_error(exc: BaseException) -> ErrorCode:
    """Return the ErrorCode for an OSError (IO_ERROR when unrecognized)."""
    if isinstance(exc, FileNotFoundError):
        return ErrorCode.NOT_FOUND
    if isinstance(exc, PermissionError):
        return ErrorCode.PERMISSION_DENIED
    code = getattr(exc, "errno", None)
    if isinstance(code, int):
        return _ERRNO_CODES.get(code, ErrorCode.IO_ERROR)
    return ErrorCode.IO_ERROR


def os_error_result(exc: OSError, action: str, path: Any = None) -> Result[Any]:
    """
    Build an error Result for a failed filesystem call.

    Args:
        exc: The OSError raised by the OS call
        action: Short verb phrase for the message ("read file", "move file")
        path: Path involved, kept in meta for callers that log it

    Returns:
        Result.Err carrying the classified code, the errno and the path
    """
    code = classify_os_error(exc)
    reason = exc.strerror or str(exc) or code.value
    return Result.Err(
        code,
        f"Failed to {action}: {reason}",
        errno=getattr(exc, "errno", None),
        path=str(path) if path is not None else None,
    )
