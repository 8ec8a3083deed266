"""Error codes and the exception raised throughout the package."""

from __future__ import annotations

import errno
import os
from enum import IntEnum


class ErrorCode(IntEnum):
    """Numeric error codes shared by every operation."""

    OK = 0
    UDEF = -1
    NOMEM = -2
    BUSY = -3
    INVAL = -4
    EMPF = -5
    NOENC = -6
    NODEC = -7
    INVKEY = -8
    NFILE = -9
    NFOUND = -10


_DEFAULT_MESSAGES = {
    ErrorCode.OK: "success",
    ErrorCode.UDEF: "undefined error",
    ErrorCode.NOMEM: "out of memory",
    ErrorCode.BUSY: "resource busy",
    ErrorCode.INVAL: "invalid argument",
    ErrorCode.EMPF: "empty file",
    ErrorCode.NOENC: "file is not encrypted",
    ErrorCode.NODEC: "no decryption key set",
    ErrorCode.INVKEY: "invalid key",
    ErrorCode.NFILE: "not a regular file",
    ErrorCode.NFOUND: "not found",
}

_ERRNO_CODES = {
    errno.ENOMEM: ErrorCode.NOMEM,
    errno.EBUSY: ErrorCode.BUSY,
    errno.ENOENT: ErrorCode.NFOUND,
    errno.EINVAL: ErrorCode.INVAL,
}


class FlockError(Exception):
    """An operation failed; ``code`` says why."""

    def __init__(self, code: ErrorCode | int, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        self.message = message if message is not None else _DEFAULT_MESSAGES[self.code]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"FlockError({self.code.name}, {self.message!r})"


def error_from_errno(err: int) -> FlockError:
    """Build a FlockError for an operating-system error number."""
    code = _ERRNO_CODES.get(err, ErrorCode.UDEF)
    try:
        message = os.strerror(err)
    except ValueError:
        message = _DEFAULT_MESSAGES[code]
    return FlockError(code, message)


def error_from_oserror(exc: OSError) -> FlockError:
    """Build a FlockError from an OSError, keeping it as the cause."""
    if exc.errno is None:
        error = FlockError(ErrorCode.UDEF, str(exc) or None)
    else:
        error = error_from_errno(exc.errno)
    error.__cause__ = exc
    return error