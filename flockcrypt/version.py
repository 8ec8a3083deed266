"""Format version written into every encrypted file."""

from __future__ import annotations

from .errors import ErrorCode, FlockError

VERSION_MAJOR = 0
VERSION_MINOR = 0
VERSION_PATCH = 0
VERSION_LEN = 3

_VERSION = bytes((VERSION_MAJOR, VERSION_MINOR, VERSION_PATCH))


def version_bytes() -> bytes:
    """Return the three version bytes: major, minor, patch."""
    return _VERSION


def version_string() -> str:
    """Return the version as ``major.minor.patch``."""
    return ".".join(str(part) for part in _VERSION)


def version_matches(a: bytes, b: bytes) -> bool:
    """Tell whether two three-byte versions are the same."""
    a, b = bytes(a), bytes(b)
    if len(a) != VERSION_LEN or len(b) != VERSION_LEN:
        raise FlockError(ErrorCode.INVAL, "a version is exactly three bytes")
    return a == b