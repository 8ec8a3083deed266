"""Files held in memory, and the header stored at the start of encrypted ones."""

from __future__ import annotations

import os
import stat
import struct
from dataclasses import dataclass, replace

from .errors import ErrorCode, FlockError, error_from_oserror
from .key import NONCE_LEN, SALT_LEN, KeyParams
from .version import VERSION_LEN

MAGIC_LEN = 4
TIMESTAMP_LEN = 8
TAG_LEN = 16
HEADER_LEN = MAGIC_LEN + VERSION_LEN + TIMESTAMP_LEN + SALT_LEN + NONCE_LEN
CIPHER_FILE_MIN_LEN = HEADER_LEN + TAG_LEN

_MAGIC = bytes((0xDE, 0xAD, 0xBE, 0xEF))
_TIMESTAMP = struct.Struct("<Q")
_O_CLOEXEC = getattr(os, "O_CLOEXEC", 0)


def magic() -> bytes:
    """Return the four bytes every encrypted file starts with."""
    return _MAGIC


def has_magic(data: bytes) -> bool:
    """Tell whether ``data`` starts with the magic bytes."""
    return bytes(data[:MAGIC_LEN]) == _MAGIC


@dataclass(frozen=True)
class FileMeta:
    """Header fields read from an encrypted file."""

    version: bytes
    timestamp: int
    params: KeyParams


@dataclass(frozen=True)
class FlockFile:
    """The whole content of a file, together with the path it belongs to."""

    path: str
    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", os.fspath(self.path))
        object.__setattr__(self, "data", bytes(self.data))

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> FlockFile:
        """Read a regular, non-empty file into memory."""
        path = os.fspath(path)
        try:
            fd = os.open(path, os.O_RDONLY | _O_CLOEXEC)
        except IsADirectoryError as exc:
            raise FlockError(ErrorCode.NFILE, f"{path} is not a regular file") from exc
        except OSError as exc:
            raise error_from_oserror(exc) from exc
        try:
            with os.fdopen(fd, "rb") as handle:
                info = os.fstat(handle.fileno())
                if not stat.S_ISREG(info.st_mode):
                    raise FlockError(ErrorCode.NFILE, f"{path} is not a regular file")
                if info.st_size == 0:
                    raise FlockError(ErrorCode.EMPF, f"{path} is empty")
                data = handle.read()
        except OSError as exc:
            raise error_from_oserror(exc) from exc
        return cls(path=path, data=data)

    def save(self) -> None:
        """Write the content to the path, replacing what was there."""
        try:
            fd = os.open(
                self.path, os.O_RDWR | os.O_TRUNC | os.O_CREAT | _O_CLOEXEC, 0o664
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(self.data)
                handle.flush()
                os.fsync(handle.fileno())
        except OSError as exc:
            raise error_from_oserror(exc) from exc

    def meta(self) -> FileMeta:
        """Read the header of an encrypted file."""
        if len(self.data) < CIPHER_FILE_MIN_LEN or not has_magic(self.data):
            raise FlockError(ErrorCode.NOENC)
        offset = MAGIC_LEN
        version = self.data[offset : offset + VERSION_LEN]
        offset += VERSION_LEN
        (timestamp,) = _TIMESTAMP.unpack_from(self.data, offset)
        offset += TIMESTAMP_LEN
        salt = self.data[offset : offset + SALT_LEN]
        offset += SALT_LEN
        nonce = self.data[offset : offset + NONCE_LEN]
        return FileMeta(
            version=version,
            timestamp=timestamp,
            params=KeyParams(nonce=nonce, salt=salt),
        )

    def with_path(self, path: str | os.PathLike[str]) -> FlockFile:
        """Return the same content bound to another path."""
        return replace(self, path=os.fspath(path))