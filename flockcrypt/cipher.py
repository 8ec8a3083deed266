"""AES-256-GCM encryption of whole files, with the header as associated data."""

from __future__ import annotations

import struct
import time

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import ErrorCode, FlockError
from .file import CIPHER_FILE_MIN_LEN, HEADER_LEN, FlockFile, magic
from .key import Key
from .version import version_bytes

_TIMESTAMP = struct.Struct("<Q")


def time_now() -> int:
    """Current time in whole seconds since the epoch."""
    return int(time.time())


def build_header(key: Key, timestamp: int | None = None) -> bytes:
    """Build the header: magic, version, timestamp, salt, nonce."""
    if timestamp is None:
        timestamp = time_now()
    try:
        stamp = _TIMESTAMP.pack(timestamp)
    except struct.error as exc:
        raise FlockError(ErrorCode.INVAL, "timestamp must fit in 64 unsigned bits") from exc
    header = magic() + version_bytes() + stamp + key.params.salt + key.params.nonce
    if len(header) != HEADER_LEN:
        raise FlockError(ErrorCode.UDEF, "header has the wrong length")
    return header


def _aead(key: Key) -> AESGCM:
    try:
        return AESGCM(key.material)
    except ValueError as exc:
        raise FlockError(ErrorCode.INVAL, str(exc)) from exc


def encrypt(file: FlockFile, key: Key, timestamp: int | None = None) -> FlockFile:
    """Encrypt a file's content; the result keeps the file's path."""
    header = build_header(key, timestamp)
    sealed = _aead(key).encrypt(key.params.nonce, file.data, header)
    out = header + sealed
    if len(out) != len(file.data) + CIPHER_FILE_MIN_LEN:
        raise FlockError(ErrorCode.UDEF, "ciphertext has the wrong length")
    return FlockFile(path=file.path, data=out)


def decrypt(file: FlockFile, key: Key) -> FlockFile:
    """Decrypt an encrypted file's content; the result keeps the file's path."""
    if len(file.data) < CIPHER_FILE_MIN_LEN:
        raise FlockError(ErrorCode.NOENC)
    header = file.data[:HEADER_LEN]
    try:
        plain = _aead(key).decrypt(key.params.nonce, file.data[HEADER_LEN:], header)
    except InvalidTag as exc:
        raise FlockError(ErrorCode.INVKEY) from exc
    return FlockFile(path=file.path, data=plain)