"""Password-derived AES-256-GCM keys and their parameters."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.kdf.argon2 import Argon2id

from .errors import ErrorCode, FlockError

KEY_LEN = 32
SALT_LEN = 16
NONCE_LEN = 12
TIME_COST = 4
MEMORY_COST = 1024 * 128  # KiB
THREAD_COST = 4


def _password_bytes(password: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray, memoryview)):
        return bytes(password)
    raise FlockError(ErrorCode.INVAL, "password must be str or bytes")


def derive_key(password: str | bytes, salt: bytes) -> bytes:
    """Derive a 32-byte key from a password and salt with Argon2id."""
    salt = bytes(salt)
    if len(salt) != SALT_LEN:
        raise FlockError(ErrorCode.INVAL, f"salt must be {SALT_LEN} bytes")
    secret = _password_bytes(password)
    try:
        kdf = Argon2id(
            salt=salt,
            length=KEY_LEN,
            iterations=TIME_COST,
            lanes=THREAD_COST,
            memory_cost=MEMORY_COST,
        )
        return kdf.derive(secret)
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise FlockError(ErrorCode.UDEF, f"key derivation failed: {exc}") from exc


@dataclass(frozen=True)
class KeyParams:
    """The nonce and salt stored in a file header."""

    nonce: bytes
    salt: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "nonce", bytes(self.nonce))
        object.__setattr__(self, "salt", bytes(self.salt))
        if len(self.nonce) != NONCE_LEN:
            raise FlockError(ErrorCode.INVAL, f"nonce must be {NONCE_LEN} bytes")
        if len(self.salt) != SALT_LEN:
            raise FlockError(ErrorCode.INVAL, f"salt must be {SALT_LEN} bytes")

    @classmethod
    def random(cls) -> KeyParams:
        """Fresh random nonce and salt."""
        return cls(nonce=secrets.token_bytes(NONCE_LEN), salt=secrets.token_bytes(SALT_LEN))

    @classmethod
    def zero(cls) -> KeyParams:
        """All-zero nonce and salt."""
        return cls(nonce=bytes(NONCE_LEN), salt=bytes(SALT_LEN))


@dataclass(frozen=True)
class Key:
    """A derived key together with the parameters it was made with."""

    params: KeyParams
    material: bytes = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "material", bytes(self.material))
        if len(self.material) != KEY_LEN:
            raise FlockError(ErrorCode.INVAL, f"key must be {KEY_LEN} bytes")

    @classmethod
    def new(cls, password: str | bytes) -> Key:
        """Derive a key from a password with fresh random parameters."""
        params = KeyParams.random()
        return cls(params=params, material=derive_key(password, params.salt))

    @classmethod
    def load(cls, params: KeyParams, password: str | bytes) -> Key:
        """Derive the key for parameters read back from a file."""
        return cls(params=params, material=derive_key(password, params.salt))

    @classmethod
    def zero(cls) -> Key:
        """A key whose material and parameters are all zero."""
        return cls(params=KeyParams.zero(), material=bytes(KEY_LEN))