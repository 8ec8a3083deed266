"""Password-based file encryption with Argon2id and AES-256-GCM."""

__version__ = "0.0.0"

__all__ = ["cipher", "errors", "file", "key", "version"]