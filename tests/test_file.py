import os
import struct

import pytest

from flockcrypt.errors import ErrorCode, FlockError
from flockcrypt.file import (
    CIPHER_FILE_MIN_LEN,
    HEADER_LEN,
    FileMeta,
    FlockFile,
    has_magic,
    magic,
)
from flockcrypt.key import KeyParams


def _encrypted_like(version, timestamp, salt, nonce, body=b""):
    return magic() + version + struct.pack("<Q", timestamp) + salt + nonce + body


def test_magic_bytes():
    assert magic() == b"\xde\xad\xbe\xef"


def test_meta_length_boundary():
    data = _encrypted_like(b"\x00\x00\x00", 3, bytes(16), bytes(12), bytes(16))
    assert len(data) == 59
    assert HEADER_LEN == 43
    assert CIPHER_FILE_MIN_LEN == 59
    assert FlockFile(path="x", data=data).meta().timestamp == 3
    with pytest.raises(FlockError) as info:
        FlockFile(path="x", data=data[:-1]).meta()
    assert info.value.code == ErrorCode.NOENC


def test_has_magic():
    assert has_magic(magic() + b"rest")
    assert not has_magic(b"\x00\x01\x02\x03rest")
    assert not has_magic(b"\xde\xad")


def test_load_missing_file(tmp_path):
    with pytest.raises(FlockError) as info:
        FlockFile.load(tmp_path / "missing.bin")
    assert info.value.code == ErrorCode.NFOUND


def test_load_directory(tmp_path):
    with pytest.raises(FlockError) as info:
        FlockFile.load(tmp_path)
    assert info.value.code == ErrorCode.NFILE


def test_load_empty_file(tmp_path):
    target = tmp_path / "empty.bin"
    target.write_bytes(b"")
    with pytest.raises(FlockError) as info:
        FlockFile.load(target)
    assert info.value.code == ErrorCode.EMPF


def test_load_reads_content(tmp_path):
    target = tmp_path / "plain.txt"
    target.write_bytes(b"hello world")
    loaded = FlockFile.load(target)
    assert loaded.data == b"hello world"
    assert loaded.path == os.fspath(target)


def test_save_then_load_round_trip(tmp_path):
    target = tmp_path / "out.bin"
    FlockFile(path=target, data=b"\x00\x01payload\xff").save()
    assert target.read_bytes() == b"\x00\x01payload\xff"
    assert FlockFile.load(target).data == b"\x00\x01payload\xff"


def test_save_truncates_existing(tmp_path):
    target = tmp_path / "out.bin"
    target.write_bytes(b"a much longer previous content")
    FlockFile(path=target, data=b"short").save()
    assert target.read_bytes() == b"short"


def test_save_into_missing_directory(tmp_path):
    with pytest.raises(FlockError) as info:
        FlockFile(path=tmp_path / "nope" / "out.bin", data=b"x").save()
    assert info.value.code == ErrorCode.NFOUND


def test_meta_too_short():
    with pytest.raises(FlockError) as info:
        FlockFile(path="x", data=magic() + bytes(10)).meta()
    assert info.value.code == ErrorCode.NOENC


def test_meta_without_magic():
    with pytest.raises(FlockError) as info:
        FlockFile(path="x", data=bytes(CIPHER_FILE_MIN_LEN + 5)).meta()
    assert info.value.code == ErrorCode.NOENC


def test_meta_parses_fields():
    salt = bytes(range(16))
    nonce = bytes(range(100, 112))
    data = _encrypted_like(b"\x01\x02\x03", 1234567890, salt, nonce, bytes(16))
    meta = FlockFile(path="x", data=data).meta()
    assert meta == FileMeta(
        version=b"\x01\x02\x03",
        timestamp=1234567890,
        params=KeyParams(nonce=nonce, salt=salt),
    )


def test_meta_accepts_minimum_length():
    data = _encrypted_like(b"\x00\x00\x00", 7, bytes(16), bytes(12), bytes(16))
    assert len(data) == CIPHER_FILE_MIN_LEN
    assert FlockFile(path="x", data=data).meta().timestamp == 7


def test_with_path_keeps_data():
    original = FlockFile(path="a.txt", data=b"content")
    moved = original.with_path("b.txt")
    assert moved.path == "b.txt"
    assert moved.data == b"content"
    assert original.path == "a.txt"