# flockcrypt

Lock a file behind a password. The password is stretched into a 256-bit key
with Argon2id (a random 16-byte salt, 4 passes, 128 MiB of memory, 4 lanes),
and the file's contents are sealed with AES-256-GCM under a random 12-byte
nonce. Everything needed to derive the key again, except the password, is
stored in the encrypted file's header.

## Install

```
pip install flockcrypt
```

## Usage

```python
from flockcrypt.cipher import decrypt, encrypt, time_now
from flockcrypt.file import FlockFile
from flockcrypt.key import Key

password = b"password"

plain = FlockFile.load("notes.txt")
key = Key.new(password)                       # fresh salt and nonce

locked = encrypt(plain, key, time_now())
locked.with_path("notes.txt.flock").save()

print(locked.meta())                          # version, timestamp, salt and nonce

restored = decrypt(locked, key)
```

`FlockFile` holds a file's whole content (`data`) and its `path`. It is
immutable: `with_path` returns a copy bound to another path, and `save`
writes the content to the path, replacing whatever was there. `encrypt` and
`decrypt` return new `FlockFile` objects that keep the input's path.

`encrypt` takes an optional timestamp; when it is left out, the current time
from `time_now()` is written. `build_header(key, timestamp)` returns the
header on its own.

To open a locked file later, read its header with `FlockFile.meta()` and
rebuild the key from the stored parameters with `Key.load(params, password)`;
then pass that key to `decrypt`. `decrypt` uses the nonce held by the key,
not the one in the header, so the key must be the one rebuilt from that
header (or the one the file was encrypted with).

Password strings are encoded as UTF-8; bytes are used as they are.

## Errors

Failures are raised as `flockcrypt.errors.FlockError`, whose `code` is an
`ErrorCode` and whose `message` describes it:

- `INVKEY`: decryption failed authentication: a wrong password, a wrong
  nonce, or a changed header or ciphertext.
- `NOENC`: the data is shorter than a header plus tag, or (for `meta()`)
  does not start with the magic bytes.
- `EMPF`: `FlockFile.load` was given an empty file.
- `NFILE`: `FlockFile.load` was given something that is not a regular file.
- `NFOUND`: the path does not exist.
- `INVAL`: a salt, nonce, key or version of the wrong length, or a timestamp
  that does not fit in 64 unsigned bits.
- Other operating-system errors map to `NOMEM`, `BUSY` or `UDEF`; the
  original `OSError` is kept as `__cause__`.

## File layout

| Bytes | Field                                              |
|-------|----------------------------------------------------|
| 4     | magic `de ad be ef`                                |
| 3     | format version (major, minor, patch)               |
| 8     | timestamp, seconds since the epoch, little-endian  |
| 16    | Argon2id salt                                      |
| 12    | AES-GCM nonce                                      |
| n     | ciphertext                                         |
| 16    | GCM tag                                            |

The 43-byte header is authenticated as associated data, so any change to it
makes decryption fail. `flockcrypt.version.version_string()` reports the
format version this package writes, and `version_matches(a, b)` compares two
three-byte versions.

## What it does not do

flockcrypt is a library only: it has no command-line tool. It does not check
the format version when decrypting, and it reads and writes whole files in
memory rather than streaming them.

## Development

```
pip install -e ".[test]"
pytest
```