from __future__ import annotations

import os

DEFAULT_CHUNK_SIZE = 64 * 1024


def parse_chunk_size(raw: str | None) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_CHUNK_SIZE
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"FILECRYPT_CHUNK_SIZE must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"FILECRYPT_CHUNK_SIZE must be positive, got {value}")
    return value


LOG_LEVEL = os.getenv("FILECRYPT_LOG_LEVEL", "INFO").upper()

# Invalid values are reported by cli.main; library callers get the default.
try:
    CHUNK_SIZE = parse_chunk_size(os.getenv("FILECRYPT_CHUNK_SIZE"))
except ValueError:
    CHUNK_SIZE = DEFAULT_CHUNK_SIZE

# On-disk format constants. Changing any of these breaks existing files.
KEY_SIZE = 32
IV_SIZE = 16
BLOCK_SIZE_BITS = 128

# Fixed salt shared by every file; a per-file salt would need a new header.
SCRYPT_SALT = b"salt"
SCRYPT_N = 2**14
SCRYPT_R = 8
SCRYPT_P = 1

INVALID_FILE_MESSAGE = "Invalid encrypted file"
