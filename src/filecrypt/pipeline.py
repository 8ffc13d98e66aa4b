from __future__ import annotations

import enum
import threading
from typing import BinaryIO, Optional

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .config import BLOCK_SIZE_BITS, CHUNK_SIZE, IV_SIZE, KEY_SIZE
from .errors import IOFailure, InvalidPaddingError, OperationCancelled


class Direction(str, enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"

    @property
    def past_tense(self) -> str:
        return f"{self.value}ed"


def _stream_name(stream: BinaryIO) -> Optional[str]:
    name = getattr(stream, "name", None)
    return name if isinstance(name, str) else None


def _read(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as exc:
        raise IOFailure("read", _stream_name(stream), exc) from exc


def _write(stream: BinaryIO, data: bytes) -> int:
    if not data:
        return 0
    try:
        stream.write(data)
    except OSError as exc:
        raise IOFailure("write", _stream_name(stream), exc) from exc
    return len(data)


def _chunks(
    source: BinaryIO,
    chunk_size: int,
    cancel: Optional[threading.Event],
):
    while True:
        if cancel is not None and cancel.is_set():
            raise OperationCancelled()
        chunk = _read(source, chunk_size)
        if not chunk:
            return
        yield chunk


def _encrypt(cipher: Cipher, source, dest, chunk_size, cancel) -> int:
    encryptor = cipher.encryptor()
    padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
    written = 0
    for chunk in _chunks(source, chunk_size, cancel):
        written += _write(dest, encryptor.update(padder.update(chunk)))
    final_padded = padder.finalize()
    written += _write(dest, encryptor.update(final_padded) + encryptor.finalize())
    return written


def _decrypt(cipher: Cipher, source, dest, chunk_size, cancel) -> int:
    decryptor = cipher.decryptor()
    unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
    written = 0
    for chunk in _chunks(source, chunk_size, cancel):
        written += _write(dest, unpadder.update(decryptor.update(chunk)))
    try:
        final_data = unpadder.update(decryptor.finalize()) + unpadder.finalize()
    except ValueError as exc:
        raise InvalidPaddingError() from exc
    written += _write(dest, final_data)
    return written


def transform(
    direction: Direction,
    key: bytes,
    iv: bytes,
    source: BinaryIO,
    dest: BinaryIO,
    *,
    chunk_size: int = CHUNK_SIZE,
    cancel: Optional[threading.Event] = None,
) -> int:
    """Stream ``source`` through AES-256-CBC into ``dest``.

    The IV is neither written nor read here: on encryption the caller has
    already written it, on decryption it has already been consumed from
    ``source``. Returns the number of bytes written to ``dest``.
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"Key must be {KEY_SIZE} bytes")
    if len(iv) != IV_SIZE:
        raise ValueError(f"IV must be {IV_SIZE} bytes")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    cipher = Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend())
    if Direction(direction) is Direction.ENCRYPT:
        return _encrypt(cipher, source, dest, chunk_size, cancel)
    return _decrypt(cipher, source, dest, chunk_size, cancel)
