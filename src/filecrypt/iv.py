from __future__ import annotations

import os
from typing import BinaryIO

from .config import IV_SIZE
from .errors import IOFailure, MalformedInputError


def generate_iv() -> bytes:
    return os.urandom(IV_SIZE)


def extract_iv(stream: BinaryIO) -> bytes:
    """Read the IV header from the start of an encrypted stream.

    Short reads are retried until the stream reports end of file, so a
    pipe or socket-like reader that returns a few bytes at a time still
    yields the full header.
    """
    header = b""
    while len(header) < IV_SIZE:
        try:
            chunk = stream.read(IV_SIZE - len(header))
        except OSError as exc:
            raise IOFailure("read", getattr(stream, "name", None), exc) from exc
        if not chunk:
            raise MalformedInputError()
        header += chunk
    return header
