from __future__ import annotations

import contextlib
import errno
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from .config import CHUNK_SIZE
from .errors import IOFailure
from .iv import extract_iv, generate_iv
from .kdf import derive_key
from .pipeline import Direction, transform

logger = logging.getLogger(__name__)


def default_output_path(source_path: str | Path, direction: Direction | str) -> Path:
    direction = Direction(direction)
    source = Path(source_path)
    return source.with_name(f"{source.name}.{direction.past_tense}")


def _reject_same_file(source: Path, dest: Path) -> None:
    try:
        same = dest.exists() and os.path.samefile(source, dest)
    except OSError:
        # A missing source is reported when it is opened.
        return
    if same:
        raise IOFailure(
            "write",
            str(dest),
            OSError(errno.EINVAL, "destination is the source file"),
        )


def _open_output(dest: Path, atomic: bool) -> Tuple[BinaryIO, Optional[Path]]:
    try:
        if not atomic:
            return open(dest, "wb"), None
        fd, partial = tempfile.mkstemp(
            dir=dest.parent, prefix=f".{dest.name}.", suffix=".part"
        )
        return os.fdopen(fd, "wb"), Path(partial)
    except OSError as exc:
        raise IOFailure("open", str(dest), exc) from exc


def _finish_output(out: BinaryIO, dest: Path) -> None:
    try:
        out.flush()
        os.fsync(out.fileno())
        out.close()
    except OSError as exc:
        raise IOFailure("flush", str(dest), exc) from exc


def run_file_crypto(
    direction: Direction | str,
    source_path: str | Path,
    dest_path: str | Path,
    password: str,
    *,
    atomic: bool = True,
    chunk_size: int = CHUNK_SIZE,
    cancel: Optional[threading.Event] = None,
) -> None:
    """Encrypt or decrypt ``source_path`` into ``dest_path``.

    Encrypted output is ``IV || AES-256-CBC(PKCS#7(plaintext))`` with the key
    derived from ``password``. Every failure raises a ``FileCryptoError``
    subclass. With ``atomic`` (the default) output goes to a temporary file
    beside ``dest_path`` that replaces it only on success, so a failed or
    cancelled run never leaves a partial destination behind. Without it the
    destination is written in place and a partial file remains on failure.
    """
    direction = Direction(direction)
    source = Path(source_path)
    dest = Path(dest_path)
    _reject_same_file(source, dest)

    try:
        src = open(source, "rb")
    except OSError as exc:
        raise IOFailure("open", str(source), exc) from exc

    with src:
        out, partial = _open_output(dest, atomic)
        try:
            key = derive_key(password)
            if direction is Direction.ENCRYPT:
                iv = generate_iv()
                try:
                    out.write(iv)
                except OSError as exc:
                    raise IOFailure("write", str(dest), exc) from exc
            else:
                iv = extract_iv(src)
            written = transform(
                direction, key, iv, src, out, chunk_size=chunk_size, cancel=cancel
            )
            del key
            _finish_output(out, dest)
            if partial is not None:
                try:
                    os.replace(partial, dest)
                except OSError as exc:
                    raise IOFailure("replace", str(dest), exc) from exc
        except BaseException:
            with contextlib.suppress(OSError):
                out.close()
            if partial is not None:
                partial.unlink(missing_ok=True)
            raise

    logger.info("%s %s -> %s (%d bytes)", direction.past_tense, source, dest, written)


def encrypt_file(
    source_path: str | Path, dest_path: str | Path, password: str, **kwargs
) -> None:
    run_file_crypto(Direction.ENCRYPT, source_path, dest_path, password, **kwargs)


def decrypt_file(
    source_path: str | Path, dest_path: str | Path, password: str, **kwargs
) -> None:
    run_file_crypto(Direction.DECRYPT, source_path, dest_path, password, **kwargs)
