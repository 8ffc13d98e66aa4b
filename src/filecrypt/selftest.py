from __future__ import annotations

import logging
import secrets
import tempfile
from pathlib import Path
from typing import Optional

from .service import decrypt_file, encrypt_file

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE = b"filecrypt self-test \x00\xff" * 97


def run_self_test(sample: Optional[bytes] = None) -> bool:
    """Encrypt and decrypt a sample under a throwaway password."""
    data = DEFAULT_SAMPLE if sample is None else sample
    password = secrets.token_urlsafe(16)
    with tempfile.TemporaryDirectory() as tmp:
        plain = Path(tmp) / "sample.bin"
        enc = Path(tmp) / "sample.bin.encrypted"
        out = Path(tmp) / "sample.bin.decrypted"
        plain.write_bytes(data)
        encrypt_file(plain, enc, password)
        decrypt_file(enc, out, password)
        ok = out.read_bytes() == data and enc.read_bytes()[16:] != data
    logger.info("self-test %s (%d bytes)", "passed" if ok else "FAILED", len(data))
    return ok
