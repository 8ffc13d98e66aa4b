from __future__ import annotations

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from .config import KEY_SIZE, SCRYPT_N, SCRYPT_P, SCRYPT_R, SCRYPT_SALT
from .errors import KeyDerivationError


def derive_key(password: str) -> bytes:
    try:
        kdf = Scrypt(
            salt=SCRYPT_SALT,
            length=KEY_SIZE,
            n=SCRYPT_N,
            r=SCRYPT_R,
            p=SCRYPT_P,
            backend=default_backend(),
        )
        return kdf.derive(password.encode("utf-8"))
    except (ValueError, MemoryError, UnsupportedAlgorithm) as exc:
        raise KeyDerivationError(f"Key derivation failed: {exc}") from exc
