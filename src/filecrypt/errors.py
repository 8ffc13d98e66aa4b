from __future__ import annotations

from .config import INVALID_FILE_MESSAGE


class FileCryptoError(Exception):
    """Base class for every failure reported by a file transform."""


class IOFailure(FileCryptoError):
    def __init__(self, action: str, path: str | None, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        if path:
            super().__init__(f"Cannot {action} {path}: {reason}")
        else:
            super().__init__(f"Cannot {action}: {reason}")


class MalformedInputError(FileCryptoError):
    def __init__(self, message: str = INVALID_FILE_MESSAGE) -> None:
        super().__init__(message)


class CipherError(FileCryptoError):
    pass


class InvalidPaddingError(CipherError):
    def __init__(
        self,
        message: str = "Decryption failed: wrong password or corrupted file",
    ) -> None:
        super().__init__(message)


class KeyDerivationError(FileCryptoError):
    pass


class OperationCancelled(FileCryptoError):
    def __init__(self, message: str = "Operation cancelled; output is incomplete") -> None:
        super().__init__(message)
