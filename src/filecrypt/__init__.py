from .errors import (
    CipherError,
    FileCryptoError,
    InvalidPaddingError,
    IOFailure,
    KeyDerivationError,
    MalformedInputError,
    OperationCancelled,
)
from .pipeline import Direction
from .service import decrypt_file, default_output_path, encrypt_file, run_file_crypto

__version__ = "0.1.0"
