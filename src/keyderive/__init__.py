"""
keyderive: Argon2id password hashing with a self-describing encoded format.
RU: Единая точка импорта для выработки ключа из пароля (Argon2id), проверки пароля
в константное время и валидации параметров.
EN: Single import point for password key derivation (Argon2id), constant-time
verification and parameter validation.
"""

from .exceptions import (
    CryptoError,
    HashingError,
    IncompatibleVersionError,
    InvalidHashFormatError,
    InvalidParametersError,
    KdfError,
    KeyDerivationError,
    MismatchedHashAndPasswordError,
    RandomSourceError,
)
from .params import DEFAULT_PARAMS, Argon2Profile, Params
from .kdf import ARGON2_VERSION, Argon2idKdf, derive_key
from .codec import ALGORITHM_TAG, DecodedHash, decode_hash, encode_hash
from .hashing import PasswordHasher, compare_hash_and_password, generate_from_password
from .utils import generate_random_bytes

__all__ = [
    # Hashing
    "PasswordHasher",
    "generate_from_password",
    "compare_hash_and_password",
    # Parameters
    "Params",
    "Argon2Profile",
    "DEFAULT_PARAMS",
    # Codec
    "ALGORITHM_TAG",
    "DecodedHash",
    "encode_hash",
    "decode_hash",
    # KDF / RNG
    "ARGON2_VERSION",
    "Argon2idKdf",
    "derive_key",
    "generate_random_bytes",
    # Errors
    "CryptoError",
    "KdfError",
    "InvalidParametersError",
    "KeyDerivationError",
    "RandomSourceError",
    "HashingError",
    "InvalidHashFormatError",
    "IncompatibleVersionError",
    "MismatchedHashAndPasswordError",
]

"""
Example: hash on registration, verify on login
from keyderive import generate_from_password, compare_hash_and_password, CryptoError
encoded = generate_from_password("qwerty123")
try:
    compare_hash_and_password(encoded, form_password)
except CryptoError:
    reject_login()  # one generic message for every failure kind
"""
