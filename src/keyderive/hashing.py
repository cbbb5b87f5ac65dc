# keyderive/hashing.py
# -*- coding: utf-8 -*-
"""
RU: Хеширование паролей Argon2id: генерация самоописывающего хеша, проверка
пароля со сравнением в константное время и проверка необходимости перехеширования.

EN: Argon2id password hashing: generation of the self-describing hash, password
verification with constant-time comparison, and needs-rehash checks.

Flow:
- hash:   Params.check -> random salt -> Argon2id -> encode_hash
- verify: decode_hash -> Argon2id with decoded parameters -> secure_compare

Notes:
- All failures are raised to the caller; nothing here terminates the process.
- No secrets (passwords, salts, keys) are logged.
"""

from __future__ import annotations

import logging
from typing import Final, Optional, Union

from keyderive.codec import decode_hash, encode_hash
from keyderive.exceptions import MismatchedHashAndPasswordError, RandomSourceError
from keyderive.kdf import Argon2idKdf
from keyderive.params import DEFAULT_PARAMS, Params
from keyderive.protocols import KdfProtocol, RandomSourceProtocol
from keyderive.utils import generate_random_bytes, secure_compare

_LOGGER: Final = logging.getLogger(__name__)

Password = Union[str, bytes, bytearray]


class PasswordHasher:
    """
    Argon2id password hasher.

    Args:
        params: tuning parameters used for new hashes (checked on every hash()).
        kdf: key-derivation primitive (Argon2idKdf by default).
        random_source: callable returning n secure random bytes.

    Examples:
        >>> ph = PasswordHasher(DEFAULT_PARAMS.replace(memory=8192, iterations=1))
        >>> encoded = ph.hash("qwerty123")
        >>> ph.verify(encoded, "qwerty123")
        True
    """

    __slots__ = ("_params", "_kdf", "_random_source")

    def __init__(
        self,
        params: Params = DEFAULT_PARAMS,
        *,
        kdf: Optional[KdfProtocol] = None,
        random_source: Optional[RandomSourceProtocol] = None,
    ) -> None:
        self._params = params
        self._kdf: KdfProtocol = kdf if kdf is not None else Argon2idKdf()
        self._random_source: RandomSourceProtocol = (
            random_source if random_source is not None else generate_random_bytes
        )

    @property
    def params(self) -> Params:
        return self._params

    def _salt(self, length: int) -> bytes:
        try:
            salt = self._random_source(length)
        except (OSError, NotImplementedError) as exc:
            _LOGGER.error("Salt generation failed: %s", exc.__class__.__name__)
            raise RandomSourceError("Secure random source unavailable") from exc
        if not isinstance(salt, (bytes, bytearray)) or len(salt) != length:
            raise RandomSourceError("Secure random source returned a short read")
        return bytes(salt)

    def hash(self, password: Password) -> str:
        """
        Derive a key from password and return the encoded hash.

        Raises:
            InvalidParametersError: if params fail validation (nothing is derived).
            RandomSourceError: if no salt can be drawn.
            KeyDerivationError: if the primitive fails.
        """
        p = self._params
        p.check()

        salt = self._salt(p.salt_length)
        key = self._kdf.derive_key(
            password,
            salt,
            iterations=p.iterations,
            memory=p.memory,
            parallelism=p.parallelism,
            key_length=p.key_length,
        )
        _LOGGER.debug(
            "Password hashed with Argon2id (t=%d, m=%d, p=%d)",
            p.iterations,
            p.memory,
            p.parallelism,
        )
        return encode_hash(p, salt, key)

    def verify(self, encoded: Union[str, bytes], password: Password) -> bool:
        """
        Verify password against an encoded hash.

        The parameters embedded in the hash are used, not this hasher's.

        Returns:
            True on match.

        Raises:
            InvalidHashFormatError: malformed hash.
            IncompatibleVersionError: unsupported Argon2 version.
            MismatchedHashAndPasswordError: password does not match.
            KeyDerivationError: decoded parameters rejected by the primitive.
        """
        decoded = decode_hash(encoded)
        dp = decoded.params
        candidate = self._kdf.derive_key(
            password,
            decoded.salt,
            iterations=dp.iterations,
            memory=dp.memory,
            parallelism=dp.parallelism,
            key_length=dp.key_length,
        )
        if not secure_compare(candidate, decoded.key):
            _LOGGER.debug("Password verification failed")
            raise MismatchedHashAndPasswordError(
                "The hashed password does not match the hash of the given password"
            )
        return True

    def check_needs_rehash(self, encoded: Union[str, bytes]) -> bool:
        """
        Whether a stored hash was made with parameters other than this hasher's.

        Raises:
            InvalidHashFormatError, IncompatibleVersionError: malformed hash.
        """
        return decode_hash(encoded).params != self._params


def generate_from_password(password: Password, params: Params = DEFAULT_PARAMS) -> str:
    """Hash password with params and return the encoded hash."""
    return PasswordHasher(params).hash(password)


def compare_hash_and_password(encoded: Union[str, bytes], password: Password) -> None:
    """
    Check password against encoded hash in constant time.

    Returns None on success; raises MismatchedHashAndPasswordError on mismatch
    and propagates decode errors unchanged.
    """
    PasswordHasher().verify(encoded, password)


__all__ = [
    "PasswordHasher",
    "generate_from_password",
    "compare_hash_and_password",
]
