# -*- coding: utf-8 -*-
"""
RU: Иерархия исключений для хеширования паролей Argon2id: параметры, генератор
случайных чисел, формат закодированного хеша и несовпадение пароля.

EN: Exception hierarchy for Argon2id password hashing: parameters, random source,
encoded hash format and password mismatch.

Guidelines:
- Never put passwords, salts or derived keys into exception messages.
- Callers should map InvalidHashFormatError, IncompatibleVersionError and
  MismatchedHashAndPasswordError to one generic "invalid credentials" answer.
"""

from __future__ import annotations

from typing import Optional


class CryptoError(Exception):
    """Base exception for all keyderive failures."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


# KDF
class KdfError(CryptoError):
    """Base class for key-derivation failures."""


class InvalidParametersError(KdfError):
    """Raised when Params fail the minimum-floor policy or Argon2 limits."""


class KeyDerivationError(KdfError):
    """Raised when the Argon2id primitive itself fails."""


# RNG
class RandomSourceError(CryptoError):
    """Raised when the secure random source cannot produce bytes."""


# Encoded hashes
class HashingError(CryptoError):
    """Base class for encoded hash and verification errors."""


class InvalidHashFormatError(HashingError):
    """Raised when an encoded hash is not in the correct format."""


class IncompatibleVersionError(HashingError):
    """Raised when an encoded hash declares an unsupported Argon2 version."""


class MismatchedHashAndPasswordError(HashingError):
    """Raised when a password does not match the encoded hash."""


__all__ = [
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
