# -*- coding: utf-8 -*-
"""
RU: Провайдер Argon2id поверх argon2-cffi (низкоуровневый API, версия 19) с
best-effort затиранием паролей типа bytearray.

EN: Argon2id provider on top of argon2-cffi's low-level API (version 19) with
best-effort wiping of bytearray passwords.

The primitive is consumed, never reimplemented. Floor policy lives in
keyderive.params; this module only maps primitive failures to KeyDerivationError
so that tokens generated under older floors can still be re-derived.
"""
from __future__ import annotations

import logging
from typing import Final, Optional, Union

from argon2.exceptions import HashingError as _Argon2HashingError
from argon2.low_level import Type, hash_secret_raw

from keyderive.exceptions import KeyDerivationError
from keyderive.utils import zero_memory

_LOGGER: Final = logging.getLogger(__name__)

ARGON2_VERSION: Final[int] = 19  # Argon2 v1.3


def _password_bytes(password: Union[str, bytes, bytearray]) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    if isinstance(password, (bytes, bytearray)):
        return bytes(password)
    raise TypeError("Password must be str, bytes or bytearray")


class Argon2idKdf:
    """
    Argon2id key derivation (hybrid addressing, v1.3).

    Implements KdfProtocol.

    Examples:
        >>> kdf = Argon2idKdf()
        >>> key = kdf.derive_key(b"pw", b"saltsalt", iterations=1, memory=8192,
        ...                      parallelism=1, key_length=16)
        >>> len(key)
        16
    """

    __slots__ = ()

    def derive_key(
        self,
        password: Union[str, bytes, bytearray],
        salt: bytes,
        *,
        iterations: int,
        memory: int,
        parallelism: int,
        key_length: int,
    ) -> bytes:
        """
        Derive key_length bytes with Argon2id.

        A bytearray password is zeroed once the derivation returns.

        Raises:
            TypeError: if password or salt has an unsupported type.
            KeyDerivationError: if the primitive rejects the inputs or fails.
        """
        if not isinstance(salt, (bytes, bytearray)):
            raise TypeError("Salt must be bytes")

        try:
            pw_bytes = _password_bytes(password)
            try:
                dk: bytes = hash_secret_raw(
                    secret=pw_bytes,
                    salt=bytes(salt),
                    time_cost=iterations,
                    memory_cost=memory,
                    parallelism=parallelism,
                    hash_len=key_length,
                    type=Type.ID,
                    version=ARGON2_VERSION,
                )
            except (_Argon2HashingError, OverflowError, TypeError) as exc:
                _LOGGER.error("Argon2id derivation failed: %s", exc.__class__.__name__)
                raise KeyDerivationError("Argon2id failed") from exc
            _LOGGER.debug(
                "Argon2id derivation completed (t=%d, m=%d, p=%d)",
                iterations,
                memory,
                parallelism,
            )
            return dk
        finally:
            if isinstance(password, bytearray):
                zero_memory(password)


_DEFAULT_KDF: Final = Argon2idKdf()


def derive_key(
    password: Union[str, bytes, bytearray],
    salt: bytes,
    *,
    iterations: int,
    memory: int,
    parallelism: int,
    key_length: int,
    provider: Optional[Argon2idKdf] = None,
) -> bytes:
    """
    High-level Argon2id API.

    Args:
        password: user password or secret.
        salt: cryptographic salt.
        iterations: number of passes over the memory.
        memory: memory in KiB.
        parallelism: number of lanes.
        key_length: output key length in bytes.
        provider: KDF provider instance (shared default if None).

    Returns:
        Derived key bytes.
    """
    if provider is None:
        provider = _DEFAULT_KDF
    return provider.derive_key(
        password,
        salt,
        iterations=iterations,
        memory=memory,
        parallelism=parallelism,
        key_length=key_length,
    )


__all__ = [
    "ARGON2_VERSION",
    "Argon2idKdf",
    "derive_key",
]
