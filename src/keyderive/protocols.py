# -*- coding: utf-8 -*-
"""
RU: Протоколы (DI-контракты) для внешних примитивов: функция выработки ключа
Argon2id и источник криптостойких случайных байт.

EN: Dependency-injection Protocols for the external collaborators: the Argon2id
key-derivation primitive and the secure random source.

Design notes:
- Protocols are @runtime_checkable to allow isinstance checks in tests.
- PasswordHasher accepts any object satisfying these contracts, so tests can
  substitute fast fakes for the memory-hard primitive.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

BytesLike = Union[bytes, bytearray]


@runtime_checkable
class KdfProtocol(Protocol):
    """Memory-hard key derivation; pure and deterministic for identical inputs."""

    def derive_key(
        self,
        password: Union[str, BytesLike],
        salt: bytes,
        *,
        iterations: int,
        memory: int,
        parallelism: int,
        key_length: int,
    ) -> bytes:
        """
        Derive key_length bytes from password and salt.

        Args:
            password: secret; str is UTF-8 encoded.
            salt: per-derivation random salt.
            iterations: passes over the memory.
            memory: working memory in KiB.
            parallelism: number of lanes; changes the output.
            key_length: output size in bytes.

        Returns:
            Derived key bytes.
        """
        ...


@runtime_checkable
class RandomSourceProtocol(Protocol):
    """Callable returning n cryptographically secure random bytes."""

    def __call__(self, n: int) -> bytes:
        ...


__all__ = [
    "BytesLike",
    "KdfProtocol",
    "RandomSourceProtocol",
]
