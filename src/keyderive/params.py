# -*- coding: utf-8 -*-
"""
RU: Параметры Argon2id (память, итерации, параллелизм, длины соли и ключа) с
проверкой минимальных порогов и профилями для разных устройств.

EN: Argon2id parameters (memory, iterations, parallelism, salt and key length)
with minimum-floor validation and device-specific profiles.

The floors are a generation-time gate only: decoding a stored hash never
re-checks them, so hashes produced under older floors remain verifiable.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Final

from keyderive.exceptions import InvalidParametersError

MIN_MEMORY: Final[int] = 8 * 1024  # KiB
MIN_ITERATIONS: Final[int] = 1
MIN_PARALLELISM: Final[int] = 1
MIN_SALT_LENGTH: Final[int] = 8
MIN_KEY_LENGTH: Final[int] = 16

MAX_U32: Final[int] = 2**32 - 1  # width of every numeric Argon2 input
_MAX_LANES: Final[int] = 2**24 - 1
_MAX_SALT_LENGTH: Final[int] = 1024
_BLOCKS_PER_LANE: Final[int] = 8


class Argon2Profile(str, Enum):
    """Predefined Argon2id parameter profiles for different device capabilities."""

    # Login forms and APIs (same as DEFAULT_PARAMS)
    INTERACTIVE = "interactive"

    # Desktop/laptop unlock of local secrets
    DESKTOP = "desktop"

    # High-value server-side credentials
    SERVER = "server"

    # Exactly the floor values; tests and constrained devices only
    MINIMUM = "minimum"


@dataclass(frozen=True)
class Params:
    """
    Argon2id tuning parameters.

    Attributes:
        memory: Memory usage in KiB (>= 8192).
        iterations: Passes over the memory (>= 1).
        parallelism: Lanes; changes the derived output, not only the runtime (>= 1).
        salt_length: Random salt length in bytes (>= 8, 16 recommended).
        key_length: Derived key length in bytes (>= 16).

    Examples:
        >>> DEFAULT_PARAMS.memory
        65536
        >>> DEFAULT_PARAMS.replace(memory=128 * 1024).memory
        131072
    """

    memory: int
    iterations: int
    parallelism: int
    salt_length: int
    key_length: int

    def check(self) -> None:
        """
        Validate against the minimum floors and Argon2 structural limits.

        Raises:
            InvalidParametersError: on the first failing field.
        """
        for name in ("memory", "iterations", "parallelism", "salt_length", "key_length"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParametersError(f"{name} must be an integer")
            if value > MAX_U32:
                raise InvalidParametersError(f"{name} must fit in 32 bits")

        if self.memory < MIN_MEMORY:
            raise InvalidParametersError(f"memory must be >= {MIN_MEMORY} KiB")
        if self.iterations < MIN_ITERATIONS:
            raise InvalidParametersError(f"iterations must be >= {MIN_ITERATIONS}")
        if self.parallelism < MIN_PARALLELISM:
            raise InvalidParametersError(f"parallelism must be >= {MIN_PARALLELISM}")
        if self.salt_length < MIN_SALT_LENGTH:
            raise InvalidParametersError(f"salt_length must be >= {MIN_SALT_LENGTH}")
        if self.key_length < MIN_KEY_LENGTH:
            raise InvalidParametersError(f"key_length must be >= {MIN_KEY_LENGTH}")

        if self.salt_length > _MAX_SALT_LENGTH:
            raise InvalidParametersError(f"salt_length must be <= {_MAX_SALT_LENGTH}")
        if self.parallelism > _MAX_LANES:
            raise InvalidParametersError(f"parallelism must be <= {_MAX_LANES}")
        if self.memory < _BLOCKS_PER_LANE * self.parallelism:
            raise InvalidParametersError("memory must be >= 8 KiB per lane")

    def is_valid(self) -> bool:
        """Non-raising variant of check()."""
        try:
            self.check()
        except InvalidParametersError:
            return False
        return True

    def replace(self, **changes: int) -> "Params":
        """Return a tuned copy; the original stays untouched."""
        return dataclasses.replace(self, **changes)

    @staticmethod
    def from_profile(profile: Argon2Profile) -> "Params":
        """
        Create parameters from a predefined profile.

        Examples:
            >>> Params.from_profile(Argon2Profile.SERVER).memory
            262144
        """
        return _PROFILE_PARAMS[Argon2Profile(profile)]


DEFAULT_PARAMS: Final[Params] = Params(
    memory=64 * 1024,
    iterations=3,
    parallelism=2,
    salt_length=16,
    key_length=32,
)

_PROFILE_PARAMS: Final[dict[Argon2Profile, Params]] = {
    Argon2Profile.INTERACTIVE: DEFAULT_PARAMS,
    Argon2Profile.DESKTOP: Params(
        memory=128 * 1024,  # 128 MiB
        iterations=3,
        parallelism=4,
        salt_length=16,
        key_length=32,
    ),
    Argon2Profile.SERVER: Params(
        memory=256 * 1024,  # 256 MiB
        iterations=4,
        parallelism=8,
        salt_length=32,
        key_length=64,
    ),
    Argon2Profile.MINIMUM: Params(
        memory=MIN_MEMORY,
        iterations=MIN_ITERATIONS,
        parallelism=MIN_PARALLELISM,
        salt_length=MIN_SALT_LENGTH,
        key_length=MIN_KEY_LENGTH,
    ),
}


__all__ = [
    "MIN_MEMORY",
    "MIN_ITERATIONS",
    "MIN_PARALLELISM",
    "MIN_SALT_LENGTH",
    "MIN_KEY_LENGTH",
    "Argon2Profile",
    "Params",
    "DEFAULT_PARAMS",
]
