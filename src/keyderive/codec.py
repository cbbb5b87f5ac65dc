# -*- coding: utf-8 -*-
"""
RU: Кодек самоописывающего формата хеша Argon2id.

EN: Codec for the self-describing Argon2id hash format.

Format:
    "argon2id$<version>$<memory KiB>$<iterations>$<parallelism>$<b64 salt>$<b64 key>"

Notes:
- Salt and key use the standard base64 alphabet without "=" padding.
- Salt and key lengths are not stored; they are recovered from the decoded payload.
- Decoding does not apply the minimum-floor policy (see keyderive.params).
"""
from __future__ import annotations

import logging
import re
from typing import Final, NamedTuple, Union

from keyderive.exceptions import IncompatibleVersionError, InvalidHashFormatError
from keyderive.kdf import ARGON2_VERSION
from keyderive.params import MAX_U32, Params
from keyderive.utils import b64_decode_raw, b64_encode_raw

_LOGGER: Final = logging.getLogger(__name__)

ALGORITHM_TAG: Final[str] = "argon2id"
_SEPARATOR: Final[str] = "$"
_FIELD_COUNT: Final[int] = 7
_DECIMAL: Final = re.compile(r"[0-9]+")
_SIGNED_DECIMAL: Final = re.compile(r"[+-]?[0-9]+")


class DecodedHash(NamedTuple):
    """Constituents of an encoded hash."""

    params: Params
    salt: bytes
    key: bytes


def encode_hash(params: Params, salt: bytes, key: bytes) -> str:
    """
    Compose the 7-field encoded hash.

    Args:
        params: parameters the key was derived with.
        salt: raw salt bytes.
        key: raw derived key bytes.

    Returns:
        Encoded hash string.
    """
    return _SEPARATOR.join(
        (
            ALGORITHM_TAG,
            str(ARGON2_VERSION),
            str(params.memory),
            str(params.iterations),
            str(params.parallelism),
            b64_encode_raw(salt),
            b64_encode_raw(key),
        )
    )


def _parse_uint(field: str, name: str) -> int:
    if not _DECIMAL.fullmatch(field):
        raise InvalidHashFormatError(f"Encoded hash has a non-numeric {name} field")
    value = int(field)
    if value > MAX_U32:
        raise InvalidHashFormatError(f"Encoded hash {name} field is out of range")
    return value


def _parse_version(field: str) -> int:
    # any integer is a version; only 19 is supported
    if not _SIGNED_DECIMAL.fullmatch(field):
        raise InvalidHashFormatError("Encoded hash has a non-numeric version field")
    return int(field)


def _decode_b64(field: str, name: str) -> bytes:
    try:
        return b64_decode_raw(field)
    except ValueError as exc:
        raise InvalidHashFormatError(f"Encoded hash has invalid base64 in {name}") from exc


def decode_hash(encoded: Union[str, bytes, bytearray]) -> DecodedHash:
    """
    Parse an encoded hash into parameters, salt and key.

    Args:
        encoded: hash produced by encode_hash (str or ASCII bytes).

    Returns:
        DecodedHash with salt_length/key_length taken from the decoded sizes.

    Raises:
        InvalidHashFormatError: wrong field count, tag, numeric field or base64.
        IncompatibleVersionError: numeric version other than 19.
    """
    if isinstance(encoded, (bytes, bytearray)):
        try:
            text = bytes(encoded).decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidHashFormatError("Encoded hash is not ASCII") from exc
    elif isinstance(encoded, str):
        text = encoded
    else:
        raise InvalidHashFormatError("Encoded hash must be str or bytes")

    fields = text.split(_SEPARATOR)
    if len(fields) != _FIELD_COUNT:
        raise InvalidHashFormatError("The encoded hash is not in the correct format")

    tag, version_s, memory_s, iterations_s, parallelism_s, salt_s, key_s = fields
    if tag != ALGORITHM_TAG:
        raise InvalidHashFormatError("Unsupported algorithm tag")

    version = _parse_version(version_s)
    if version != ARGON2_VERSION:
        raise IncompatibleVersionError(f"Incompatible Argon2 version: {version}")

    memory = _parse_uint(memory_s, "memory")
    iterations = _parse_uint(iterations_s, "iterations")
    parallelism = _parse_uint(parallelism_s, "parallelism")

    salt = _decode_b64(salt_s, "salt")
    key = _decode_b64(key_s, "key")

    params = Params(
        memory=memory,
        iterations=iterations,
        parallelism=parallelism,
        salt_length=len(salt),
        key_length=len(key),
    )
    _LOGGER.debug(
        "Decoded hash (t=%d, m=%d, p=%d)", iterations, memory, parallelism
    )
    return DecodedHash(params=params, salt=salt, key=key)


__all__ = [
    "ALGORITHM_TAG",
    "DecodedHash",
    "encode_hash",
    "decode_hash",
]
