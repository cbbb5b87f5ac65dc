# -*- coding: utf-8 -*-
"""
RU: Утилиты: RNG через HKDF-микширование двух системных источников, проверки
вырожденного вывода, best-effort зануление буферов, сравнение в константное
время и base64 без выравнивания ("=").

EN: Utilities: RNG via HKDF mixing of two OS sources, degenerate-output checks,
best-effort buffer wiping, constant-time comparison and unpadded base64.
"""
from __future__ import annotations

import base64
import hmac
import logging
import math
import os
import secrets
from collections import Counter
from typing import Final, Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from keyderive.exceptions import RandomSourceError

_LOGGER: Final = logging.getLogger(__name__)

# HKDF-SHA256 output limit: 255 * digest size
_MAX_RANDOM_BYTES: Final[int] = 255 * 32
_RCT_MIN_N: Final[int] = 16
_APT_MIN_N: Final[int] = 32
_APT_MAX_PROPORTION: Final[float] = 0.80
_ENTROPY_SAMPLE_THRESHOLD: Final[int] = 256
_MIN_SHANNON_PER_BYTE: Final[float] = 7.20
_HKDF_INFO: Final[bytes] = b"keyderive-utils-rng-v1"


def generate_random_bytes(n: int) -> bytes:
    """
    Generate cryptographically secure random bytes.

    Uses dual-source XOR (os.urandom + secrets.token_bytes) mixed via HKDF-SHA256.
    There is no fallback to a weaker source: any failure is raised.

    Args:
        n: number of bytes to generate (1..8160).

    Returns:
        Random bytes of requested length.

    Raises:
        ValueError: if n is not an int in range.
        RandomSourceError: if the OS source fails or output is degenerate.
    """
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0 or n > _MAX_RANDOM_BYTES:
        raise ValueError(f"Requested random size must be in 1..{_MAX_RANDOM_BYTES}")

    try:
        src1 = os.urandom(n)
        src2 = secrets.token_bytes(n)
    except (OSError, NotImplementedError) as exc:
        _LOGGER.error("Secure random source failed: %s", exc.__class__.__name__)
        raise RandomSourceError("Secure random source unavailable") from exc

    if len(src1) != n or len(src2) != n:
        raise RandomSourceError("Secure random source returned a short read")

    ikm = bytes(a ^ b for a, b in zip(src1, src2))
    hkdf = HKDF(algorithm=hashes.SHA256(), length=n, salt=src2[:16], info=_HKDF_INFO)
    out = hkdf.derive(ikm)

    _rct_apt_checks(out)
    if n >= _ENTROPY_SAMPLE_THRESHOLD:
        h = _shannon_entropy(out)
        if h < _MIN_SHANNON_PER_BYTE:
            _LOGGER.warning(
                "Entropy check low (%.2f bits/byte) on %d-byte sample; continuing", h, n
            )

    _LOGGER.debug("Generated %d random bytes", n)
    return out


def _rct_apt_checks(data: bytes) -> None:
    """
    Repetition Count Test (RCT) and Adaptive Proportion Test (APT) sanity checks.

    Short samples skip the checks: a single byte is trivially "all equal".

    Raises:
        RandomSourceError: if data fails basic sanity checks.
    """
    if len(data) >= _RCT_MIN_N and all(b == data[0] for b in data):
        raise RandomSourceError("Degenerate RNG output (all bytes equal)")
    if len(data) >= _APT_MIN_N:
        freq: Counter[int] = Counter(data)
        max_prop = max(freq.values()) / float(len(data))
        if max_prop > _APT_MAX_PROPORTION:
            raise RandomSourceError("RNG output fails adaptive proportion sanity check")


def _shannon_entropy(data: bytes) -> float:
    # H = sum(c/n * log2(n/c)) over byte counts c; 8.0 for a uniform sample
    n = len(data)
    return sum(c * math.log2(n / c) for c in Counter(data).values()) / n if n else 0.0


def zero_memory(buf: Optional[bytearray]) -> None:
    """
    Overwrite a caller-owned password buffer with zeros after derivation.

    Only bytearray can be wiped in place. None and immutable objects are left
    alone; copies made by the encoder or the primitive are out of reach.
    """
    if buf is None:
        return
    try:
        buf[:] = bytes(len(buf))
    except TypeError:
        _LOGGER.debug("Buffer %s is immutable, not wiped", type(buf).__name__)


def secure_compare(a: Union[bytes, bytearray], b: Union[bytes, bytearray]) -> bool:
    """Compare a re-derived key with a stored one without leaking where they differ."""
    return hmac.compare_digest(bytes(a), bytes(b))


def b64_encode_raw(data: bytes) -> str:
    """Encode bytes to standard-alphabet base64 without "=" padding."""
    return base64.b64encode(data).decode("ascii").rstrip("=")


def b64_decode_raw(text: str) -> bytes:
    """
    Decode unpadded standard-alphabet base64.

    Raises:
        ValueError: on padding characters, non-alphabet characters or a
            truncated final quantum.
    """
    if "=" in text:
        raise ValueError("Unexpected base64 padding")
    raw = text.encode("ascii")
    return base64.b64decode(raw + b"=" * (-len(raw) % 4), validate=True)


__all__ = [
    "generate_random_bytes",
    "zero_memory",
    "secure_compare",
    "b64_encode_raw",
    "b64_decode_raw",
]
