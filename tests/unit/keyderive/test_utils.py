# -*- coding: utf-8 -*-
from __future__ import annotations

import hmac
from typing import Any, Optional

import pytest

from keyderive import utils as U
from keyderive.exceptions import RandomSourceError


@pytest.mark.parametrize("n", [1, 8, 16, 32, 128, 512, 2048])
def test_generate_random_bytes_lengths(n: int) -> None:
    out = U.generate_random_bytes(n)
    assert isinstance(out, bytes) and len(out) == n


def test_generate_random_bytes_distinct() -> None:
    assert U.generate_random_bytes(32) != U.generate_random_bytes(32)


@pytest.mark.parametrize("n", [0, -1, 255 * 32 + 1, True, 1.5])
def test_generate_random_bytes_invalid_size(n: Any) -> None:
    with pytest.raises(ValueError):
        U.generate_random_bytes(n)


def test_generate_random_bytes_os_failure_is_not_swallowed(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def broken_urandom(n: int) -> bytes:
        raise OSError("entropy pool unavailable")

    monkeypatch.setattr(U.os, "urandom", broken_urandom)
    with pytest.raises(RandomSourceError) as ei:
        U.generate_random_bytes(16)
    assert isinstance(ei.value.__cause__, OSError)


def test_degenerate_output_rejected() -> None:
    with pytest.raises(RandomSourceError):
        U._rct_apt_checks(b"\x00" * 16)
    with pytest.raises(RandomSourceError):
        U._rct_apt_checks(b"\x01" * 30 + b"\x02\x03")
    # short samples are not judged
    U._rct_apt_checks(b"\x00")
    U._rct_apt_checks(b"\x00" * 15)


def test_shannon_entropy_bounds() -> None:
    assert U._shannon_entropy(b"") == 0.0
    assert U._shannon_entropy(b"\x00" * 64) == 0.0
    assert U._shannon_entropy(bytes(range(256))) == pytest.approx(8.0)


def test_zero_memory_wipes_bytearray() -> None:
    buf = bytearray(b"supersecret")
    U.zero_memory(buf)
    assert all(b == 0 for b in buf)
    none_buf: Optional[bytearray] = None
    U.zero_memory(none_buf)


def test_zero_memory_keeps_length_and_skips_immutable() -> None:
    buf = bytearray(b"pw")
    U.zero_memory(buf)
    assert buf == bytearray(2)
    frozen = b"pw"
    U.zero_memory(frozen)  # type: ignore[arg-type]
    assert frozen == b"pw"


def test_secure_compare_semantics() -> None:
    assert U.secure_compare(b"a", b"a") is True
    assert U.secure_compare(b"a", b"b") is False
    assert U.secure_compare(b"abc", b"ab") is False
    assert U.secure_compare(bytearray(b"xy"), b"xy") is True


def test_secure_compare_uses_compare_digest(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[bytes, bytes]] = []
    real = hmac.compare_digest

    def spy(a: bytes, b: bytes) -> bool:
        calls.append((a, b))
        return real(a, b)

    monkeypatch.setattr(U.hmac, "compare_digest", spy)
    assert U.secure_compare(b"\x00\x01", b"\x00\x02") is False
    assert calls == [(b"\x00\x01", b"\x00\x02")]


@pytest.mark.parametrize(
    "raw, text",
    [
        (b"", ""),
        (b"f", "Zg"),
        (b"fo", "Zm8"),
        (b"foo", "Zm9v"),
        (b"\xfb\xff", "+/8"),
    ],
)
def test_b64_raw_known_values(raw: bytes, text: str) -> None:
    assert U.b64_encode_raw(raw) == text
    assert U.b64_decode_raw(text) == raw


@pytest.mark.parametrize("text", ["Zg==", "Zm8=", "Zm9v!", "Z", "Zm9vY", "Zm 9v", "Zé"])
def test_b64_decode_raw_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        U.b64_decode_raw(text)
