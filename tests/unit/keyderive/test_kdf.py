from __future__ import annotations

from typing import Any

import pytest

from keyderive import kdf as K
from keyderive.exceptions import KeyDerivationError
from keyderive.protocols import KdfProtocol

# Argon2id at the policy floors: fast enough for unit tests.
FAST: dict[str, int] = {"iterations": 1, "memory": 8192, "parallelism": 1, "key_length": 16}
SALT = b"SALT0123SALT0123"


def test_provider_satisfies_protocol() -> None:
    assert isinstance(K.Argon2idKdf(), KdfProtocol)


def test_version_is_argon2_v13() -> None:
    assert K.ARGON2_VERSION == 19


def test_deterministic_for_identical_inputs() -> None:
    k1 = K.derive_key(b"pw", SALT, **FAST)
    k2 = K.derive_key(b"pw", SALT, **FAST)
    assert isinstance(k1, bytes) and len(k1) == 16
    assert k1 == k2


def test_str_password_is_utf8() -> None:
    assert K.derive_key("пароль", SALT, **FAST) == K.derive_key(
        "пароль".encode("utf-8"), SALT, **FAST
    )


@pytest.mark.parametrize(
    "change",
    [
        {"iterations": 2},
        {"memory": 16384},
        {"parallelism": 2},
    ],
)
def test_every_parameter_changes_output(change: dict[str, int]) -> None:
    base = K.derive_key(b"pw", SALT, **FAST)
    assert K.derive_key(b"pw", SALT, **{**FAST, **change}) != base


def test_salt_and_password_change_output() -> None:
    base = K.derive_key(b"pw", SALT, **FAST)
    assert K.derive_key(b"pw", b"0123SALT0123SALT", **FAST) != base
    assert K.derive_key(b"pW", SALT, **FAST) != base


def test_key_length_respected() -> None:
    assert len(K.derive_key(b"pw", SALT, **{**FAST, "key_length": 64})) == 64


def test_bytearray_password_wiped() -> None:
    ba = bytearray(b"secretpw")
    key = K.derive_key(ba, SALT, **FAST)
    assert key == K.derive_key(b"secretpw", SALT, **FAST)
    assert all(b == 0 for b in ba)


@pytest.mark.parametrize("password", [None, 123, ["pw"]])
def test_unsupported_password_type(password: Any) -> None:
    with pytest.raises(TypeError):
        K.derive_key(password, SALT, **FAST)


def test_unsupported_salt_type() -> None:
    with pytest.raises(TypeError):
        K.derive_key(b"pw", "SALT0123", **FAST)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "salt, overrides",
    [
        (b"short", {}),
        (SALT, {"key_length": 3}),
        (SALT, {"iterations": 0}),
        (SALT, {"memory": 1}),
    ],
)
def test_primitive_rejection_maps_to_key_derivation_error(
    salt: bytes, overrides: dict[str, int]
) -> None:
    with pytest.raises(KeyDerivationError):
        K.derive_key(b"pw", salt, **{**FAST, **overrides})


def test_custom_provider_is_used() -> None:
    seen: dict[str, Any] = {}

    class Recorder(K.Argon2idKdf):
        __slots__ = ()

        def derive_key(self, password: Any, salt: bytes, **kw: int) -> bytes:
            seen.update(kw, salt=salt)
            return b"\x00" * kw["key_length"]

    out = K.derive_key(b"pw", SALT, provider=Recorder(), **FAST)
    assert out == b"\x00" * 16
    assert seen == {**FAST, "salt": SALT}
