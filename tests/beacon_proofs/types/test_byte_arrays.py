"""Tests for the fixed-length byte array types."""

import pytest
from pydantic import ValidationError

from beacon_proofs.types import ZERO_HASH, Bytes20, Bytes32, Bytes48, StrictBaseModel


class _Holder(StrictBaseModel):
    chunk: Bytes32


@pytest.mark.parametrize("cls, length", [(Bytes20, 20), (Bytes32, 32), (Bytes48, 48)])
def test_zero_has_declared_length(cls: type, length: int) -> None:
    assert len(cls.zero()) == length
    assert cls.zero() == b"\x00" * length


@pytest.mark.parametrize("value", [b"", b"\x01" * 31, b"\x01" * 33])
def test_wrong_length_rejected(value: bytes) -> None:
    with pytest.raises(ValueError, match="expects exactly 32 bytes"):
        Bytes32(value)


def test_accepts_hex_with_and_without_prefix() -> None:
    assert Bytes32("0x" + "ab" * 32) == Bytes32("ab" * 32) == b"\xab" * 32


def test_zero_hash_is_all_zero() -> None:
    assert ZERO_HASH == Bytes32(b"\x00" * 32)


def test_hash_distinguishes_widths() -> None:
    """Equal bytes of different declared types never collide as dict keys."""
    assert hash(Bytes32.zero()) != hash(bytes(32))


def test_model_json_round_trip_uses_prefixed_hex() -> None:
    holder = _Holder(chunk=Bytes32(b"\x0f" * 32))
    payload = holder.model_dump_json()
    assert payload == '{"chunk":"0x' + "0f" * 32 + '"}'
    assert _Holder.model_validate_json(payload) == holder


def test_model_rejects_short_bytes() -> None:
    with pytest.raises(ValidationError):
        _Holder(chunk=b"\x00" * 31)
