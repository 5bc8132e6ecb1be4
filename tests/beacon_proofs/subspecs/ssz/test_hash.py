"""Tests for descriptor-driven hash tree roots."""

from typing import Any

import pytest

from beacon_proofs.subspecs.schema.beacon import PENDING_CONSOLIDATION, VALIDATOR
from beacon_proofs.subspecs.schema.descriptors import (
    BOOLEAN,
    BYTES32,
    BYTES48,
    UINT8,
    UINT64,
    Container,
    SSZList,
    SSZVector,
)
from beacon_proofs.subspecs.ssz.hash import (
    default_root,
    field_roots,
    hash_tree_root,
    serialize_basic,
)
from beacon_proofs.subspecs.ssz.merkleization import Merkle
from beacon_proofs.subspecs.ssz.pack import Packer
from beacon_proofs.subspecs.ssz.utils import hash_nodes
from beacon_proofs.subspecs.ssz.zero_hashes import zero_hash
from beacon_proofs.types import ZERO_HASH, Bytes32, SchemaError


@pytest.mark.parametrize(
    "descriptor, value, expected",
    [
        (UINT64, 1, b"\x01" + b"\x00" * 7),
        (UINT8, 255, b"\xff"),
        (BOOLEAN, True, b"\x01"),
        (BOOLEAN, False, b"\x00"),
        (BYTES32, b"\x05" * 32, b"\x05" * 32),
    ],
)
def test_serialize_basic(descriptor: Any, value: Any, expected: bytes) -> None:
    assert serialize_basic(descriptor, value) == expected


def test_serialize_basic_overflow() -> None:
    with pytest.raises(SchemaError, match="does not fit"):
        serialize_basic(UINT8, 256)


def test_serialize_basic_wrong_width() -> None:
    with pytest.raises(SchemaError, match="expected 32 bytes"):
        serialize_basic(BYTES32, b"\x00" * 20)


def test_uint64_root_is_packed_leaf() -> None:
    assert hash_tree_root(UINT64, 42) == Packer.pack_uint(42)


def test_bytes48_root_spans_two_chunks() -> None:
    pubkey = b"\x11" * 48
    expected = hash_nodes(Bytes32(b"\x11" * 32), Bytes32(b"\x11" * 16 + b"\x00" * 16))
    assert hash_tree_root(BYTES48, pubkey) == expected


def test_container_root_from_mapping_and_object() -> None:
    class Pair:
        source_index = 3
        target_index = 9

    as_mapping = hash_tree_root(PENDING_CONSOLIDATION, {"source_index": 3, "target_index": 9})
    as_object = hash_tree_root(PENDING_CONSOLIDATION, Pair())
    assert as_mapping == as_object == hash_nodes(Packer.pack_uint(3), Packer.pack_uint(9))


def test_field_roots_missing_field() -> None:
    with pytest.raises(SchemaError, match="missing field"):
        field_roots(PENDING_CONSOLIDATION, {"source_index": 3})


def test_packed_list_root() -> None:
    """Five uint64 values pack into two chunks of a limit-8 list (two chunk slots)."""
    descriptor = SSZList(UINT64, 8)
    values = [1, 2, 3, 4, 5]
    chunks = Packer.pack_basic_serialized(v.to_bytes(8, "little") for v in values)
    expected = Merkle.mix_in_length(hash_nodes(chunks[0], chunks[1]), 5)
    assert hash_tree_root(descriptor, values) == expected


def test_list_over_limit() -> None:
    with pytest.raises(SchemaError, match="cannot exceed"):
        hash_tree_root(SSZList(UINT64, 2), [1, 2, 3])


def test_vector_requires_exact_length() -> None:
    with pytest.raises(SchemaError, match="requires exactly"):
        hash_tree_root(SSZVector(BYTES32, 4), [b"\x00" * 32] * 3)


def test_vector_of_roots() -> None:
    roots = [Bytes32(bytes([i]) * 32) for i in range(1, 5)]
    expected = hash_nodes(hash_nodes(roots[0], roots[1]), hash_nodes(roots[2], roots[3]))
    assert hash_tree_root(SSZVector(BYTES32, 4), roots) == expected


def test_unsupported_descriptor() -> None:
    with pytest.raises(TypeError):
        hash_tree_root("uint64", 1)


@pytest.mark.parametrize(
    "descriptor, expected",
    [
        (UINT64, ZERO_HASH),
        (BYTES48, zero_hash(1)),
        (SSZVector(BYTES32, 8), zero_hash(3)),
        (SSZList(UINT64, 2**10), Merkle.mix_in_length(zero_hash(8), 0)),
    ],
)
def test_default_root(descriptor: Any, expected: Bytes32) -> None:
    assert default_root(descriptor) == expected


def test_default_root_matches_empty_values() -> None:
    empty_list = SSZList(VALIDATOR, 2**40)
    assert default_root(empty_list) == hash_tree_root(empty_list, [])

    small = Container.define("Small", flag=BOOLEAN, epoch=UINT64, root=BYTES32)
    value = {"flag": False, "epoch": 0, "root": b"\x00" * 32}
    assert default_root(small) == hash_tree_root(small, value)


def test_composite_field_accepts_precomputed_root() -> None:
    outer = Container.define("Outer", inner=PENDING_CONSOLIDATION, epoch=UINT64)
    inner = {"source_index": 3, "target_index": 9}
    summary = hash_tree_root(PENDING_CONSOLIDATION, inner)

    full = hash_tree_root(outer, {"inner": inner, "epoch": 4})
    summarized = hash_tree_root(outer, {"inner": summary, "epoch": 4})
    assert full == summarized


def test_basic_field_never_treated_as_summary() -> None:
    """A 48-byte field still merkleizes even when a 32-byte chunk type is passed."""
    holder = Container.define("Holder", key=BYTES48)
    with pytest.raises(SchemaError, match="expected 48 bytes"):
        hash_tree_root(holder, {"key": Bytes32(b"\x01" * 32)})
