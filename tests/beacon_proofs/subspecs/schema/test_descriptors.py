"""Tests for type descriptors and the geometry derived from them."""

import pytest

from beacon_proofs.subspecs.schema.descriptors import (
    BOOLEAN,
    BYTES32,
    BYTES48,
    UINT8,
    UINT64,
    UINT256,
    Basic,
    Container,
    SSZList,
    SSZVector,
    is_packed,
    type_name,
)
from beacon_proofs.types import SchemaError


@pytest.mark.parametrize(
    "descriptor, chunk_count, depth",
    [
        (UINT64, 1, 0),
        (UINT256, 1, 0),
        (BYTES32, 1, 0),
        (BYTES48, 2, 1),
        (Basic("B96", 96, packed=False), 3, 2),
    ],
)
def test_basic_geometry(descriptor: Basic, chunk_count: int, depth: int) -> None:
    assert descriptor.chunk_count == chunk_count
    assert descriptor.depth == depth


@pytest.mark.parametrize("byte_length, packed", [(0, False), (3, True), (48, True)])
def test_basic_rejects_invalid_widths(byte_length: int, packed: bool) -> None:
    with pytest.raises(SchemaError):
        Basic("bad", byte_length, packed=packed)


def test_packing_rule() -> None:
    assert is_packed(UINT64)
    assert is_packed(BOOLEAN)
    assert not is_packed(BYTES32)
    assert not is_packed(Container.define("One", x=UINT64))


def test_container_layout() -> None:
    container = Container.define("Five", a=UINT64, b=BYTES32, c=BOOLEAN, d=UINT8, e=BYTES48)
    assert container.field_names == ("a", "b", "c", "d", "e")
    assert container.chunk_count == 5
    assert container.base == 8
    assert container.depth == 3
    assert container.field_index("d") == 3
    assert container.field_gindex("d") == 11
    assert container.field_type("e") is BYTES48
    assert [name for name, _ in container] == ["a", "b", "c", "d", "e"]


def test_single_field_container() -> None:
    container = Container.define("One", x=UINT64)
    assert container.depth == 0
    assert container.field_gindex("x") == 1


def test_container_unknown_field() -> None:
    with pytest.raises(SchemaError, match="no field named"):
        Container.define("Two", a=UINT64, b=UINT64).field_index("c")


def test_container_rejects_empty_and_duplicates() -> None:
    with pytest.raises(SchemaError):
        Container("Empty", ())
    with pytest.raises(SchemaError, match="duplicate"):
        Container("Dup", (("a", UINT64), ("a", UINT64)))


@pytest.mark.parametrize(
    "descriptor, chunk_count, data_depth",
    [
        (SSZList(UINT64, 2**40), 2**38, 38),
        (SSZList(UINT8, 2**40), 2**35, 35),
        (SSZList(BYTES32, 2**24), 2**24, 24),
        (SSZList(Container.define("C", a=UINT64, b=UINT64), 2**18), 2**18, 18),
        (SSZList(BOOLEAN, 1), 1, 0),
    ],
)
def test_list_geometry(descriptor: SSZList, chunk_count: int, data_depth: int) -> None:
    assert descriptor.chunk_count == chunk_count
    assert descriptor.data_depth == data_depth
    assert descriptor.depth == data_depth + 1


def test_packed_chunk_index() -> None:
    balances = SSZList(UINT64, 2**40)
    assert [balances.chunk_index(i) for i in (0, 3, 4, 9)] == [0, 0, 1, 2]
    assert SSZVector(UINT8, 64).chunk_index(40) == 1
    assert SSZVector(BYTES32, 64).chunk_index(40) == 40


def test_vector_geometry() -> None:
    vector = SSZVector(BYTES32, 8192)
    assert vector.chunk_count == 8192
    assert vector.depth == 13
    assert SSZVector(UINT64, 5).chunk_count == 2


@pytest.mark.parametrize("factory", [lambda: SSZList(UINT64, 0), lambda: SSZVector(UINT64, 0)])
def test_sequences_need_positive_bounds(factory) -> None:
    with pytest.raises(SchemaError):
        factory()


def test_type_names() -> None:
    assert type_name(UINT64) == "uint64"
    assert type_name(SSZList(UINT64, 4)) == "List[uint64, 4]"
    assert type_name(SSZVector(BYTES32, 2, name="Roots")) == "Roots"
    with pytest.raises(TypeError):
        type_name("uint64")  # type: ignore[arg-type]
