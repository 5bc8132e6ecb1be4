"""
SSZ Merkleization entry point (`hash_tree_root`).

Roots are computed from a type descriptor and a value:

- `hash_tree_root(descriptor, value) -> Bytes32`, dispatched on the descriptor.
- `field_roots(container, value)` for the leaves of a container's field tree.
- `default_root(descriptor)` for a value with every field at its default.

Container values are read by attribute, or by key when given a mapping. A
`Bytes32` given for a composite field is taken as that field's root, so a
large substructure can be supplied as a summary.
"""

from __future__ import annotations

from functools import singledispatch
from typing import Any, List, Mapping, Sequence

from beacon_proofs.types import SchemaError
from beacon_proofs.types.byte_arrays import ZERO_HASH, Bytes32

from ..schema.descriptors import Basic, Container, SSZList, SSZVector, is_packed
from .merkleization import Merkle
from .pack import Packer
from .zero_hashes import zero_hash


def serialize_basic(descriptor: Basic, value: Any) -> bytes:
    """
    Serialize a basic value: little-endian integers, 0/1 booleans, raw bytes.

    Raises:
        SchemaError: If the value does not have the descriptor's width.
    """
    if isinstance(value, bool):
        return b"\x01" if value else b"\x00"
    if isinstance(value, int):
        try:
            return value.to_bytes(descriptor.byte_length, "little")
        except OverflowError as e:
            raise SchemaError(descriptor.name, f"{value} does not fit") from e
    data = bytes(value)
    if len(data) != descriptor.byte_length:
        raise SchemaError(
            descriptor.name, f"expected {descriptor.byte_length} bytes, got {len(data)}"
        )
    return data


@singledispatch
def hash_tree_root(descriptor: object, value: Any) -> Bytes32:
    """
    Compute the root of `value` interpreted as `descriptor`.

    Raises:
        TypeError: If `descriptor` is not a type descriptor.
    """
    raise TypeError(f"hash_tree_root: unsupported descriptor {type(descriptor).__name__}")


@hash_tree_root.register
def _htr_basic(descriptor: Basic, value: Any) -> Bytes32:
    """Values of up to 32 bytes are their own chunk; longer ones merkleize."""
    return Merkle.merkleize(Packer.pack_bytes(serialize_basic(descriptor, value)))


def _element_chunks(element: Any, values: Sequence[Any]) -> List[Bytes32]:
    if is_packed(element):
        return Packer.pack_basic_serialized(serialize_basic(element, v) for v in values)
    return [hash_tree_root(element, v) for v in values]


@hash_tree_root.register
def _htr_vector(descriptor: SSZVector, value: Sequence[Any]) -> Bytes32:
    if len(value) != descriptor.length:
        raise SchemaError(
            descriptor.type_name, f"requires exactly {descriptor.length} elements, got {len(value)}"
        )
    chunks = _element_chunks(descriptor.element, value)
    return Merkle.merkleize(chunks, limit=descriptor.chunk_count)


@hash_tree_root.register
def _htr_list(descriptor: SSZList, value: Sequence[Any]) -> Bytes32:
    if len(value) > descriptor.limit:
        raise SchemaError(
            descriptor.type_name, f"cannot exceed {descriptor.limit} elements, got {len(value)}"
        )
    chunks = _element_chunks(descriptor.element, value)
    root = Merkle.merkleize(chunks, limit=descriptor.chunk_count)
    return Merkle.mix_in_length(root, len(value))


@hash_tree_root.register
def _htr_container(descriptor: Container, value: Any) -> Bytes32:
    return Merkle.merkleize(field_roots(descriptor, value))


def field_roots(descriptor: Container, value: Any) -> List[Bytes32]:
    """The root of every field, in declaration order."""
    if isinstance(value, Mapping):
        getter = value.__getitem__
    else:

        def getter(name: str) -> Any:
            return getattr(value, name)

    try:
        return [_field_root(field_type, getter(name)) for name, field_type in descriptor]
    except (AttributeError, KeyError) as e:
        raise SchemaError(descriptor.name, f"value is missing field {e}") from e


def _field_root(field_type: Any, value: Any) -> Bytes32:
    # A composite field may be supplied as its already computed root.
    if isinstance(value, Bytes32) and not isinstance(field_type, Basic):
        return value
    return hash_tree_root(field_type, value)


@singledispatch
def default_root(descriptor: object) -> Bytes32:
    """Root of the default (zero, empty) value of a type."""
    raise TypeError(f"default_root: unsupported descriptor {type(descriptor).__name__}")


@default_root.register
def _default_basic(descriptor: Basic) -> Bytes32:
    return zero_hash(descriptor.depth)


@default_root.register
def _default_vector(descriptor: SSZVector) -> Bytes32:
    element_root = ZERO_HASH if is_packed(descriptor.element) else default_root(descriptor.element)
    if element_root == ZERO_HASH:
        return zero_hash(descriptor.depth)
    return Merkle.merkleize([element_root] * descriptor.chunk_count)


@default_root.register
def _default_list(descriptor: SSZList) -> Bytes32:
    return Merkle.mix_in_length(zero_hash(descriptor.data_depth), 0)


@default_root.register
def _default_container(descriptor: Container) -> Bytes32:
    return Merkle.merkleize([default_root(field_type) for _, field_type in descriptor])
