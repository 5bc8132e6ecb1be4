"""
Type descriptors: the shape of every structure a proof can traverse.

Descriptors are immutable values forming a small tagged union. They carry
only what tree geometry needs: field order, element types and capacity
bounds. Tree depths and local generalized indices are derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from beacon_proofs.types import SchemaError

from ..ssz.constants import BYTES_PER_CHUNK
from ..ssz.utils import ceil_log2, get_power_of_two_ceil

LIST_DATA_GINDEX: int = 2
"""A list's data subtree is the left child of the list root."""

LIST_LENGTH_GINDEX: int = 3
"""A list's length mix-in is the right child of the list root."""


@dataclass(frozen=True, slots=True)
class Basic:
    """
    A value serialized directly into chunks.

    Unsigned integers and booleans are `packed`: inside a list or vector
    several of them share one chunk. Byte vectors are not packed; each one
    takes its own chunks and, beyond 32 bytes, merkleizes to a single root.
    """

    name: str
    byte_length: int
    packed: bool = True

    def __post_init__(self) -> None:
        if self.byte_length < 1:
            raise SchemaError(self.name, f"byte length must be positive, got {self.byte_length}")
        if self.packed and BYTES_PER_CHUNK % self.byte_length != 0:
            raise SchemaError(self.name, "packed values must divide the chunk size")

    @property
    def chunk_count(self) -> int:
        """Chunks the serialized value occupies."""
        return (self.byte_length + BYTES_PER_CHUNK - 1) // BYTES_PER_CHUNK

    @property
    def depth(self) -> int:
        """Depth of the value's own tree; 0 unless it spans several chunks."""
        return ceil_log2(self.chunk_count)


@dataclass(frozen=True, slots=True)
class Container:
    """
    An ordered set of named, typed fields.

    Fields are leaves of a tree padded to the next power of two; field `i`
    sits at local gindex `base + i`.
    """

    name: str
    fields: Tuple[Tuple[str, "TypeDescriptor"], ...]

    def __post_init__(self) -> None:
        if not self.fields:
            raise SchemaError(self.name, "a container needs at least one field")
        names = [field_name for field_name, _ in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise SchemaError(self.name, f"duplicate fields {duplicates}")

    @classmethod
    def define(cls, name: str, **fields: TypeDescriptor) -> Container:
        """Declare a container; keyword order is field order."""
        return cls(name=name, fields=tuple(fields.items()))

    def __iter__(self) -> Iterator[Tuple[str, TypeDescriptor]]:
        return iter(self.fields)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(field_name for field_name, _ in self.fields)

    @property
    def chunk_count(self) -> int:
        return len(self.fields)

    @property
    def base(self) -> int:
        """Gindex of field 0: the leaf width of the field tree."""
        return get_power_of_two_ceil(len(self.fields))

    @property
    def depth(self) -> int:
        return ceil_log2(len(self.fields))

    def field_index(self, field_name: str) -> int:
        """
        Position of a field in declaration order.

        Raises:
            SchemaError: If the container declares no such field.
        """
        for index, (name, _) in enumerate(self.fields):
            if name == field_name:
                return index
        raise SchemaError(self.name, f"no field named {field_name!r}")

    def field_type(self, field_name: str) -> TypeDescriptor:
        return self.fields[self.field_index(field_name)][1]

    def field_gindex(self, field_name: str) -> int:
        """Gindex of a field relative to the container root."""
        return self.base + self.field_index(field_name)


@dataclass(frozen=True, slots=True)
class SSZVector:
    """A fixed-length homogeneous sequence; no length is mixed in."""

    element: TypeDescriptor
    length: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.length < 1:
            raise SchemaError(self.type_name, f"length must be positive, got {self.length}")

    @property
    def type_name(self) -> str:
        return self.name or f"Vector[{type_name(self.element)}, {self.length}]"

    @property
    def elements_per_chunk(self) -> int:
        return _elements_per_chunk(self.element)

    @property
    def chunk_count(self) -> int:
        return -(-self.length // self.elements_per_chunk)

    @property
    def depth(self) -> int:
        return ceil_log2(self.chunk_count)

    def chunk_index(self, index: int) -> int:
        """Leaf position holding element `index`."""
        return index // self.elements_per_chunk


@dataclass(frozen=True, slots=True)
class SSZList:
    """
    A homogeneous sequence with a capacity bound.

    The root is `hash(data_root, length)`. The data subtree is sized for the
    capacity, not the current length, so its depth is fixed by the schema.
    """

    element: TypeDescriptor
    limit: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise SchemaError(self.type_name, f"limit must be positive, got {self.limit}")

    @property
    def type_name(self) -> str:
        return self.name or f"List[{type_name(self.element)}, {self.limit}]"

    @property
    def elements_per_chunk(self) -> int:
        return _elements_per_chunk(self.element)

    @property
    def chunk_count(self) -> int:
        """Leaf capacity of the data subtree."""
        return -(-self.limit // self.elements_per_chunk)

    @property
    def data_depth(self) -> int:
        """Depth of the data subtree alone."""
        return ceil_log2(self.chunk_count)

    @property
    def depth(self) -> int:
        """Depth including the length mix-in level."""
        return self.data_depth + 1

    def chunk_index(self, index: int) -> int:
        """Leaf position holding element `index`."""
        return index // self.elements_per_chunk


TypeDescriptor = Union[Basic, Container, SSZVector, SSZList]
"""Any schema type."""


def type_name(descriptor: TypeDescriptor) -> str:
    """Human-readable name used in error messages."""
    match descriptor:
        case Basic() | Container():
            return descriptor.name
        case SSZVector() | SSZList():
            return descriptor.type_name
    raise TypeError(f"not a type descriptor: {descriptor!r}")


def is_packed(descriptor: TypeDescriptor) -> bool:
    """Whether several values of this type share a chunk inside a sequence."""
    return isinstance(descriptor, Basic) and descriptor.packed


def _elements_per_chunk(element: TypeDescriptor) -> int:
    if isinstance(element, Basic) and element.packed:
        return BYTES_PER_CHUNK // element.byte_length
    return 1


UINT8 = Basic("uint8", 1)
UINT64 = Basic("uint64", 8)
UINT256 = Basic("uint256", 32)
BOOLEAN = Basic("boolean", 1)

BYTES4 = Basic("Bytes4", 4, packed=False)
BYTES20 = Basic("Bytes20", 20, packed=False)
BYTES32 = Basic("Bytes32", 32, packed=False)
BYTES48 = Basic("Bytes48", 48, packed=False)
BYTES96 = Basic("Bytes96", 96, packed=False)
BYTES256 = Basic("Bytes256", 256, packed=False)
