"""
Resolving field paths to generalized indices.

A path such as `["pending_consolidations", 5, "source_index"]` is resolved
against a root descriptor into composition steps, one per subtree crossed.
Each step is a gindex relative to the node the previous step reached; the
absolute gindex is their concatenation and the proof length is the sum of
their depths.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from beacon_proofs.types import SchemaError

from ..ssz.merkle_proof.gindex import GeneralizedIndex, concat_gindices, gindex_depth
from .descriptors import (
    BYTES32,
    LIST_DATA_GINDEX,
    LIST_LENGTH_GINDEX,
    UINT256,
    Basic,
    Container,
    SSZList,
    SSZVector,
    TypeDescriptor,
    type_name,
)

PathElement = Union[str, int]
"""A field name or an element position."""

LENGTH_ELEMENT = "__len__"
"""Path element selecting a list's length node."""


@dataclass(frozen=True, slots=True)
class PathStep:
    """One composition step: a gindex relative to the previous node."""

    label: str
    """What the step selects, for diagnostics (`validators`, `data`, `[5]`)."""

    gindex: int
    """Local generalized index."""

    @property
    def depth(self) -> int:
        """Number of siblings this step contributes to a proof."""
        return gindex_depth(self.gindex)


@dataclass(frozen=True, slots=True)
class SchemaPath:
    """A resolved path from a root type down to one node."""

    root_type: TypeDescriptor
    steps: Tuple[PathStep, ...]
    leaf_type: TypeDescriptor

    @property
    def gindex(self) -> GeneralizedIndex:
        """Absolute generalized index relative to the root type's root."""
        return GeneralizedIndex(value=concat_gindices(*(step.gindex for step in self.steps)))

    @property
    def depth(self) -> int:
        """Total depth, which is the length of a proof for this node."""
        return sum(step.depth for step in self.steps)

    def join(self, inner: SchemaPath) -> SchemaPath:
        """
        Continue this path into a structure whose root this path reaches.

        A header's `state_root` is a plain 32-byte field, yet it is the root of
        the state tree, so a header path can be joined with a state path.

        Raises:
            SchemaError: If this path ends neither at a 32-byte root nor at the
                inner path's root type.
        """
        if self.leaf_type not in (BYTES32, inner.root_type):
            raise SchemaError(
                type_name(self.leaf_type),
                f"cannot continue into {type_name(inner.root_type)}",
            )
        return SchemaPath(
            root_type=self.root_type,
            steps=self.steps + inner.steps,
            leaf_type=inner.leaf_type,
        )


def resolve_path(root_type: TypeDescriptor, path: Sequence[PathElement]) -> SchemaPath:
    """
    Resolve `path` against `root_type`.

    Field names select container fields, integers select sequence elements,
    and `"__len__"` selects a list's length. An element of a packed basic list
    resolves to the chunk that holds it.

    Raises:
        SchemaError: For undeclared fields, positions outside a declared bound,
            or attempts to navigate into a basic value.
    """
    steps: List[PathStep] = []
    current = root_type

    for element in path:
        match current:
            case Container():
                if not isinstance(element, str):
                    raise SchemaError(current.name, f"expected a field name, got {element!r}")
                steps.append(PathStep(element, current.field_gindex(element)))
                current = current.field_type(element)

            case SSZList():
                if element == LENGTH_ELEMENT:
                    steps.append(PathStep("length", LIST_LENGTH_GINDEX))
                    current = UINT256
                    continue
                index = _check_position(current.type_name, element, current.limit)
                steps.append(PathStep("data", LIST_DATA_GINDEX))
                steps.append(
                    PathStep(
                        f"[{index}]",
                        GeneralizedIndex.from_position(
                            current.data_depth, current.chunk_index(index)
                        ).value,
                    )
                )
                current = current.element

            case SSZVector():
                index = _check_position(current.type_name, element, current.length)
                steps.append(
                    PathStep(
                        f"[{index}]",
                        GeneralizedIndex.from_position(
                            current.depth, current.chunk_index(index)
                        ).value,
                    )
                )
                current = current.element

            case Basic():
                raise SchemaError(current.name, f"cannot navigate into a basic value ({element!r})")

    return SchemaPath(root_type=root_type, steps=tuple(steps), leaf_type=current)


def _check_position(name: str, element: PathElement, bound: int) -> int:
    if isinstance(element, bool) or not isinstance(element, int):
        raise SchemaError(name, f"expected an element position, got {element!r}")
    if not 0 <= element < bound:
        raise SchemaError(name, f"position {element} outside bound {bound}")
    return element
