"""
Generalized indices and their composition.

A generalized index encodes a path from a tree's root: the root is 1, the
children of `g` are `2g` (left) and `2g + 1` (right). Reading the bits of an
index after its leading 1 from most to least significant walks root to node.
"""

from __future__ import annotations

from functools import reduce
from typing import List

from pydantic import Field

from beacon_proofs.types import SchemaError, StrictBaseModel


def gindex_depth(gindex: int) -> int:
    """Depth of a node, which is also the number of siblings proving it."""
    return gindex.bit_length() - 1


def concat_gindices(*gindices: int) -> int:
    """
    Concatenate gindices along a path through nested subtrees.

    Each index is relative to the node the previous one reached. Its leading
    sentinel bit is dropped and the remaining path bits are appended.
    """
    return reduce(_append_path, gindices, 1)


def _append_path(outer: int, inner: int) -> int:
    if outer < 1 or inner < 1:
        raise ValueError(f"generalized indices must be positive, got {outer} and {inner}")
    depth = gindex_depth(inner)
    return (outer << depth) | (inner ^ (1 << depth))


def decompose_to_steps(gindex: int) -> List[bool]:
    """
    Side of each node on the path, starting at the leaf.

    `True` means the node is a right child, so its sibling sits on the left.
    This is the order in which proof siblings are consumed.
    """
    if gindex < 1:
        raise ValueError(f"generalized index must be positive, got {gindex}")
    return [(gindex >> level) & 1 == 1 for level in range(gindex_depth(gindex))]


class GeneralizedIndex(StrictBaseModel):
    """A node position in a binary Merkle tree, counted from the root at 1."""

    value: int = Field(..., gt=0, description="Node number; the root is 1.")

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_position(cls, depth: int, position: int) -> GeneralizedIndex:
        """
        Index of the leaf at `position` in a subtree of the given depth.

        Raises:
            SchemaError: If the position does not fit in `2**depth` leaves.
        """
        if depth < 0 or not 0 <= position < (1 << depth):
            raise SchemaError(
                "GeneralizedIndex", f"position {position} does not fit a depth-{depth} subtree"
            )
        return cls(value=(1 << depth) | position)

    @property
    def depth(self) -> int:
        """Levels between the node and the root."""
        return gindex_depth(self.value)

    @property
    def position(self) -> int:
        """Offset of the node within its level, counting from the left."""
        return self.value ^ (1 << self.depth)

    def get_bit(self, level: int) -> bool:
        """Whether the ancestor `level` steps above the node (0 = the node) is a right child."""
        return bool((self.value >> level) & 1)

    @property
    def sibling(self) -> GeneralizedIndex:
        """The other child of the same parent."""
        return type(self)(value=self.value ^ 1)

    @property
    def parent(self) -> GeneralizedIndex:
        if self.value == 1:
            raise ValueError("Root node has no parent.")
        return type(self)(value=self.value >> 1)

    def child(self, right_side: bool) -> GeneralizedIndex:
        """Left child `2g`, or right child `2g + 1` when `right_side`."""
        return type(self)(value=(self.value << 1) | int(right_side))

    def compose(self, inner: GeneralizedIndex | int) -> GeneralizedIndex:
        """
        Descend from this node along `inner`, a path relative to it.

        `GeneralizedIndex(value=11).compose(100)` reaches field 36 of the state
        whose root sits at field 3 of an eight-leaf header.
        """
        return type(self)(value=concat_gindices(self.value, int(inner)))

    def steps(self) -> List[bool]:
        """Left/right sides from the leaf up; see `decompose_to_steps`."""
        return decompose_to_steps(self.value)

    def get_branch_indices(self) -> List[GeneralizedIndex]:
        """Nodes whose hashes form this node's proof, leaf level first."""
        return [type(self)(value=(self.value >> level) ^ 1) for level in range(self.depth)]

    def get_path_indices(self) -> List[GeneralizedIndex]:
        """This node and its ancestors below the root, leaf first."""
        return [type(self)(value=self.value >> level) for level in range(self.depth)]
