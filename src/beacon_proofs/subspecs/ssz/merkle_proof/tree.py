"""
Sparse Merkle trees.

A list with a 2^40 capacity cannot be materialized. Only the populated leaves
are stored; every other node is the zero-subtree root for its depth. Hashing
ascends one level at a time over a map of "active" positions, whose size is
bounded by the number of populated leaves and shrinks as siblings merge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Sequence

from beacon_proofs.types import ZERO_HASH, CapacityError, SchemaError
from beacon_proofs.types.byte_arrays import Bytes32

from ..constants import MAX_TREE_DEPTH
from ..utils import ceil_log2, hash_nodes
from ..zero_hashes import zero_hash
from .gindex import GeneralizedIndex
from .proof import ProofBundle

logger = logging.getLogger(__name__)


class PopulatedLeaves(Mapping[int, Bytes32]):
    """
    The non-zero leaves of a tree with a declared capacity.

    Positions are 0-based leaf offsets. A position outside `[0, capacity)` is
    rejected at construction. Zero chunks are dropped because they are
    indistinguishable from absent leaves.
    """

    __slots__ = ("_capacity", "_leaves")

    def __init__(self, capacity: int, leaves: Mapping[int, bytes] | None = None) -> None:
        if capacity < 1:
            raise SchemaError("PopulatedLeaves", f"capacity must be positive, got {capacity}")

        populated: dict[int, Bytes32] = {}
        for position, chunk in (leaves or {}).items():
            if not 0 <= position < capacity:
                raise CapacityError("PopulatedLeaves", position=position, capacity=capacity)
            node = Bytes32(chunk)
            if node != ZERO_HASH:
                populated[position] = node

        self._capacity = capacity
        self._leaves = MappingProxyType(populated)

    @classmethod
    def from_sequence(cls, chunks: Sequence[bytes], capacity: int) -> PopulatedLeaves:
        """Populate positions `0..len(chunks)-1`, the layout of a list's elements."""
        if len(chunks) > capacity:
            raise CapacityError("PopulatedLeaves", position=len(chunks) - 1, capacity=capacity)
        return cls(capacity, dict(enumerate(chunks)))

    @property
    def capacity(self) -> int:
        """The number of leaf slots the tree declares."""
        return self._capacity

    def __getitem__(self, position: int) -> Bytes32:
        return self._leaves[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def __repr__(self) -> str:
        return f"PopulatedLeaves(capacity={self._capacity}, populated={len(self._leaves)})"


@dataclass(frozen=True, slots=True)
class SubtreeProof:
    """A leaf of a sparse tree with its branch up to the tree's root."""

    root: Bytes32
    """Root of the whole subtree."""

    leaf: Bytes32
    """Value at the proven position (the zero chunk when unpopulated)."""

    position: int
    """0-based leaf offset."""

    depth: int
    """Depth of the subtree, equal to the branch length."""

    siblings: tuple[Bytes32, ...]
    """The branch, leaf level first."""

    @property
    def gindex(self) -> GeneralizedIndex:
        """Index of the leaf relative to the subtree root."""
        return GeneralizedIndex.from_position(self.depth, self.position)

    def to_bundle(self) -> ProofBundle:
        """Convert to a serializable proof bundle."""
        return ProofBundle(
            root=self.root, leaf=self.leaf, gindex=self.gindex, siblings=list(self.siblings)
        )


class SparseMerkleTree:
    """
    An implicit perfect binary tree over a set of populated leaves.

    Instances are immutable; every call builds its own active-node maps, so
    one tree can serve concurrent proof requests.
    """

    __slots__ = ("_leaves", "_depth")

    def __init__(self, leaves: PopulatedLeaves, depth: int | None = None) -> None:
        """
        Args:
            leaves: The populated leaves and their capacity.
            depth: Tree depth; defaults to `ceil(log2(capacity))`.

        Raises:
            SchemaError: If `depth` cannot hold the capacity or exceeds the
                zero-hash table.
        """
        required = ceil_log2(leaves.capacity)
        depth = required if depth is None else depth
        if depth < required:
            raise SchemaError(
                "SparseMerkleTree",
                f"depth {depth} cannot hold {leaves.capacity} leaves (needs {required})",
            )
        if depth > MAX_TREE_DEPTH:
            raise SchemaError("SparseMerkleTree", f"depth {depth} exceeds {MAX_TREE_DEPTH}")
        self._leaves = leaves
        self._depth = depth

    @classmethod
    def from_chunks(cls, chunks: Sequence[bytes], limit: int | None = None) -> SparseMerkleTree:
        """Tree over a dense prefix of chunks, padded up to `limit` leaves."""
        capacity = max(len(chunks) if limit is None else limit, 1)
        return cls(PopulatedLeaves.from_sequence(chunks, capacity))

    @property
    def depth(self) -> int:
        """The number of levels between the leaves and the root."""
        return self._depth

    @property
    def leaves(self) -> PopulatedLeaves:
        """The populated leaves this tree was built from."""
        return self._leaves

    def root(self) -> Bytes32:
        """Root of the tree."""
        root, _ = self._ascend(())
        return root

    def prove(self, position: int) -> SubtreeProof:
        """
        Branch for the leaf at `position`, leaf level first.

        Raises:
            CapacityError: If the position lies outside the tree.
        """
        return self.prove_many([position])[position]

    def prove_many(self, positions: Iterable[int]) -> dict[int, SubtreeProof]:
        """
        Branches for several leaves computed in a single ascent.

        Ancestors shared between the targets are hashed once.
        """
        targets = list(dict.fromkeys(positions))
        width = 1 << self._depth
        for position in targets:
            if not 0 <= position < width:
                raise CapacityError("SparseMerkleTree", position=position, capacity=width)

        root, branches = self._ascend(targets)
        logger.debug(
            "Proved %d leaves at depth %d over %d populated leaves",
            len(targets),
            self._depth,
            len(self._leaves),
        )
        return {
            position: SubtreeProof(
                root=root,
                leaf=self._leaves.get(position, ZERO_HASH),
                position=position,
                depth=self._depth,
                siblings=tuple(branches[position]),
            )
            for position in targets
        }

    def _ascend(self, targets: Sequence[int]) -> tuple[Bytes32, dict[int, List[Bytes32]]]:
        """
        Hash level by level from the leaves to the root.

        At each level the sibling of every target's ancestor is captured before
        the level is folded into its parents.
        """
        ancestors = {target: target for target in targets}
        branches: dict[int, List[Bytes32]] = {target: [] for target in targets}
        layer: dict[int, Bytes32] = dict(self._leaves)

        for level in range(self._depth):
            zero = zero_hash(level)

            for target, ancestor in ancestors.items():
                branches[target].append(layer.get(ancestor ^ 1, zero))
            ancestors = {target: ancestor >> 1 for target, ancestor in ancestors.items()}

            parents: dict[int, Bytes32] = {}
            for position, node in layer.items():
                parent = position >> 1
                if parent in parents:
                    # Already folded together with its sibling.
                    continue
                sibling = layer.get(position ^ 1, zero)
                if position & 1:
                    parents[parent] = hash_nodes(sibling, node)
                else:
                    parents[parent] = hash_nodes(node, sibling)
            layer = parents

        return layer.get(0, zero_hash(self._depth)), branches
