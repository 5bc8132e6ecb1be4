"""Single-leaf Merkle proofs and their verification."""

from __future__ import annotations

from typing import Sequence

from pydantic import Field

from beacon_proofs.types import StrictBaseModel
from beacon_proofs.types.byte_arrays import Bytes32

from ..utils import hash_nodes
from .gindex import GeneralizedIndex, gindex_depth

Root = Bytes32
"""The type of a Merkle tree root."""
ProofHashes = Sequence[Bytes32]
"""Sibling hashes, ordered from the leaf's level up to the root's children."""


def verify_merkle_proof(root: bytes, leaf: bytes, gindex: int, siblings: Sequence[bytes]) -> bool:
    """
    Replay a branch from `leaf` up and compare against `root`.

    Total for well-typed input: an invalid index or a branch of the wrong
    length is a failed proof, not an error. Index 1 is the root itself and
    verifies only with an empty branch and `leaf == root`.
    """
    if gindex < 1 or len(siblings) != gindex_depth(gindex):
        return False

    computed = bytes(leaf)
    index = gindex
    for sibling in siblings:
        if index & 1:
            computed = hash_nodes(sibling, computed)
        else:
            computed = hash_nodes(computed, sibling)
        index >>= 1
    return computed == bytes(root)


class ProofBundle(StrictBaseModel):
    """
    A leaf, its generalized index, the branch proving it and the root it proves.

    Bundles are immutable. They can be serialized to JSON (chunks as hex) and
    verified any number of times.
    """

    root: Root = Field(..., description="The root the branch is claimed to reach.")

    leaf: Bytes32 = Field(..., description="The chunk being proven.")

    gindex: GeneralizedIndex = Field(..., description="Position of the leaf below the root.")

    siblings: ProofHashes = Field(..., description="The branch, leaf level first.")

    @classmethod
    def from_branch(
        cls, root: bytes, leaf: bytes, gindex: int, siblings: Sequence[bytes]
    ) -> ProofBundle:
        """Build a bundle from plain bytes and an integer index."""
        return cls(
            root=Bytes32(root),
            leaf=Bytes32(leaf),
            gindex=GeneralizedIndex(value=int(gindex)),
            siblings=[Bytes32(s) for s in siblings],
        )

    @property
    def depth(self) -> int:
        """Number of siblings a well-formed bundle carries."""
        return self.gindex.depth

    def calculate_root(self) -> Root:
        """
        Recompute the root from the leaf and the branch.

        Raises:
            ValueError: If the branch length does not match the index depth.
        """
        if len(self.siblings) != self.gindex.depth:
            raise ValueError("Proof length must match the depth of the index.")

        root = self.leaf
        for i, branch_node in enumerate(self.siblings):
            if self.gindex.get_bit(i):
                root = hash_nodes(branch_node, root)
            else:
                root = hash_nodes(root, branch_node)
        return root

    def verify(self, root: bytes | None = None) -> bool:
        """Verifies the proof against `root`, or against the bundle's own root."""
        expected = self.root if root is None else root
        return verify_merkle_proof(expected, self.leaf, self.gindex.value, self.siblings)

    def compose(self, inner: ProofBundle) -> ProofBundle:
        """
        Extend this proof downwards with a proof of a node inside its leaf.

        `self` proves some subtree root against the outer root; `inner` proves a
        leaf against that same subtree root. The result proves the inner leaf
        directly against the outer root.

        Raises:
            ValueError: If `inner` is not rooted at this proof's leaf.
        """
        if inner.root != self.leaf:
            raise ValueError("Inner proof root does not match the outer proof's leaf.")
        return type(self)(
            root=self.root,
            leaf=inner.leaf,
            gindex=self.gindex.compose(inner.gindex),
            siblings=[*inner.siblings, *self.siblings],
        )

    def to_checker_args(self) -> tuple[Bytes32, Bytes32, list[Bytes32]]:
        """Root, leaf and branch in the order the on-chain checker takes them."""
        return self.root, self.leaf, list(self.siblings)
