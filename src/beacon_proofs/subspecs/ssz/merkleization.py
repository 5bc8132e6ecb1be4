"""Merkleization utilities per SSZ."""

from __future__ import annotations

from typing import Optional, Sequence

from beacon_proofs.types import CapacityError
from beacon_proofs.types.byte_arrays import Bytes32

from .constants import BYTES_PER_LENGTH_MIX_IN
from .merkle_proof.tree import SparseMerkleTree
from .utils import hash_nodes


class Merkle:
    """Static Merkle helpers for SSZ."""

    @staticmethod
    def merkleize(chunks: Sequence[Bytes32], limit: Optional[int] = None) -> Bytes32:
        """
        Compute the Merkle root of `chunks`.

        Behavior
        --------
        - If `limit` is None: pad to the next power of two of len(chunks).
        - If `limit` is provided and >= len(chunks): pad to the next power of two of `limit`.
        - If `limit` < len(chunks): raise `CapacityError`.
        - If no chunks: the zero-subtree root for the padded width.

        Padding is never materialized, so a limit of 2**40 costs no more than
        the chunks actually supplied.
        """
        if limit is not None and limit < len(chunks):
            raise CapacityError("merkleize", position=len(chunks) - 1, capacity=limit)
        return SparseMerkleTree.from_chunks(chunks, limit).root()

    @staticmethod
    def length_chunk(length: int) -> Bytes32:
        """The length mix-in node: a little-endian uint256."""
        if length < 0:
            raise ValueError("length must be non-negative")
        return Bytes32(length.to_bytes(BYTES_PER_LENGTH_MIX_IN, "little"))

    @staticmethod
    def mix_in_length(root: Bytes32, length: int) -> Bytes32:
        """Mix a list's length into the root of its data subtree."""
        return hash_nodes(root, Merkle.length_chunk(length))
