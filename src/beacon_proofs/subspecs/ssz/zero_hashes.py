"""
Roots of all-zero subtrees, indexed by depth.

An unpopulated region of a tree is never visited: its root is looked up here.
The table is built once at import time and never mutated afterwards, so it can
be read from any number of threads.
"""

from __future__ import annotations

from typing import Final

from beacon_proofs.types.byte_arrays import ZERO_HASH, Bytes32
from beacon_proofs.types.exceptions import SchemaError

from .constants import MAX_TREE_DEPTH
from .utils import hash_nodes


def _build_zero_hashes(max_depth: int) -> tuple[Bytes32, ...]:
    hashes = [ZERO_HASH]
    for _ in range(max_depth):
        hashes.append(hash_nodes(hashes[-1], hashes[-1]))
    return tuple(hashes)


ZERO_HASHES: Final[tuple[Bytes32, ...]] = _build_zero_hashes(MAX_TREE_DEPTH)
"""`ZERO_HASHES[d]` is the root of a zero-filled subtree with `2**d` leaves."""


def zero_hash(depth: int) -> Bytes32:
    """
    Root of an all-zero subtree of the given depth.

    Raises:
        SchemaError: If `depth` is negative or deeper than `MAX_TREE_DEPTH`.
    """
    if not 0 <= depth <= MAX_TREE_DEPTH:
        raise SchemaError("zero_hash", f"depth {depth} outside [0, {MAX_TREE_DEPTH}]")
    return ZERO_HASHES[depth]
