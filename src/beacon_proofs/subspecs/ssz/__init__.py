"""
SSZ Merkleization: hashing, zero subtrees and sparse proofs.

Descriptor-driven roots live in `beacon_proofs.subspecs.ssz.hash`, which is
not re-exported here because the schema package builds on these primitives.
"""

from .constants import BYTES_PER_CHUNK, MAX_TREE_DEPTH
from .merkleization import Merkle
from .utils import ceil_log2, get_power_of_two_ceil, hash_nodes
from .zero_hashes import ZERO_HASHES, zero_hash

__all__ = [
    "BYTES_PER_CHUNK",
    "MAX_TREE_DEPTH",
    "Merkle",
    "ZERO_HASHES",
    "ceil_log2",
    "get_power_of_two_ceil",
    "hash_nodes",
    "zero_hash",
]
