"""The hash primitive and integer helpers for tree shapes."""

import hashlib

from beacon_proofs.types.byte_arrays import Bytes32


def get_power_of_two_ceil(x: int) -> int:
    """
    Calculates the smallest power of two greater than or equal to x.

    Examples: 0->1, 1->1, 2->2, 3->4, 4->4, 5->8.
    """
    if x <= 1:
        return 1
    return 1 << (x - 1).bit_length()


def ceil_log2(x: int) -> int:
    """Depth of the smallest perfect binary tree with at least `x` leaves."""
    return get_power_of_two_ceil(x).bit_length() - 1


def hash_nodes(node_a: bytes, node_b: bytes) -> Bytes32:
    """
    Hashes two 32-byte nodes together using SHA-256.

    The on-chain checker uses the same SHA-256 precompile over `a || b`.
    """
    return Bytes32(hashlib.sha256(node_a + node_b).digest())
