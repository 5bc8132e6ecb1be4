"""Shared fixtures for SSZ tests."""

from typing import Callable, List, Sequence

import pytest

from beacon_proofs.subspecs.ssz.utils import get_power_of_two_ceil, hash_nodes
from beacon_proofs.types import ZERO_HASH, Bytes32


def build_dense_tree(leaves: Sequence[Bytes32]) -> List[Bytes32]:
    """
    A fully materialized tree as a flat list, `tree[i]` being gindex `i`.

    Index 0 is a placeholder. Only meant for small trees.
    """
    if not leaves:
        return [ZERO_HASH] * 2

    width = get_power_of_two_ceil(len(leaves))
    tree = [ZERO_HASH] * width + list(leaves) + [ZERO_HASH] * (width - len(leaves))
    for i in range(width - 1, 0, -1):
        tree[i] = hash_nodes(tree[2 * i], tree[2 * i + 1])
    return tree


@pytest.fixture
def dense_tree() -> Callable[[Sequence[Bytes32]], List[Bytes32]]:
    """The dense reference builder the sparse tree is checked against."""
    return build_dense_tree
