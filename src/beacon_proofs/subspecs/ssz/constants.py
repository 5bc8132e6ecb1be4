"""Constants of SSZ Merkleization."""

BYTES_PER_CHUNK: int = 32
"""Number of bytes per Merkle chunk."""

BYTES_PER_LENGTH_MIX_IN: int = 32
"""A list's length is mixed in as a little-endian uint256 chunk."""

MAX_TREE_DEPTH: int = 64
"""Deepest subtree the zero-hash table covers; a 2^40-leaf list needs 40."""
