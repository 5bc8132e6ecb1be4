"""Generalized indices, sparse trees and single-leaf proofs."""

from .gindex import GeneralizedIndex, concat_gindices, decompose_to_steps, gindex_depth
from .proof import ProofBundle, verify_merkle_proof
from .tree import PopulatedLeaves, SparseMerkleTree, SubtreeProof

__all__ = [
    "GeneralizedIndex",
    "PopulatedLeaves",
    "ProofBundle",
    "SparseMerkleTree",
    "SubtreeProof",
    "concat_gindices",
    "decompose_to_steps",
    "gindex_depth",
    "verify_merkle_proof",
]
