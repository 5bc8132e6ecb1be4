"""Consolidation claim proofs against a beacon block root."""

from .bundle import ConsolidationProofBundle
from .claims import ClaimGindices, ClaimKind
from .records import BeaconBlockHeader, PendingConsolidation, Validator, uint64_leaf
from .state_prover import StateProver, prove_container_field

__all__ = [
    "BeaconBlockHeader",
    "ClaimGindices",
    "ClaimKind",
    "ConsolidationProofBundle",
    "PendingConsolidation",
    "StateProver",
    "Validator",
    "prove_container_field",
    "uint64_leaf",
]
