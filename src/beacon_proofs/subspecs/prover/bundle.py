"""
The consolidation claim bundle.

A claim pays the withdrawal address of a consolidating validator. It is
backed by three proofs against one block root:

- the consolidation's `source_index`, which names the validator;
- that validator's `withdrawal_credentials`, which name the recipient;
- that validator's `activation_epoch`, which fixes eligibility.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from pydantic import Field

from beacon_proofs.types import Bytes20, Bytes32, SchemaError, StrictBaseModel, Uint64

from ..ssz.merkle_proof.proof import ProofBundle
from .claims import ClaimGindices, ClaimKind
from .records import uint64_leaf

logger = logging.getLogger(__name__)

EXECUTION_ADDRESS_PREFIXES = (0x01, 0x02)
"""Credential prefixes whose last 20 bytes are an execution address."""


class ConsolidationProofBundle(StrictBaseModel):
    """
    Everything a verifier needs to check one consolidation claim.

    `model_dump_json()` writes the snake_case field names with 0x-prefixed hex
    nodes, the layout bundles are exchanged in.
    """

    beacon_timestamp: Uint64 = Field(..., description="Timestamp of the block the proofs target.")

    consolidation_index: Uint64 = Field(..., description="Position in `pending_consolidations`.")

    source_index: Uint64 = Field(..., description="Index of the source validator.")

    activation_epoch: Uint64 = Field(..., description="The source validator's activation epoch.")

    source_credentials: Bytes32 = Field(
        ..., description="The source validator's withdrawal credentials."
    )

    proof_consolidation: Sequence[Bytes32]
    """Branch for `pending_consolidations[consolidation_index].source_index`."""

    proof_credentials: Sequence[Bytes32]
    """Branch for `validators[source_index].withdrawal_credentials`."""

    proof_activation_epoch: Sequence[Bytes32]
    """Branch for `validators[source_index].activation_epoch`."""

    def recipient_address(self) -> Bytes20 | None:
        """The execution address the credentials pay out to, if they name one."""
        if self.source_credentials[0] in EXECUTION_ADDRESS_PREFIXES:
            return Bytes20(self.source_credentials[12:])
        return None

    def claim_bundle(
        self, kind: ClaimKind, block_root: bytes, gindices: ClaimGindices | None = None
    ) -> ProofBundle:
        """
        One claim as a standalone proof bundle rooted at `block_root`.

        Raises:
            SchemaError: If the claimed index is outside the list's capacity.
        """
        gindices = ClaimGindices() if gindices is None else gindices

        match kind:
            case ClaimKind.CONSOLIDATION_SOURCE:
                leaf = uint64_leaf(self.source_index)
                gindex = gindices.consolidation_source_gindex(self.consolidation_index)
                siblings = self.proof_consolidation
            case ClaimKind.VALIDATOR_CREDENTIALS:
                leaf = self.source_credentials
                gindex = gindices.validator_credentials_gindex(self.source_index)
                siblings = self.proof_credentials
            case ClaimKind.VALIDATOR_ACTIVATION_EPOCH:
                leaf = uint64_leaf(self.activation_epoch)
                gindex = gindices.validator_activation_epoch_gindex(self.source_index)
                siblings = self.proof_activation_epoch

        return ProofBundle(root=Bytes32(block_root), leaf=leaf, gindex=gindex, siblings=siblings)

    def claim_bundles(
        self, block_root: bytes, gindices: ClaimGindices | None = None
    ) -> Dict[ClaimKind, ProofBundle]:
        """All three claims as proof bundles."""
        gindices = ClaimGindices() if gindices is None else gindices
        return {kind: self.claim_bundle(kind, block_root, gindices) for kind in ClaimKind}

    def failed_claims(
        self, block_root: bytes, gindices: ClaimGindices | None = None
    ) -> List[ClaimKind]:
        """
        The claims that do not verify against `block_root`.

        An index the schema cannot hold counts as a failed claim.
        """
        gindices = ClaimGindices() if gindices is None else gindices
        failed = []
        for kind in ClaimKind:
            try:
                ok = self.claim_bundle(kind, block_root, gindices).verify()
            except SchemaError as e:
                logger.debug("Claim %s cannot be placed in the schema: %s", kind.value, e)
                ok = False
            if not ok:
                failed.append(kind)
        return failed

    def verify(self, block_root: bytes, gindices: ClaimGindices | None = None) -> bool:
        """Whether all three proofs verify against `block_root`."""
        failed = self.failed_claims(block_root, gindices)
        if failed:
            logger.info(
                "Consolidation %d failed %s",
                self.consolidation_index,
                ", ".join(kind.value for kind in failed),
            )
        return not failed
