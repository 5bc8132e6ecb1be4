"""
Generalized indices of the three facts a consolidation claim proves.

Every index is measured from the block root: header, then `state_root`, then
into the state. They are resolved from the schema, so a preset with different
list capacities yields different indices and proof lengths automatically.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Dict, Tuple

from ..schema.beacon import BeaconSchema
from ..schema.path import SchemaPath, resolve_path
from ..ssz.merkle_proof.gindex import GeneralizedIndex


class ClaimKind(Enum):
    """A fact about the state proven for a consolidation claim."""

    CONSOLIDATION_SOURCE = "consolidation_source"
    """`pending_consolidations[i].source_index`."""

    VALIDATOR_CREDENTIALS = "validator_credentials"
    """`validators[v].withdrawal_credentials`."""

    VALIDATOR_ACTIVATION_EPOCH = "validator_activation_epoch"
    """`validators[v].activation_epoch`."""


_CLAIM_FIELDS: Dict[ClaimKind, Tuple[str, str]] = {
    ClaimKind.CONSOLIDATION_SOURCE: ("pending_consolidations", "source_index"),
    ClaimKind.VALIDATOR_CREDENTIALS: ("validators", "withdrawal_credentials"),
    ClaimKind.VALIDATOR_ACTIVATION_EPOCH: ("validators", "activation_epoch"),
}
"""The state list and element field each claim reaches."""


def claim_fields(kind: ClaimKind) -> Tuple[str, str]:
    """The `(list_field, element_field)` pair a claim proves."""
    return _CLAIM_FIELDS[kind]


class ClaimGindices:
    """Claim indices and proof lengths for one schema."""

    __slots__ = ("_schema",)

    def __init__(self, schema: BeaconSchema | None = None) -> None:
        self._schema = BeaconSchema.build() if schema is None else schema

    @property
    def schema(self) -> BeaconSchema:
        return self._schema

    @property
    def schema_version(self) -> str:
        """Version tag every index from this instance is valid for."""
        return self._schema.version

    def path(self, kind: ClaimKind, index: int) -> SchemaPath:
        """
        The resolved path from the block root to a claim's leaf.

        Raises:
            SchemaError: If `index` is outside the list's capacity.
        """
        return _claim_path(self._schema, kind, index)

    def gindex(self, kind: ClaimKind, index: int) -> GeneralizedIndex:
        return self.path(kind, index).gindex

    def consolidation_source_gindex(self, consolidation_index: int) -> GeneralizedIndex:
        return self.gindex(ClaimKind.CONSOLIDATION_SOURCE, consolidation_index)

    def validator_credentials_gindex(self, validator_index: int) -> GeneralizedIndex:
        return self.gindex(ClaimKind.VALIDATOR_CREDENTIALS, validator_index)

    def validator_activation_epoch_gindex(self, validator_index: int) -> GeneralizedIndex:
        return self.gindex(ClaimKind.VALIDATOR_ACTIVATION_EPOCH, validator_index)

    def proof_length(self, kind: ClaimKind) -> int:
        """Number of siblings in a proof of `kind`; the same for every index."""
        return self.path(kind, 0).depth

    def expected_proof_lengths(self) -> Dict[ClaimKind, int]:
        return {kind: self.proof_length(kind) for kind in ClaimKind}


@lru_cache(maxsize=1024)
def _claim_path(schema: BeaconSchema, kind: ClaimKind, index: int) -> SchemaPath:
    list_field, element_field = _CLAIM_FIELDS[kind]
    header_path = resolve_path(schema.beacon_block_header, ["state_root"])
    state_path = resolve_path(schema.beacon_state, [list_field, index, element_field])
    return header_path.join(state_path)
