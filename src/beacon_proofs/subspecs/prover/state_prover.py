"""
Proofs from a beacon state root down to fields of list elements.

A full state holds millions of validators, but a claim only needs three
leaves. The prover takes the root of every state field plus the two lists it
reaches into, and builds each proof in four composed steps:

    state root -> list root -> list data root -> element root -> field
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from beacon_proofs.types import Bytes32, IndexOutOfBoundsError, ProofError, SchemaError

from ..schema.beacon import BeaconSchema
from ..schema.descriptors import LIST_DATA_GINDEX, Container, SSZList
from ..ssz.merkle_proof.gindex import GeneralizedIndex
from ..ssz.merkle_proof.proof import ProofBundle
from ..ssz.merkle_proof.tree import PopulatedLeaves, SparseMerkleTree
from ..ssz.merkleization import Merkle
from .bundle import ConsolidationProofBundle
from .claims import ClaimKind, claim_fields
from .records import BeaconBlockHeader, PendingConsolidation, SchemaRecord, Validator

logger = logging.getLogger(__name__)


def prove_container_field(record: SchemaRecord, field_name: str) -> ProofBundle:
    """Proof of one field of a record against the record's root."""
    descriptor = record.descriptor()
    tree = SparseMerkleTree.from_chunks(record.field_roots())
    return tree.prove(descriptor.field_index(field_name)).to_bundle()


class StateProver:
    """
    Generates proofs rooted at one beacon state.

    The state is given as the root of each of its fields in declaration order,
    together with the full contents of `validators` and
    `pending_consolidations`. The roots of those two fields must agree with the
    records supplied.
    """

    __slots__ = ("_schema", "_field_roots", "_records", "_data_trees", "_state_tree")

    def __init__(
        self,
        schema: BeaconSchema,
        field_roots: Sequence[bytes],
        validators: Sequence[Validator],
        consolidations: Sequence[PendingConsolidation],
    ) -> None:
        """
        Raises:
            ProofError: If the number of field roots does not match the schema,
                or a list root disagrees with the supplied records.
        """
        state = schema.beacon_state
        if len(field_roots) != state.chunk_count:
            raise ProofError(
                f"{state.name} has {state.chunk_count} fields, got {len(field_roots)} roots"
            )

        self._schema = schema
        self._field_roots: List[Bytes32] = [Bytes32(root) for root in field_roots]
        self._records: Dict[str, Sequence[SchemaRecord]] = {
            "validators": list(validators),
            "pending_consolidations": list(consolidations),
        }
        self._data_trees: Dict[str, SparseMerkleTree] = {
            name: self._build_data_tree(name, records) for name, records in self._records.items()
        }
        self._state_tree = SparseMerkleTree.from_chunks(self._field_roots)

        for name in self._records:
            computed = self._list_root(name)
            supplied = self._field_roots[state.field_index(name)]
            if computed != supplied:
                raise ProofError(
                    f"{name} root {supplied.hex()} does not match the supplied records "
                    f"({computed.hex()})"
                )

    @property
    def schema(self) -> BeaconSchema:
        return self._schema

    def compute_state_root(self) -> Bytes32:
        """Root of the state, as committed to by a block header's `state_root`."""
        return self._state_tree.root()

    def validators_root(self) -> Bytes32:
        return self._list_root("validators")

    def consolidations_root(self) -> Bytes32:
        return self._list_root("pending_consolidations")

    def prove_consolidation_source_index(self, consolidation_index: int) -> ProofBundle:
        return self._prove_claim(ClaimKind.CONSOLIDATION_SOURCE, consolidation_index)

    def prove_validator_credentials(self, validator_index: int) -> ProofBundle:
        return self._prove_claim(ClaimKind.VALIDATOR_CREDENTIALS, validator_index)

    def prove_validator_activation_epoch(self, validator_index: int) -> ProofBundle:
        return self._prove_claim(ClaimKind.VALIDATOR_ACTIVATION_EPOCH, validator_index)

    def prove_element_field(self, list_field: str, index: int, element_field: str) -> ProofBundle:
        """
        Proof of `state.<list_field>[index].<element_field>` against the state root.

        Raises:
            SchemaError: If the list is not one the prover holds records for.
            IndexOutOfBoundsError: If `index` is beyond the supplied records.
        """
        descriptor = self._list_descriptor(list_field)
        records = self._records[list_field]
        if not 0 <= index < len(records):
            raise IndexOutOfBoundsError(list_field, index=index, length=len(records))

        state_step = self._state_tree.prove(
            self._schema.beacon_state.field_index(list_field)
        ).to_bundle()

        data_tree = self._data_trees[list_field]
        length_step = ProofBundle(
            root=state_step.leaf,
            leaf=data_tree.root(),
            gindex=GeneralizedIndex(value=LIST_DATA_GINDEX),
            siblings=[Merkle.length_chunk(len(records))],
        )
        data_step = data_tree.prove(descriptor.chunk_index(index)).to_bundle()
        element_step = prove_container_field(records[index], element_field)

        bundle = state_step.compose(length_step).compose(data_step).compose(element_step)
        logger.debug(
            "Proved %s[%d].%s at gindex %d with %d siblings",
            list_field,
            index,
            element_field,
            bundle.gindex.value,
            len(bundle.siblings),
        )
        return bundle

    def generate_full_proof_bundle(
        self, header: BeaconBlockHeader, consolidation_index: int, beacon_timestamp: int
    ) -> ConsolidationProofBundle:
        """
        Prove a consolidation claim against the block root of `header`.

        Raises:
            ProofError: If `header` does not commit to this state.
            IndexOutOfBoundsError: If the consolidation or its source validator
                is not among the supplied records.
        """
        state_root = self.compute_state_root()
        if header.state_root != state_root:
            raise ProofError(
                f"header state root {header.state_root.hex()} does not match "
                f"the state ({state_root.hex()})"
            )
        header_step = prove_container_field(header, "state_root")

        consolidations = self._records["pending_consolidations"]
        if not 0 <= consolidation_index < len(consolidations):
            raise IndexOutOfBoundsError(
                "pending_consolidations", index=consolidation_index, length=len(consolidations)
            )
        consolidation = consolidations[consolidation_index]
        source_index = int(consolidation.source_index)

        validators = self._records["validators"]
        if source_index >= len(validators):
            raise IndexOutOfBoundsError("validators", index=source_index, length=len(validators))
        validator = validators[source_index]

        proof_consolidation = header_step.compose(
            self.prove_consolidation_source_index(consolidation_index)
        )
        proof_credentials = header_step.compose(self.prove_validator_credentials(source_index))
        proof_activation_epoch = header_step.compose(
            self.prove_validator_activation_epoch(source_index)
        )

        logger.info(
            "Generated proof bundle for consolidation %d (source validator %d) at block %s",
            consolidation_index,
            source_index,
            header_step.root.hex(),
        )
        return ConsolidationProofBundle(
            beacon_timestamp=beacon_timestamp,
            consolidation_index=consolidation_index,
            source_index=consolidation.source_index,
            activation_epoch=validator.activation_epoch,
            source_credentials=validator.withdrawal_credentials,
            proof_consolidation=proof_consolidation.siblings,
            proof_credentials=proof_credentials.siblings,
            proof_activation_epoch=proof_activation_epoch.siblings,
        )

    def _prove_claim(self, kind: ClaimKind, index: int) -> ProofBundle:
        list_field, element_field = claim_fields(kind)
        return self.prove_element_field(list_field, index, element_field)

    def _list_descriptor(self, list_field: str) -> SSZList:
        if list_field not in self._records:
            raise SchemaError(
                self._schema.beacon_state.name, f"no records supplied for {list_field!r}"
            )
        descriptor = self._schema.beacon_state.field_type(list_field)
        if not isinstance(descriptor, SSZList) or not isinstance(descriptor.element, Container):
            raise SchemaError(
                self._schema.beacon_state.name, f"{list_field!r} is not a record list"
            )
        return descriptor

    def _build_data_tree(
        self, list_field: str, records: Sequence[SchemaRecord]
    ) -> SparseMerkleTree:
        descriptor = self._list_descriptor(list_field)
        leaves = PopulatedLeaves.from_sequence(
            [record.hash_tree_root() for record in records], descriptor.chunk_count
        )
        return SparseMerkleTree(leaves, depth=descriptor.data_depth)

    def _list_root(self, list_field: str) -> Bytes32:
        return Merkle.mix_in_length(
            self._data_trees[list_field].root(), len(self._records[list_field])
        )
