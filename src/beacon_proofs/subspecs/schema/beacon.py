"""
The Electra beacon chain schema.

Field order here is consensus-critical. Adding a field to `BeaconState`
beyond 64 fields, or reordering any container, moves every generalized index
below it; such a change is a new schema version, never a patch.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import cast

from .descriptors import (
    BOOLEAN,
    BYTES4,
    BYTES20,
    BYTES32,
    BYTES48,
    BYTES96,
    BYTES256,
    UINT8,
    UINT64,
    UINT256,
    Basic,
    Container,
    SSZList,
    SSZVector,
)
from .preset import SchemaPreset, load_preset

JUSTIFICATION_BITS = Basic("Bitvector[4]", 1, packed=False)
"""Four bits packed into one byte; merkleizes exactly like a one-byte vector."""

MAX_EXTRA_DATA_BYTES = 32

FORK = Container.define(
    "Fork",
    previous_version=BYTES4,
    current_version=BYTES4,
    epoch=UINT64,
)

CHECKPOINT = Container.define("Checkpoint", epoch=UINT64, root=BYTES32)

ETH1_DATA = Container.define(
    "Eth1Data",
    deposit_root=BYTES32,
    deposit_count=UINT64,
    block_hash=BYTES32,
)

BEACON_BLOCK_HEADER = Container.define(
    "BeaconBlockHeader",
    slot=UINT64,
    proposer_index=UINT64,
    parent_root=BYTES32,
    state_root=BYTES32,
    body_root=BYTES32,
)

VALIDATOR = Container.define(
    "Validator",
    pubkey=BYTES48,
    withdrawal_credentials=BYTES32,
    effective_balance=UINT64,
    slashed=BOOLEAN,
    activation_eligibility_epoch=UINT64,
    activation_epoch=UINT64,
    exit_epoch=UINT64,
    withdrawable_epoch=UINT64,
)

PENDING_CONSOLIDATION = Container.define(
    "PendingConsolidation",
    source_index=UINT64,
    target_index=UINT64,
)

PENDING_DEPOSIT = Container.define(
    "PendingDeposit",
    pubkey=BYTES48,
    withdrawal_credentials=BYTES32,
    amount=UINT64,
    signature=BYTES96,
    slot=UINT64,
)

PENDING_PARTIAL_WITHDRAWAL = Container.define(
    "PendingPartialWithdrawal",
    validator_index=UINT64,
    amount=UINT64,
    withdrawable_epoch=UINT64,
)

HISTORICAL_SUMMARY = Container.define(
    "HistoricalSummary",
    block_summary_root=BYTES32,
    state_summary_root=BYTES32,
)

EXECUTION_PAYLOAD_HEADER = Container.define(
    "ExecutionPayloadHeader",
    parent_hash=BYTES32,
    fee_recipient=BYTES20,
    state_root=BYTES32,
    receipts_root=BYTES32,
    logs_bloom=BYTES256,
    prev_randao=BYTES32,
    block_number=UINT64,
    gas_limit=UINT64,
    gas_used=UINT64,
    timestamp=UINT64,
    extra_data=SSZList(UINT8, MAX_EXTRA_DATA_BYTES, name="ByteList[32]"),
    base_fee_per_gas=UINT256,
    block_hash=BYTES32,
    transactions_root=BYTES32,
    withdrawals_root=BYTES32,
    blob_gas_used=UINT64,
    excess_blob_gas=UINT64,
)


@dataclass(frozen=True, slots=True)
class BeaconSchema:
    """
    Descriptors of the beacon state for one preset.

    Only the capacity-dependent types live on the instance; the fixed
    containers are module constants shared by every preset.
    """

    preset: SchemaPreset
    beacon_state: Container
    sync_committee: Container

    beacon_block_header: Container = BEACON_BLOCK_HEADER
    validator: Container = VALIDATOR
    pending_consolidation: Container = PENDING_CONSOLIDATION

    @property
    def version(self) -> str:
        """The preset's schema version, e.g. `electra/gnosis`."""
        return self.preset.schema_version

    @property
    def validators(self) -> SSZList:
        """The `validators` registry list."""
        return cast(SSZList, self.beacon_state.field_type("validators"))

    @property
    def pending_consolidations(self) -> SSZList:
        """The `pending_consolidations` queue."""
        return cast(SSZList, self.beacon_state.field_type("pending_consolidations"))

    @classmethod
    def build(cls, preset: SchemaPreset | None = None) -> BeaconSchema:
        """Schema for `preset`, or for the configured default preset."""
        return _build_schema(load_preset() if preset is None else preset)


@lru_cache(maxsize=None)
def _build_schema(preset: SchemaPreset) -> BeaconSchema:
    registry_limit = preset.validator_registry_limit

    sync_committee = Container.define(
        "SyncCommittee",
        pubkeys=SSZVector(BYTES48, preset.sync_committee_size),
        aggregate_pubkey=BYTES48,
    )

    beacon_state = Container.define(
        "BeaconState",
        genesis_time=UINT64,
        genesis_validators_root=BYTES32,
        slot=UINT64,
        fork=FORK,
        latest_block_header=BEACON_BLOCK_HEADER,
        block_roots=SSZVector(BYTES32, preset.slots_per_historical_root),
        state_roots=SSZVector(BYTES32, preset.slots_per_historical_root),
        historical_roots=SSZList(BYTES32, preset.historical_roots_limit),
        eth1_data=ETH1_DATA,
        eth1_data_votes=SSZList(
            ETH1_DATA, preset.epochs_per_eth1_voting_period * preset.slots_per_epoch
        ),
        eth1_deposit_index=UINT64,
        validators=SSZList(VALIDATOR, registry_limit),
        balances=SSZList(UINT64, registry_limit),
        randao_mixes=SSZVector(BYTES32, preset.epochs_per_historical_vector),
        slashings=SSZVector(UINT64, preset.epochs_per_slashings_vector),
        previous_epoch_participation=SSZList(UINT8, registry_limit),
        current_epoch_participation=SSZList(UINT8, registry_limit),
        justification_bits=JUSTIFICATION_BITS,
        previous_justified_checkpoint=CHECKPOINT,
        current_justified_checkpoint=CHECKPOINT,
        finalized_checkpoint=CHECKPOINT,
        inactivity_scores=SSZList(UINT64, registry_limit),
        current_sync_committee=sync_committee,
        next_sync_committee=sync_committee,
        latest_execution_payload_header=EXECUTION_PAYLOAD_HEADER,
        next_withdrawal_index=UINT64,
        next_withdrawal_validator_index=UINT64,
        historical_summaries=SSZList(HISTORICAL_SUMMARY, preset.historical_roots_limit),
        deposit_requests_start_index=UINT64,
        deposit_balance_to_consume=UINT64,
        exit_balance_to_consume=UINT64,
        earliest_exit_epoch=UINT64,
        consolidation_balance_to_consume=UINT64,
        earliest_consolidation_epoch=UINT64,
        pending_deposits=SSZList(PENDING_DEPOSIT, preset.pending_deposits_limit),
        pending_partial_withdrawals=SSZList(
            PENDING_PARTIAL_WITHDRAWAL, preset.pending_partial_withdrawals_limit
        ),
        pending_consolidations=SSZList(PENDING_CONSOLIDATION, preset.pending_consolidations_limit),
    )

    return BeaconSchema(preset=preset, beacon_state=beacon_state, sync_committee=sync_committee)
