"""
Shared fixtures for beacon_proofs tests.

Builds small but realistic beacon states: a handful of validators and pending
consolidations under the real schema, with every other field at a fixed root.
"""

from __future__ import annotations

from typing import Callable, List

import pytest

from beacon_proofs.subspecs.prover.records import (
    BeaconBlockHeader,
    PendingConsolidation,
    Validator,
)
from beacon_proofs.subspecs.prover.state_prover import StateProver
from beacon_proofs.subspecs.schema.beacon import BeaconSchema
from beacon_proofs.subspecs.schema.descriptors import SSZList
from beacon_proofs.subspecs.schema.preset import load_preset
from beacon_proofs.subspecs.ssz.hash import hash_tree_root
from beacon_proofs.types import Bytes32, Bytes48, Uint64


def make_validator(index: int) -> Validator:
    """A validator with distinct, recognisable field values."""
    credentials = bytes([0x01]) + b"\x00" * 11 + bytes([index + 1]) * 20
    return Validator(
        pubkey=Bytes48(bytes([index + 1]) * 48),
        withdrawal_credentials=Bytes32(credentials),
        effective_balance=Uint64(32_000_000_000),
        activation_eligibility_epoch=Uint64(index),
        activation_epoch=Uint64(100 + index),
    )


def make_state_roots(
    schema: BeaconSchema,
    validators: List[Validator],
    consolidations: List[PendingConsolidation],
) -> List[Bytes32]:
    """Field roots of a state holding the given lists; other fields are filler."""
    state = schema.beacon_state
    roots = [Bytes32(bytes([i + 1]) * 32) for i in range(state.chunk_count)]
    validators_type = state.field_type("validators")
    consolidations_type = state.field_type("pending_consolidations")
    assert isinstance(validators_type, SSZList)
    assert isinstance(consolidations_type, SSZList)
    roots[state.field_index("validators")] = hash_tree_root(validators_type, validators)
    roots[state.field_index("pending_consolidations")] = hash_tree_root(
        consolidations_type, consolidations
    )
    return roots


@pytest.fixture(params=["gnosis", "minimal"])
def schema(request: pytest.FixtureRequest) -> BeaconSchema:
    """The beacon schema under each shipped preset."""
    return BeaconSchema.build(load_preset(request.param))


@pytest.fixture
def validators() -> List[Validator]:
    return [make_validator(i) for i in range(6)]


@pytest.fixture
def consolidations() -> List[PendingConsolidation]:
    return [
        PendingConsolidation(source_index=Uint64(4), target_index=Uint64(0)),
        PendingConsolidation(source_index=Uint64(2), target_index=Uint64(1)),
        PendingConsolidation(source_index=Uint64(5), target_index=Uint64(3)),
    ]


@pytest.fixture
def state_roots() -> Callable[..., List[Bytes32]]:
    """Factory for state field roots around arbitrary list contents."""
    return make_state_roots


@pytest.fixture
def prover(
    schema: BeaconSchema,
    validators: List[Validator],
    consolidations: List[PendingConsolidation],
) -> StateProver:
    return StateProver(
        schema, make_state_roots(schema, validators, consolidations), validators, consolidations
    )


@pytest.fixture
def header(prover: StateProver) -> BeaconBlockHeader:
    """A header committing to the prover's state."""
    return BeaconBlockHeader(
        slot=Uint64(1234),
        proposer_index=Uint64(7),
        parent_root=Bytes32(b"\xaa" * 32),
        state_root=prover.compute_state_root(),
        body_root=Bytes32(b"\xbb" * 32),
    )
