"""Tests for the beacon records."""

import pytest
from pydantic import ValidationError

from beacon_proofs.subspecs.prover.records import (
    FAR_FUTURE_EPOCH,
    BeaconBlockHeader,
    PendingConsolidation,
    SchemaRecord,
    Validator,
    uint64_leaf,
)
from beacon_proofs.subspecs.schema.beacon import VALIDATOR
from beacon_proofs.subspecs.ssz.hash import default_root, hash_tree_root
from beacon_proofs.subspecs.ssz.pack import Packer
from beacon_proofs.subspecs.ssz.utils import hash_nodes
from beacon_proofs.types import Bytes32, Uint64


@pytest.mark.parametrize("value", [0, 1, 42, 2**64 - 1])
def test_uint64_leaf(value: int) -> None:
    leaf = uint64_leaf(value)
    assert leaf[:8] == value.to_bytes(8, "little")
    assert leaf[8:] == b"\x00" * 24


def test_uint64_leaf_out_of_range() -> None:
    with pytest.raises(OverflowError):
        uint64_leaf(2**64)


def test_pending_consolidation_root() -> None:
    record = PendingConsolidation(source_index=Uint64(3), target_index=Uint64(9))
    assert record.hash_tree_root() == hash_nodes(Packer.pack_uint(3), Packer.pack_uint(9))


def test_validator_defaults() -> None:
    validator = Validator()
    assert validator.activation_epoch == FAR_FUTURE_EPOCH
    assert validator.slashed is False
    assert validator.withdrawal_credentials == Bytes32.zero()


def test_validator_root_matches_descriptor() -> None:
    validator = Validator(
        withdrawal_credentials=Bytes32(b"\x01" + b"\x00" * 11 + b"\xab" * 20),
        activation_epoch=Uint64(77),
    )
    assert validator.hash_tree_root() == hash_tree_root(VALIDATOR, validator)
    roots = validator.field_roots()
    assert len(roots) == 8
    assert roots[1] == validator.withdrawal_credentials
    assert roots[5] == uint64_leaf(77)


def test_zero_validator_root_is_default_root() -> None:
    validator = Validator(
        activation_eligibility_epoch=Uint64(0),
        activation_epoch=Uint64(0),
        exit_epoch=Uint64(0),
        withdrawable_epoch=Uint64(0),
    )
    assert validator.hash_tree_root() == default_root(VALIDATOR)


def test_header_state_root_is_its_own_field_root() -> None:
    header = BeaconBlockHeader(state_root=Bytes32(b"\x42" * 32))
    assert header.field_roots()[3] == header.state_root


def test_records_are_strict() -> None:
    with pytest.raises(ValidationError):
        PendingConsolidation(source_index=Uint64(1), target_index=Uint64(2), extra=1)
    with pytest.raises(ValidationError):
        Validator(slashed=1)
    with pytest.raises(ValidationError):
        PendingConsolidation(source_index=Uint64(1))


def test_records_are_frozen() -> None:
    record = PendingConsolidation(source_index=Uint64(1), target_index=Uint64(2))
    with pytest.raises(ValidationError):
        record.source_index = Uint64(5)  # type: ignore[misc]


def test_camel_case_json() -> None:
    record = PendingConsolidation(source_index=Uint64(1), target_index=Uint64(2))
    payload = record.model_dump_json(by_alias=True)
    assert payload == '{"sourceIndex":1,"targetIndex":2}'
    assert PendingConsolidation.model_validate_json(payload) == record


def test_schema_record_needs_a_descriptor() -> None:
    with pytest.raises(TypeError, match="abstract"):
        SchemaRecord()  # type: ignore[abstract]
