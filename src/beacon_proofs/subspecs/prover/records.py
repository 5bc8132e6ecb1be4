"""
Beacon chain records a claim is proven against.

These are the only state records whose contents a proof reaches into. Every
other field of the state enters a proof only as a precomputed root.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import List

from pydantic import Field

from beacon_proofs.types import Bytes32, Bytes48, StrictBaseModel, Uint64

from ..schema.beacon import BEACON_BLOCK_HEADER, PENDING_CONSOLIDATION, VALIDATOR
from ..schema.descriptors import Container
from ..ssz.hash import field_roots, hash_tree_root
from ..ssz.pack import Packer

FAR_FUTURE_EPOCH = Uint64(2**64 - 1)
"""Epoch used for events that have not been scheduled."""


def uint64_leaf(value: int) -> Bytes32:
    """The leaf chunk of a uint64 field: little-endian, zero-padded on the right."""
    return Packer.pack_uint(int(Uint64(value)), Uint64.get_byte_length())


class SchemaRecord(StrictBaseModel):
    """A record whose fields mirror a container descriptor one-to-one."""

    @classmethod
    @abstractmethod
    def descriptor(cls) -> Container:
        """The container descriptor this record's fields follow."""

    def field_roots(self) -> List[Bytes32]:
        """The root of every field, in declaration order."""
        return field_roots(self.descriptor(), self)

    def hash_tree_root(self) -> Bytes32:
        return hash_tree_root(self.descriptor(), self)


class Validator(SchemaRecord):
    """An entry of the validator registry."""

    pubkey: Bytes48 = Field(default_factory=Bytes48.zero)
    withdrawal_credentials: Bytes32 = Field(default_factory=Bytes32.zero)
    """Prefix byte then address or hash; `0x01`/`0x02` carry an execution address."""

    effective_balance: Uint64 = Uint64(0)
    slashed: bool = False
    activation_eligibility_epoch: Uint64 = FAR_FUTURE_EPOCH
    activation_epoch: Uint64 = FAR_FUTURE_EPOCH
    exit_epoch: Uint64 = FAR_FUTURE_EPOCH
    withdrawable_epoch: Uint64 = FAR_FUTURE_EPOCH

    @classmethod
    def descriptor(cls) -> Container:
        return VALIDATOR


class PendingConsolidation(SchemaRecord):
    """A queued request to fold one validator's balance into another's."""

    source_index: Uint64
    target_index: Uint64

    @classmethod
    def descriptor(cls) -> Container:
        return PENDING_CONSOLIDATION


class BeaconBlockHeader(SchemaRecord):
    """
    A block header.

    Its root is the block root exposed on the execution layer, which makes it
    the anchor every claim is verified against.
    """

    slot: Uint64 = Uint64(0)
    proposer_index: Uint64 = Uint64(0)
    parent_root: Bytes32 = Field(default_factory=Bytes32.zero)
    state_root: Bytes32 = Field(default_factory=Bytes32.zero)
    body_root: Bytes32 = Field(default_factory=Bytes32.zero)

    @classmethod
    def descriptor(cls) -> Container:
        return BEACON_BLOCK_HEADER
