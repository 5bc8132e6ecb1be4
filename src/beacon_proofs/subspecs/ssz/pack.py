"""
Packing helpers that turn serialized values into 32-byte chunks.

These helpers do not serialize records themselves; they only arrange already
serialized bytes into the chunk form a hash tree is built from.
"""

from __future__ import annotations

from typing import Iterable, List

from beacon_proofs.types.byte_arrays import Bytes32

from .constants import BYTES_PER_CHUNK


class Packer:
    """Collection of static helpers to pack byte data into 32-byte chunks."""

    @staticmethod
    def _right_pad_to_chunk(b: bytes) -> bytes:
        """Right-pad `b` with zeros up to a multiple of BYTES_PER_CHUNK."""
        remainder = len(b) % BYTES_PER_CHUNK
        if remainder == 0:
            return b
        return b + b"\x00" * (BYTES_PER_CHUNK - remainder)

    @staticmethod
    def _partition_chunks(b: bytes) -> List[Bytes32]:
        """Partition a chunk-aligned byte string into 32-byte chunks."""
        if len(b) % BYTES_PER_CHUNK != 0:
            raise ValueError("partition requires a multiple of BYTES_PER_CHUNK")
        return [Bytes32(b[i : i + BYTES_PER_CHUNK]) for i in range(0, len(b), BYTES_PER_CHUNK)]

    @staticmethod
    def pack_bytes(data: bytes) -> List[Bytes32]:
        """Pack raw bytes (a byte vector or a serialized value) into chunks."""
        return Packer._partition_chunks(Packer._right_pad_to_chunk(data))

    @staticmethod
    def pack_basic_serialized(serialized_basic_values: Iterable[bytes]) -> List[Bytes32]:
        """
        Pack several serialized basic values back to back.

        This is how a list of uint64 balances shares chunks: four per chunk.
        """
        return Packer.pack_bytes(b"".join(serialized_basic_values))

    @staticmethod
    def pack_uint(value: int, byte_length: int = 8) -> Bytes32:
        """
        Encode an unsigned integer as a single leaf chunk.

        The value is little-endian and left-aligned: `42` as a uint64 becomes
        `0x2a` followed by 31 zero bytes.
        """
        if byte_length > BYTES_PER_CHUNK:
            raise ValueError(f"a {byte_length}-byte integer does not fit in one chunk")
        return Bytes32(Packer._right_pad_to_chunk(value.to_bytes(byte_length, "little")))
