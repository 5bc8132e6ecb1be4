"""Reusable type definitions for beacon state proofs."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import ZERO_HASH, Bytes20, Bytes32, Bytes48
from .exceptions import (
    CapacityError,
    IndexOutOfBoundsError,
    ProofError,
    SchemaError,
    SSZError,
    SSZTypeError,
    SSZValueError,
)
from .uint import Uint64

__all__ = [
    # Core types
    "Uint64",
    "Bytes20",
    "Bytes32",
    "Bytes48",
    "ZERO_HASH",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "SSZError",
    "SSZTypeError",
    "SSZValueError",
    "SchemaError",
    "CapacityError",
    "ProofError",
    "IndexOutOfBoundsError",
]
