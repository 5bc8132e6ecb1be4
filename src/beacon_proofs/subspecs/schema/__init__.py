"""Type descriptors, path resolution and the beacon state schema."""

from .beacon import BeaconSchema
from .descriptors import (
    BOOLEAN,
    BYTES32,
    BYTES48,
    UINT8,
    UINT64,
    UINT256,
    Basic,
    Container,
    SSZList,
    SSZVector,
    TypeDescriptor,
)
from .path import LENGTH_ELEMENT, PathStep, SchemaPath, resolve_path
from .preset import SchemaPreset, load_preset

__all__ = [
    "BOOLEAN",
    "BYTES32",
    "BYTES48",
    "UINT8",
    "UINT64",
    "UINT256",
    "Basic",
    "BeaconSchema",
    "Container",
    "LENGTH_ELEMENT",
    "PathStep",
    "SSZList",
    "SSZVector",
    "SchemaPath",
    "SchemaPreset",
    "TypeDescriptor",
    "load_preset",
    "resolve_path",
]
