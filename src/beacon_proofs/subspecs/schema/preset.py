"""
Schema presets.

A preset pins every capacity bound of the beacon state. Two presets with
different bounds produce different tree depths, so every generalized index
and proof length derived from a preset is tagged with its `schema_version`.

Presets are YAML files using the cross-client uppercase convention:

    PRESET_NAME: gnosis
    FORK: electra
    VALIDATOR_REGISTRY_LIMIT: 1099511627776
    PENDING_CONSOLIDATIONS_LIMIT: 262144
    ...
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field

from beacon_proofs import config
from beacon_proofs.types import SchemaError, StrictBaseModel

PRESETS_DIR = Path(__file__).parent / "presets"
"""Directory holding the shipped preset files."""


class SchemaPreset(StrictBaseModel):
    """
    Capacity bounds and timing constants of one beacon state layout.

    Field names use UPPERCASE aliases to match the YAML files; attributes are
    snake_case.
    """

    preset_name: str = Field(alias="PRESET_NAME", min_length=1)
    """Short name of the preset (`gnosis`, `minimal`)."""

    fork: str = Field(alias="FORK", min_length=1)
    """Fork whose state layout the preset describes."""

    seconds_per_slot: int = Field(alias="SECONDS_PER_SLOT", gt=0)
    slots_per_epoch: int = Field(alias="SLOTS_PER_EPOCH", gt=0)
    slots_per_historical_root: int = Field(alias="SLOTS_PER_HISTORICAL_ROOT", gt=0)
    historical_roots_limit: int = Field(alias="HISTORICAL_ROOTS_LIMIT", gt=0)
    epochs_per_eth1_voting_period: int = Field(alias="EPOCHS_PER_ETH1_VOTING_PERIOD", gt=0)
    epochs_per_historical_vector: int = Field(alias="EPOCHS_PER_HISTORICAL_VECTOR", gt=0)
    epochs_per_slashings_vector: int = Field(alias="EPOCHS_PER_SLASHINGS_VECTOR", gt=0)
    sync_committee_size: int = Field(alias="SYNC_COMMITTEE_SIZE", gt=0)

    validator_registry_limit: int = Field(alias="VALIDATOR_REGISTRY_LIMIT", gt=0)
    """Capacity of the validator registry; 2^40 gives a 40-level data tree."""

    pending_deposits_limit: int = Field(alias="PENDING_DEPOSITS_LIMIT", gt=0)
    pending_partial_withdrawals_limit: int = Field(alias="PENDING_PARTIAL_WITHDRAWALS_LIMIT", gt=0)

    pending_consolidations_limit: int = Field(alias="PENDING_CONSOLIDATIONS_LIMIT", gt=0)
    """Capacity of the pending consolidation queue."""

    @property
    def schema_version(self) -> str:
        """Identifier of the tree layout, e.g. `electra/gnosis`."""
        return f"{self.fork}/{self.preset_name}"

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> SchemaPreset:
        """
        Load a preset from a YAML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> SchemaPreset:
        """Load a preset from a YAML string."""
        return cls.model_validate(yaml.safe_load(content))


@lru_cache(maxsize=None)
def load_preset(name: str | None = None) -> SchemaPreset:
    """
    Load one of the shipped presets by name.

    Defaults to the preset selected by `BEACON_PROOFS_PRESET`.

    Raises:
        SchemaError: If no preset with that name is shipped.
    """
    name = config.PRESET if name is None else name
    path = PRESETS_DIR / f"{name}.yaml"
    if not path.is_file():
        available = sorted(p.stem for p in PRESETS_DIR.glob("*.yaml"))
        raise SchemaError("SchemaPreset", f"unknown preset {name!r} (available: {available})")
    return SchemaPreset.from_yaml_file(path)
