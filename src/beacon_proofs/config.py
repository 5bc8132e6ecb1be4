"""
Global configuration for beacon state proofs.

The schema preset decides every list capacity, and with it every tree depth
and generalized index. It is chosen once per process from the environment.
"""

import os

_SUPPORTED_PRESETS: list[str] = ["gnosis", "minimal"]

PRESET = os.environ.get("BEACON_PROOFS_PRESET", "gnosis").lower()
"""The default schema preset ('gnosis' or 'minimal')."""

if PRESET not in _SUPPORTED_PRESETS:
    raise ValueError(
        f"Invalid BEACON_PROOFS_PRESET environment variable: '{PRESET}'. "
        f"Supported values: {_SUPPORTED_PRESETS}"
    )
