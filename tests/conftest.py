"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

if "BEACON_PROOFS_PRESET" not in os.environ:
    os.environ["BEACON_PROOFS_PRESET"] = "gnosis"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")
