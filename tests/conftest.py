"""
Shared fixtures for Corkboard tests
"""

import pytest

from corkboard.core.crypto import SecretHasher, set_default_hasher


@pytest.fixture(autouse=True)
def fast_hasher():
    """Use minimal hashing cost so credential tests stay quick."""
    hasher = SecretHasher(time_cost=1, memory_cost_kb=8192, parallelism=1)
    set_default_hasher(hasher)
    yield hasher
    set_default_hasher(None)
