"""
conftest.py - Shared pytest fixtures for coffee ledger tests

Provides common fixtures used across unit, conformance and functional tests:
- A fixed, advancing clock
- A quiet ledger with reproducible numpy randomness
- An open session on that ledger
"""

import pytest

from coffee_ledger import Ledger, Session, NumpyRandomnessSource

from tests.fakes import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def seeded_ledger(clock) -> Ledger:
    """Quiet ledger with reproducible numpy randomness."""
    return Ledger("test", randomness=NumpyRandomnessSource(seed=1234), clock=clock, verbose=False)


@pytest.fixture
def alice(seeded_ledger) -> Session:
    return seeded_ledger.set_user("alice")
