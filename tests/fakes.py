"""
fakes.py - Test helpers for the coffee ledger

Provides:
- FakeView: minimal LedgerView for evaluating achievement rules without a Ledger
- FixedClock: deterministic, advancing clock
- brew_draws / scripted_ledger: randomness scripted down to the rarity roll
"""

from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, List, Optional

from coffee_ledger import Ledger, SequenceRandomnessSource, PROOF_HASH_LENGTH


# One roll inside each rarity band.
LEGENDARY_ROLL = 0
RARE_ROLL = 2
UNCOMMON_ROLL = 15
COMMON_ROLL = 40


class FakeView:
    """
    Minimal LedgerView implementation for testing achievement rules.

    Example:
        view = FakeView(count=1, labels={'alice': {'Latte'}})
        view.labels_brewed_by('alice')
        # Returns: frozenset({'Latte'})
    """

    def __init__(
        self,
        count: int = 0,
        labels: Optional[Dict[str, Iterable[str]]] = None,
        balances: Optional[Dict[str, int]] = None,
    ):
        self._count = count
        self._labels = {b: frozenset(ls) for b, ls in (labels or {}).items()}
        self._balances = balances or {}

    @property
    def transaction_count(self) -> int:
        return self._count

    def labels_brewed_by(self, brewer: str) -> FrozenSet[str]:
        return self._labels.get(brewer, frozenset())

    def balance_of(self, brewer: str) -> int:
        return self._balances.get(brewer, 0)


class FixedClock:
    """Clock returning a start time that advances by `step` seconds per call."""

    def __init__(self, start: int = 1_700_000_000, step: int = 1):
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        self.calls += 1
        return value


def brew_draws(*rolls: int, hex_digit: int = 0xA) -> List[int]:
    """
    Scripted draws for a sequence of brews.

    Each brew consumes PROOF_HASH_LENGTH hex digits and then one rarity roll.
    """
    draws = []
    for roll in rolls:
        draws.extend([hex_digit] * PROOF_HASH_LENGTH)
        draws.append(roll)
    return draws


def scripted_ledger(*rolls: int) -> Ledger:
    """Quiet ledger whose brews roll exactly `rolls`, in order."""
    return Ledger(
        "test",
        randomness=SequenceRandomnessSource(brew_draws(*rolls)),
        clock=FixedClock(),
        verbose=False,
    )
