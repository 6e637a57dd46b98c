"""
achievements.py - One-time achievement catalog

Achievements are a fixed, enumerated set. Every AchievementKind has exactly
one unlock rule and one definition, so evaluating the catalog never looks up
a key that might be missing.

Rules are evaluated after the triggering transaction has been appended:

    FIRST_BREW         the ledger holds exactly one transaction
    RARE_FIND          the triggering brew rolled RARE or LEGENDARY
    LEGENDARY_BARISTA  the brewer has brewed at least 3 distinct labels

Unlock state is global per achievement, shared by every brewer. Once an
achievement is unlocked it stays unlocked; evaluating it again is a no-op.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple

from .core import LedgerError, LedgerView, Rarity, Transaction


# Distinct coffee labels a brewer needs for LEGENDARY_BARISTA.
BARISTA_DISTINCT_LABELS = 3


class AchievementKind(Enum):
    """Stable achievement keys."""
    FIRST_BREW = "first_brew"
    RARE_FIND = "rare_find"
    LEGENDARY_BARISTA = "legendary_barista"


@dataclass(frozen=True, slots=True)
class Achievement:
    """
    Snapshot of a catalog entry.

    Attributes:
        kind: Stable key
        name: Display name
        description: What unlocks it
        reward: Coins credited once, to the brewer who unlocks it
        unlocked: Unlock state at the time the snapshot was taken
    """
    kind: AchievementKind
    name: str
    description: str
    reward: int
    unlocked: bool = False

    @property
    def key(self) -> str:
        return self.kind.value


class _Definition(NamedTuple):
    name: str
    description: str
    reward: int


ACHIEVEMENT_DEFINITIONS: Dict[AchievementKind, _Definition] = {
    AchievementKind.FIRST_BREW: _Definition(
        "First Brew", "Brew the very first coffee on the ledger", 10),
    AchievementKind.RARE_FIND: _Definition(
        "Rare Find", "Brew a Rare or Legendary coffee", 20),
    AchievementKind.LEGENDARY_BARISTA: _Definition(
        "Legendary Barista",
        f"Brew {BARISTA_DISTINCT_LABELS} different kinds of coffee", 30),
}


# ============================================================================
# UNLOCK RULES
# ============================================================================

# A rule inspects the ledger after the triggering transaction was appended.
AchievementRule = Callable[[LedgerView, Transaction], bool]


def _first_brew(view: LedgerView, tx: Transaction) -> bool:
    return view.transaction_count == 1


def _rare_find(view: LedgerView, tx: Transaction) -> bool:
    return tx.rarity in (Rarity.RARE, Rarity.LEGENDARY)


def _legendary_barista(view: LedgerView, tx: Transaction) -> bool:
    return len(view.labels_brewed_by(tx.brewer)) >= BARISTA_DISTINCT_LABELS


ACHIEVEMENT_RULES: Dict[AchievementKind, AchievementRule] = {
    AchievementKind.FIRST_BREW: _first_brew,
    AchievementKind.RARE_FIND: _rare_find,
    AchievementKind.LEGENDARY_BARISTA: _legendary_barista,
}


def check_catalog(rules: Dict[AchievementKind, AchievementRule],
                  definitions: Dict[AchievementKind, _Definition]) -> None:
    """Raise LedgerError unless every AchievementKind has a rule and a definition."""
    for kind in AchievementKind:
        if kind not in rules or kind not in definitions:
            raise LedgerError(f"Achievement {kind.value} has no rule or definition")


check_catalog(ACHIEVEMENT_RULES, ACHIEVEMENT_DEFINITIONS)


# ============================================================================
# CATALOG
# ============================================================================

class AchievementCatalog:
    """
    Holds the unlock state of every achievement.

    The catalog does not credit rewards itself; the Ledger credits the reward
    of each achievement returned by evaluate() to the triggering brewer.
    """

    def __init__(self):
        self._unlocked: Dict[AchievementKind, bool] = {
            kind: False for kind in AchievementKind
        }

    def get(self, kind: AchievementKind) -> Achievement:
        """Return a snapshot of one achievement with its current unlock state."""
        definition = ACHIEVEMENT_DEFINITIONS[kind]
        return Achievement(
            kind=kind,
            name=definition.name,
            description=definition.description,
            reward=definition.reward,
            unlocked=self._unlocked[kind],
        )

    def is_unlocked(self, kind: AchievementKind) -> bool:
        return self._unlocked[kind]

    def all(self) -> List[Achievement]:
        """Every achievement in declaration order."""
        return [self.get(kind) for kind in AchievementKind]

    @property
    def unlocked_count(self) -> int:
        return sum(1 for unlocked in self._unlocked.values() if unlocked)

    def evaluate(self, view: LedgerView, tx: Transaction) -> List[Achievement]:
        """
        Unlock every still-locked achievement whose rule holds.

        All rules are checked against the same view before any state changes,
        so one unlock never affects another's eligibility in the same call.

        Args:
            view: Read-only ledger state, already including tx
            tx: The transaction that triggered evaluation

        Returns:
            Snapshots (unlocked=True) of the achievements unlocked by this call
        """
        eligible = [
            kind for kind in AchievementKind
            if not self._unlocked[kind] and ACHIEVEMENT_RULES[kind](view, tx)
        ]
        newly_unlocked = []
        for kind in eligible:
            self._unlocked[kind] = True
            newly_unlocked.append(self.get(kind))
        return newly_unlocked

    def __repr__(self):
        return f"AchievementCatalog({self.unlocked_count}/{len(self._unlocked)} unlocked)"
