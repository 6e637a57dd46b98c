"""
Core types for the proof-of-coffee ledger.

This module provides the foundational data structures and protocols for the ledger:
1. Protocols: LedgerView for read-only ledger access
2. Immutable data structures: Transaction, Session, BrewResult
3. Exceptions: LedgerError and the fatal clock/randomness errors
4. Constants: starting grant, fallback identity, proof hash format

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, FrozenSet, Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from .achievements import Achievement


# ============================================================================
# CONSTANTS
# ============================================================================

# Identity used when a session is opened with an empty name.
ANONYMOUS_BREWER = "Anonymous"

# Coins granted the first time an identity is seen by set_user().
STARTING_BALANCE = 10

# Decorative proof hash: fixed prefix followed by lowercase hex digits.
# It is cosmetic only and is never checked against transaction content.
PROOF_HASH_PREFIX = "proof-of-coffee-"
PROOF_HASH_LENGTH = 10


# ============================================================================
# ENUMS
# ============================================================================

class Rarity(Enum):
    """
    Rarity tier rolled for every brew.

    The rank orders tiers for display styling only:
    COMMON < UNCOMMON < RARE < LEGENDARY.
    """
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    LEGENDARY = "Legendary"

    @property
    def rank(self) -> int:
        return _RARITY_RANK[self]

    @property
    def icon(self) -> str:
        return _RARITY_ICON[self]

    def __str__(self) -> str:
        return self.value


_RARITY_RANK = {
    Rarity.COMMON: 0,
    Rarity.UNCOMMON: 1,
    Rarity.RARE: 2,
    Rarity.LEGENDARY: 3,
}

_RARITY_ICON = {
    Rarity.COMMON: "☕",
    Rarity.UNCOMMON: "🍵",
    Rarity.RARE: "💎",
    Rarity.LEGENDARY: "🌟",
}


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class RandomnessError(LedgerError):
    """Raised when the randomness source fails or returns an out-of-range draw."""
    pass


class ClockError(LedgerError):
    """Raised when the wall clock cannot produce a usable timestamp."""
    pass


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    The achievement catalog evaluates its rules against a LedgerView so that
    it can inspect the log without being able to change it. The Ledger class
    implements this protocol; tests use FakeView.
    """

    @property
    def transaction_count(self) -> int:
        """Return the number of transactions ever appended."""
        ...

    def labels_brewed_by(self, brewer: str) -> FrozenSet[str]:
        """Return the distinct coffee labels brewed by a brewer (case-sensitive)."""
        ...

    def balance_of(self, brewer: str) -> int:
        """Return the brewer's balance, 0 if never credited."""
        ...


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Session:
    """
    The identity a caller brews as.

    Returned by Ledger.set_user() and passed explicitly into Ledger.brew(),
    so the ledger itself holds no "current user" field.
    """
    brewer: str


@dataclass(frozen=True, slots=True)
class Transaction:
    """
    An executed, immutable record of one brew.

    Attributes:
        id: 1-based sequence number, strictly increasing, never reused
        coffee_label: Free text from the caller, preserved verbatim (may be empty)
        timestamp: Seconds since the Unix epoch at creation
        proof_hash: Decorative "proof-of-coffee" string, carries no integrity guarantee
        rarity: Tier rolled at creation
        brewer: Identity of the session that brewed it, captured by value
    """
    id: int
    coffee_label: str
    timestamp: int
    proof_hash: str
    rarity: Rarity
    brewer: str

    def __post_init__(self):
        if self.id < 1:
            raise ValueError(f"Transaction id must be positive, got {self.id}")

    def __repr__(self) -> str:
        w = 72  # Inner content width
        bar = "─" * w

        def pad(text: str) -> str:
            """Pad or truncate text to exactly w characters."""
            if len(text) > w:
                return text[:w-3] + "..."
            return text + " " * (w - len(text))

        lines = [
            "",
            f"┌{bar}┐",
            f"│{pad(' Brew #' + str(self.id) + ' ' + self.rarity.icon)}│",
            f"├{bar}┤",
            f"│{pad('   coffee    : ' + self.coffee_label)}│",
            f"│{pad('   brewer    : ' + self.brewer)}│",
            f"│{pad('   rarity    : ' + str(self.rarity))}│",
            f"│{pad('   timestamp : ' + str(self.timestamp))}│",
            f"│{pad('   hash      : ' + self.proof_hash)}│",
            f"└{bar}┘",
        ]
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class BrewResult:
    """
    Everything a single brew produced.

    Attributes:
        transaction: The appended Transaction
        unlocked_achievements: Achievements unlocked by this call (often empty)
        reward_credited: Coins credited for the rolled rarity
        balance_after: Brewer's balance once all credits were applied
    """
    transaction: Transaction
    unlocked_achievements: Tuple['Achievement', ...]
    reward_credited: int
    balance_after: int

    @property
    def achievement_reward(self) -> int:
        """Total one-time achievement coins credited by this call."""
        return sum(a.reward for a in self.unlocked_achievements)

    @property
    def total_credited(self) -> int:
        return self.reward_credited + self.achievement_reward
