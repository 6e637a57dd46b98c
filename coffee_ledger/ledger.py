"""
ledger.py - Stateful Proof-of-Coffee Ledger

The Ledger class is the central state manager for the coffee ledger.
It is the only module that mutates state.

Key responsibilities:
    - Implements LedgerView protocol for read-only access by the achievement rules
    - Opens sessions and grants the one-time starting balance
    - Brews atomically: id allocation, append, achievement unlocks and credit
      happen together or not at all
    - Keeps the append-only transaction log and per-brewer balances
"""

from __future__ import annotations
from collections import Counter
from typing import Callable, Dict, FrozenSet, List, Optional, Set
import math
import threading
import time

from .core import (
    # Types
    Transaction, Session, BrewResult,
    # Constants
    ANONYMOUS_BREWER, STARTING_BALANCE,
    # Exceptions
    ClockError,
)
from .achievements import Achievement, AchievementCatalog
from .randomness_source import RandomnessSource, NumpyRandomnessSource, generate_proof_hash
from .rarity import RarityReport, draw_rarity, rarity_fit
from .rewards import reward_for


Clock = Callable[[], float]


class Ledger:
    """
    Append-only coffee ledger with rarity rolls, rewards and achievements.

    Implements the LedgerView protocol, so the ledger can be handed to the
    achievement rules which only read from it.

    Thread Safety:
        set_user() and brew() run under a reentrant lock, so concurrent brews
        still produce unique, consecutive ids. Sessions are plain values and
        can be used from any thread.

    Example:
        ledger = Ledger("cafe")
        session = ledger.set_user("alice")
        result = ledger.brew(session, "Espresso")
        print(result.transaction.rarity, ledger.balance_of("alice"))
    """

    def __init__(
        self,
        name: str = "coffee",
        randomness: Optional[RandomnessSource] = None,
        clock: Optional[Clock] = None,
        verbose: bool = True,
    ):
        """
        Create a ledger.

        Args:
            name: Ledger identifier
            randomness: Source of uniform draws (default: unseeded NumpyRandomnessSource)
            clock: Callable returning seconds since the epoch (default: time.time)
            verbose: Print a receipt for every brew (default: True)
        """
        self.name = name
        self.randomness: RandomnessSource = randomness or NumpyRandomnessSource()
        self.clock: Clock = clock or time.time
        self.verbose = verbose
        self.achievements = AchievementCatalog()
        self.transaction_log: List[Transaction] = []
        self.balances: Dict[str, int] = {}
        # Distinct labels per brewer, maintained on append for O(1) rule checks
        self._labels_by_brewer: Dict[str, Set[str]] = {}
        self._last_id: int = 0
        self._lock = threading.RLock()

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def transaction_count(self) -> int:
        """Number of transactions ever appended."""
        return len(self.transaction_log)

    def labels_brewed_by(self, brewer: str) -> FrozenSet[str]:
        """Distinct coffee labels brewed by a brewer (case-sensitive, empty label included)."""
        return frozenset(self._labels_by_brewer.get(brewer, ()))

    def balance_of(self, brewer: str) -> int:
        """Stored balance for a brewer, 0 if the brewer was never credited."""
        return self.balances.get(brewer, 0)

    # ========================================================================
    # READ-ONLY ACCESSORS
    # ========================================================================

    def recent_transactions(self, n: int) -> List[Transaction]:
        """
        Return up to the last n transactions, most recent first.

        Returns every transaction if fewer than n exist, and an empty list
        for n <= 0. The log itself is not touched.
        """
        if n <= 0:
            return []
        return list(reversed(self.transaction_log[-n:]))

    def all_transactions(self) -> List[Transaction]:
        """Every transaction in chronological (append) order."""
        return list(self.transaction_log)

    def all_achievements(self) -> List[Achievement]:
        """Every catalog entry with its current unlock state."""
        return self.achievements.all()

    def list_brewers(self) -> List[str]:
        """Every identity holding a balance entry, sorted."""
        return sorted(self.balances.keys())

    def rarity_report(self, brewer: Optional[str] = None) -> RarityReport:
        """
        Tally rolled rarities and test them against the tier probabilities.

        Args:
            brewer: Restrict the tally to one brewer (default: whole ledger)
        """
        counts = Counter(
            tx.rarity for tx in self.transaction_log
            if brewer is None or tx.brewer == brewer
        )
        return rarity_fit(counts)

    # ========================================================================
    # SESSIONS (Mutating)
    # ========================================================================

    def set_user(self, name: str) -> Session:
        """
        Open a session for an identity.

        An empty name falls back to ANONYMOUS_BREWER. The first time an
        identity is seen it receives STARTING_BALANCE; a returning identity
        keeps whatever balance it already has.

        Args:
            name: Identity to brew as (may be empty)

        Returns:
            Session to pass to brew()
        """
        brewer = name if name else ANONYMOUS_BREWER
        with self._lock:
            if brewer not in self.balances:
                self.balances[brewer] = STARTING_BALANCE
                if self.verbose:
                    print(f"👤 New brewer: {brewer} (+{STARTING_BALANCE} coins)")
        return Session(brewer)

    # ========================================================================
    # BREWING (Mutating)
    # ========================================================================

    def _read_clock(self) -> int:
        now = self.clock()
        if now is None or isinstance(now, bool) or not isinstance(now, (int, float)):
            raise ClockError(f"Clock returned {now!r}, expected seconds since the epoch")
        if math.isnan(now) or math.isinf(now) or now < 0:
            raise ClockError(f"Clock returned unusable time {now!r}")
        return int(now)

    def brew(self, session: Session, coffee_label: str) -> BrewResult:
        """
        Brew a coffee: append one transaction and apply its consequences.

        Steps:
            1. Allocate the next id
            2. Read the clock
            3. Draw the decorative proof hash
            4. Roll rarity
            5. Append the transaction
            6. Evaluate achievements and credit their one-time rewards
            7. Credit the rarity reward

        Steps 1-4 only compute values; nothing is mutated until every value
        is known. A failing clock or randomness source therefore raises
        ClockError / RandomnessError and leaves the ledger unchanged.

        Args:
            session: Session returned by set_user()
            coffee_label: Free text, stored verbatim (empty is accepted)

        Returns:
            BrewResult with the transaction, unlocked achievements and reward
        """
        brewer = session.brewer
        with self._lock:
            tx_id = self._last_id + 1
            timestamp = self._read_clock()
            proof_hash = generate_proof_hash(self.randomness)
            rarity = draw_rarity(self.randomness)

            tx = Transaction(
                id=tx_id,
                coffee_label=coffee_label,
                timestamp=timestamp,
                proof_hash=proof_hash,
                rarity=rarity,
                brewer=brewer,
            )

            self._last_id = tx_id
            self.transaction_log.append(tx)
            self._labels_by_brewer.setdefault(brewer, set()).add(coffee_label)

            unlocked = self.achievements.evaluate(self, tx)
            for achievement in unlocked:
                self._credit(brewer, achievement.reward)

            reward = reward_for(rarity)
            self._credit(brewer, reward)

            result = BrewResult(
                transaction=tx,
                unlocked_achievements=tuple(unlocked),
                reward_credited=reward,
                balance_after=self.balance_of(brewer),
            )

        if self.verbose:
            self._print_brew_result(result)
        return result

    def _credit(self, brewer: str, amount: int) -> None:
        """Add coins to a brewer, creating the balance entry at 0 if absent."""
        if amount < 0:
            raise ValueError(f"Credits must be non-negative, got {amount}")
        self.balances[brewer] = self.balances.get(brewer, 0) + amount

    def _print_brew_result(self, result: BrewResult) -> None:
        """
        Print the transaction receipt followed by its credits.

        Uses Transaction.__repr__ and replaces the closing line with a
        credits section.
        """
        lines = repr(result.transaction).split('\n')
        w = len(lines[-1]) - 2
        bar = "─" * w

        def pad(text: str) -> str:
            if len(text) > w:
                return text[:w-3] + "..."
            return text + " " * (w - len(text))

        lines[-1] = f"├{bar}┤"
        lines.append(f"│{pad(' ✓ +' + str(result.reward_credited) + ' coins (' + str(result.transaction.rarity) + ')')}│")
        for achievement in result.unlocked_achievements:
            lines.append(f"│{pad(' 🏆 ' + achievement.name + ' +' + str(achievement.reward) + ' coins')}│")
        lines.append(f"│{pad(' balance: ' + str(result.balance_after))}│")
        lines.append(f"└{bar}┘")
        print("\n".join(lines))

    def __repr__(self):
        return (f"Ledger({self.name!r}, {self.transaction_count} transactions, "
                f"{len(self.balances)} brewers, {self.achievements.unlocked_count} achievements unlocked)")
