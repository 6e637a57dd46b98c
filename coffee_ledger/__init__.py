"""
coffee_ledger - Proof-of-Coffee Ledger

An in-memory, append-only ledger of coffee brews. Every brew rolls a rarity,
pays out coins and may unlock one-time achievements. The "proof-of-coffee"
hash is decorative and never verified.

Usage:
    from coffee_ledger import Ledger, NumpyRandomnessSource

    ledger = Ledger("cafe", randomness=NumpyRandomnessSource(seed=7), verbose=False)
    alice = ledger.set_user("alice")          # alice starts with 10 coins

    result = ledger.brew(alice, "Espresso")
    result.transaction.rarity                 # e.g. Rarity.COMMON
    result.unlocked_achievements              # (First Brew,) on the first brew
    ledger.balance_of("alice")                # 10 + reward + achievement rewards

    ledger.recent_transactions(5)             # most recent first
"""

# Core types
from .core import (
    LedgerView,
    Rarity,
    Transaction,
    Session,
    BrewResult,
    LedgerError,
    RandomnessError,
    ClockError,
    ANONYMOUS_BREWER,
    STARTING_BALANCE,
    PROOF_HASH_PREFIX,
    PROOF_HASH_LENGTH,
)

# Ledger
from .ledger import Ledger

# Randomness
from .randomness_source import (
    RandomnessSource,
    NumpyRandomnessSource,
    SequenceRandomnessSource,
    generate_proof_hash,
)

# Rarity
from .rarity import (
    ROLL_RANGE,
    RARITY_BANDS,
    RARITY_PROBABILITIES,
    RarityReport,
    roll_rarity,
    draw_rarity,
    rarity_fit,
)

# Rewards
from .rewards import REWARD_TABLE, reward_for

# Achievements
from .achievements import (
    Achievement,
    AchievementKind,
    AchievementCatalog,
    ACHIEVEMENT_DEFINITIONS,
    ACHIEVEMENT_RULES,
    BARISTA_DISTINCT_LABELS,
)

__all__ = [
    # Core
    'LedgerView', 'Rarity', 'Transaction', 'Session', 'BrewResult',
    'LedgerError', 'RandomnessError', 'ClockError',
    'ANONYMOUS_BREWER', 'STARTING_BALANCE', 'PROOF_HASH_PREFIX', 'PROOF_HASH_LENGTH',
    # Ledger
    'Ledger',
    # Randomness
    'RandomnessSource', 'NumpyRandomnessSource', 'SequenceRandomnessSource',
    'generate_proof_hash',
    # Rarity
    'ROLL_RANGE', 'RARITY_BANDS', 'RARITY_PROBABILITIES', 'RarityReport',
    'roll_rarity', 'draw_rarity', 'rarity_fit',
    # Rewards
    'REWARD_TABLE', 'reward_for',
    # Achievements
    'Achievement', 'AchievementKind', 'AchievementCatalog',
    'ACHIEVEMENT_DEFINITIONS', 'ACHIEVEMENT_RULES', 'BARISTA_DISTINCT_LABELS',
]

__version__ = '1.0.0'
