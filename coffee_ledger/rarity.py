"""
rarity.py - Rarity tier rolls and luck statistics

A brew rolls one integer in [0, 100). The roll maps onto contiguous,
exhaustive bands checked in this order:

    [0, 2)    LEGENDARY   2%
    [2, 15)   RARE       13%
    [15, 40)  UNCOMMON   25%
    [40, 100) COMMON     60%

Provides:
- roll_rarity: map a roll to its tier
- draw_rarity: draw a roll from a RandomnessSource and map it
- RARITY_PROBABILITIES: tier probabilities derived from the bands
- rarity_fit: chi-square goodness-of-fit of observed tier counts
"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Tuple

import numpy as np
from scipy import stats

from .core import Rarity, RandomnessError
from .randomness_source import RandomnessSource


# Size of the roll space.
ROLL_RANGE = 100

# (upper bound exclusive, tier) in evaluation order. Lower bound of each band
# is the previous band's upper bound.
RARITY_BANDS: Tuple[Tuple[int, Rarity], ...] = (
    (2, Rarity.LEGENDARY),
    (15, Rarity.RARE),
    (40, Rarity.UNCOMMON),
    (100, Rarity.COMMON),
)


def _band_probabilities() -> Dict[Rarity, float]:
    probabilities = {}
    lower = 0
    for upper, tier in RARITY_BANDS:
        probabilities[tier] = (upper - lower) / ROLL_RANGE
        lower = upper
    return probabilities


RARITY_PROBABILITIES: Dict[Rarity, float] = _band_probabilities()


def roll_rarity(roll: int) -> Rarity:
    """
    Map a roll in [0, 100) to its rarity tier.

    Raises:
        RandomnessError: If the roll is outside [0, 100)
    """
    if not 0 <= roll < ROLL_RANGE:
        raise RandomnessError(f"Rarity roll {roll} is outside [0, {ROLL_RANGE})")
    for upper, tier in RARITY_BANDS:
        if roll < upper:
            return tier
    raise RandomnessError(f"Rarity roll {roll} falls outside every band")


def draw_rarity(source: RandomnessSource) -> Rarity:
    """Draw one roll from the source and map it to a tier."""
    return roll_rarity(source.randbelow(ROLL_RANGE))


# ============================================================================
# LUCK STATISTICS
# ============================================================================

@dataclass(frozen=True)
class RarityReport:
    """
    Observed rarity tally compared against the tier probabilities.

    Attributes:
        counts: Observed brews per tier (every tier present, possibly 0)
        expected: Expected brews per tier for the same total
        chi2: Chi-square statistic (None when there are no brews)
        p_value: Probability of a deviation at least this large by chance
                 (None when there are no brews)
    """
    counts: Dict[Rarity, int]
    expected: Dict[Rarity, float]
    chi2: Optional[float]
    p_value: Optional[float]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def share(self, tier: Rarity) -> float:
        """Observed fraction of brews in a tier (0.0 when there are no brews)."""
        if self.total == 0:
            return 0.0
        return self.counts[tier] / self.total


def rarity_fit(counts: Mapping[Rarity, int]) -> RarityReport:
    """
    Test observed tier counts against RARITY_PROBABILITIES.

    Args:
        counts: Brews per tier; missing tiers count as 0

    Returns:
        RarityReport with a chi-square statistic and p-value
    """
    tiers = list(Rarity)
    observed = np.array([counts.get(t, 0) for t in tiers], dtype=float)
    total = observed.sum()
    probabilities = np.array([RARITY_PROBABILITIES[t] for t in tiers])
    expected = probabilities * total

    chi2 = None
    p_value = None
    if total > 0:
        result = stats.chisquare(observed, f_exp=expected)
        chi2 = float(result.statistic)
        p_value = float(result.pvalue)

    return RarityReport(
        counts={t: int(observed[i]) for i, t in enumerate(tiers)},
        expected={t: float(expected[i]) for i, t in enumerate(tiers)},
        chi2=chi2,
        p_value=p_value,
    )
