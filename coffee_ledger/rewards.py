"""
rewards.py - Coin payout per rarity tier

reward_for() is a pure lookup over REWARD_TABLE. It has no side effects and
cannot fail for any Rarity member.
"""

from typing import Dict

from .core import Rarity


REWARD_TABLE: Dict[Rarity, int] = {
    Rarity.COMMON: 5,
    Rarity.UNCOMMON: 10,
    Rarity.RARE: 25,
    Rarity.LEGENDARY: 50,
}


def reward_for(rarity: Rarity) -> int:
    """Return the coins credited for brewing a coffee of the given rarity."""
    return REWARD_TABLE[rarity]
