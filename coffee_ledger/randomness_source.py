"""
randomness_source.py - Randomness infrastructure for brewing

Provides the uniform integer draws the ledger consumes for rarity rolls and
decorative proof hashes.

Classes:
- RandomnessSource: Protocol defining the draw interface
- NumpyRandomnessSource: numpy Generator backed draws, optionally seeded
- SequenceRandomnessSource: Replays a fixed list of draws (scripted sessions, tests)

Functions:
- generate_proof_hash: Build the decorative "proof-of-coffee-..." string
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

import numpy as np

from .core import PROOF_HASH_PREFIX, PROOF_HASH_LENGTH, RandomnessError


@runtime_checkable
class RandomnessSource(Protocol):
    """
    Protocol for randomness sources.

    Implementations must return an integer uniformly distributed in [0, upper).
    A source that cannot produce a draw must raise rather than invent a value.
    """

    def randbelow(self, upper: int) -> int:
        """Draw an integer in [0, upper)."""
        ...


class NumpyRandomnessSource:
    """
    Randomness source backed by numpy's default bit generator.

    Passing a seed makes a whole session reproducible.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def randbelow(self, upper: int) -> int:
        if upper < 1:
            raise ValueError(f"upper must be positive, got {upper}")
        return int(self._rng.integers(0, upper))

    def __repr__(self):
        return f"NumpyRandomnessSource(seed={self.seed})"


class SequenceRandomnessSource:
    """
    Randomness source that replays a fixed list of draws in order.

    Each brew consumes PROOF_HASH_LENGTH draws below 16 for the proof hash,
    then one draw below 100 for the rarity roll.
    """

    def __init__(self, values: Iterable[int] = ()):
        self.values: List[int] = list(values)
        self._position = 0

    def extend(self, values: Iterable[int]):
        """Append more scripted draws."""
        self.values.extend(values)

    @property
    def remaining(self) -> int:
        return len(self.values) - self._position

    def randbelow(self, upper: int) -> int:
        if self._position >= len(self.values):
            raise RandomnessError(
                f"SequenceRandomnessSource exhausted after {len(self.values)} draws"
            )
        value = self.values[self._position]
        if not 0 <= value < upper:
            raise RandomnessError(
                f"Scripted draw {value} at position {self._position} is outside [0, {upper})"
            )
        self._position += 1
        return value

    def __repr__(self):
        return f"SequenceRandomnessSource({self.remaining} of {len(self.values)} draws remaining)"


def generate_proof_hash(source: RandomnessSource) -> str:
    """
    Build a decorative proof-of-coffee hash.

    Draws PROOF_HASH_LENGTH hex digits from the source. The result looks like
    "proof-of-coffee-3fa09c1e7b" and is never verified against anything.
    """
    digits = []
    for _ in range(PROOF_HASH_LENGTH):
        value = source.randbelow(16)
        if not 0 <= value < 16:
            raise RandomnessError(f"Hex digit draw {value} is outside [0, 16)")
        digits.append(format(value, "x"))
    return PROOF_HASH_PREFIX + "".join(digits)
