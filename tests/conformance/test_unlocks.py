"""
Unlock Conformance Tests

INVARIANT: Each achievement unlocks at most once, on the first brew that
satisfies its rule, and never reverts.

    first_brew         ⟺ brew #1
    rare_find          ⟺ first brew rolling RARE or LEGENDARY
    legendary_barista  ⟺ first brew after which its brewer has 3 distinct labels
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from coffee_ledger import Ledger, Rarity, SequenceRandomnessSource, AchievementKind

from tests.fakes import FixedClock, brew_draws


brew_specs = st.lists(
    st.tuples(
        st.sampled_from(["alice", "bob"]),
        st.sampled_from(["Latte", "latte", "Mocha", "Espresso"]),
        st.integers(0, 99),
    ),
    min_size=1,
    max_size=30,
)


def _run(specs):
    ledger = Ledger(
        "test",
        randomness=SequenceRandomnessSource(brew_draws(*[roll for _, _, roll in specs])),
        clock=FixedClock(),
        verbose=False,
    )
    results = []
    for brewer, label, _ in specs:
        results.append(ledger.brew(ledger.set_user(brewer), label))
    return ledger, results


def _first_index(results, key):
    for i, r in enumerate(results):
        if key in [a.key for a in r.unlocked_achievements]:
            return i
    return None


class TestUnlockProperties:
    """Property-based unlock tests."""

    @given(brew_specs)
    @settings(max_examples=100)
    def test_each_achievement_unlocks_at_most_once(self, specs):
        ledger, results = _run(specs)
        keys = [a.key for r in results for a in r.unlocked_achievements]
        assert len(keys) == len(set(keys))
        unlocked = {a.key for a in ledger.all_achievements() if a.unlocked}
        assert unlocked == set(keys)

    @given(brew_specs)
    @settings(max_examples=100)
    def test_first_brew_on_call_one(self, specs):
        _, results = _run(specs)
        assert _first_index(results, "first_brew") == 0

    @given(brew_specs)
    @settings(max_examples=100)
    def test_rare_find_on_first_rare_roll(self, specs):
        _, results = _run(specs)
        rare = [i for i, r in enumerate(results)
                if r.transaction.rarity in (Rarity.RARE, Rarity.LEGENDARY)]
        assert _first_index(results, "rare_find") == (rare[0] if rare else None)

    @given(brew_specs)
    @settings(max_examples=100)
    def test_legendary_barista_on_third_distinct_label(self, specs):
        _, results = _run(specs)
        seen = {}
        expected = None
        for i, (brewer, label, _) in enumerate(specs):
            seen.setdefault(brewer, set()).add(label)
            if len(seen[brewer]) >= 3:
                expected = i
                break
        assert _first_index(results, "legendary_barista") == expected

    @given(brew_specs)
    @settings(max_examples=50)
    def test_unlocked_never_reverts(self, specs):
        ledger = Ledger(
            "test",
            randomness=SequenceRandomnessSource(brew_draws(*[roll for _, _, roll in specs])),
            clock=FixedClock(),
            verbose=False,
        )
        unlocked = set()
        for brewer, label, _ in specs:
            ledger.brew(ledger.set_user(brewer), label)
            now = {a.kind for a in ledger.all_achievements() if a.unlocked}
            assert unlocked <= now
            unlocked = now
        assert AchievementKind.FIRST_BREW in unlocked


class TestUnlockExamples:

    def test_latte_latte_espresso_mocha(self):
        specs = [("A", "Latte", 40), ("A", "Latte", 40), ("A", "Espresso", 40), ("A", "Mocha", 40)]
        _, results = _run(specs)
        assert _first_index(results, "legendary_barista") == 3
