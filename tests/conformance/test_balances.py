"""
Balance Conformance Tests

INVARIANT: Balances only grow, and equal the sum of their credits.

    ∀ brewer B after any brews:
        balance(B) = STARTING_BALANCE
                     + Σ reward_for(tx.rarity) for tx brewed by B
                     + Σ achievement.reward unlocked by B's brews

Nothing in the ledger ever subtracts coins.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from coffee_ledger import Ledger, NumpyRandomnessSource, STARTING_BALANCE, reward_for

from tests.fakes import FixedClock


class TestBalanceProperties:
    """Property-based balance tests."""

    @given(
        st.lists(st.tuples(st.sampled_from(["alice", "bob", "carol"]),
                           st.sampled_from(["Latte", "Mocha", "Espresso", "Flat White", ""])),
                 min_size=1, max_size=50),
        st.integers(0, 2**32 - 1),
    )
    @settings(max_examples=60)
    def test_balance_is_sum_of_credits(self, brews, seed):
        """
        PROPERTY: balance = starting grant + rarity rewards + achievement rewards.
        """
        ledger = Ledger("test", randomness=NumpyRandomnessSource(seed), clock=FixedClock(), verbose=False)
        sessions = {}
        expected = {}
        for brewer, label in brews:
            if brewer not in sessions:
                sessions[brewer] = ledger.set_user(brewer)
                expected[brewer] = STARTING_BALANCE
            result = ledger.brew(sessions[brewer], label)
            assert result.reward_credited == reward_for(result.transaction.rarity)
            expected[brewer] += result.reward_credited + result.achievement_reward
        for brewer, balance in expected.items():
            assert ledger.balance_of(brewer) == balance

    @given(st.lists(st.sampled_from(["alice", "bob"]), min_size=1, max_size=40),
           st.integers(0, 2**32 - 1))
    @settings(max_examples=50)
    def test_balances_never_decrease(self, brewers, seed):
        """
        PROPERTY: No brew or session switch lowers any balance.
        """
        ledger = Ledger("test", randomness=NumpyRandomnessSource(seed), clock=FixedClock(), verbose=False)
        previous = {}
        for brewer in brewers:
            session = ledger.set_user(brewer)
            ledger.brew(session, "Latte")
            current = dict(ledger.balances)
            for name, balance in previous.items():
                assert current[name] >= balance
            previous = current

    @given(st.text(max_size=10))
    @settings(max_examples=30)
    def test_returning_user_keeps_balance(self, name):
        """
        PROPERTY: set_user() grants the starting balance only once per identity.
        """
        ledger = Ledger("test", randomness=NumpyRandomnessSource(1), clock=FixedClock(), verbose=False)
        session = ledger.set_user(name)
        ledger.brew(session, "Latte")
        balance = ledger.balance_of(session.brewer)
        assert ledger.set_user(name) == session
        assert ledger.balance_of(session.brewer) == balance


class TestBalanceExamples:

    def test_anonymous_starting_balance(self):
        ledger = Ledger("test", verbose=False)
        session = ledger.set_user("")
        assert session.brewer == "Anonymous"
        assert ledger.balance_of("Anonymous") == 10
