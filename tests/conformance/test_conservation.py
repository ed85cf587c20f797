"""
Supply Conservation Conformance Tests

INVARIANT: For every reachable state:
    Σ_{a ∈ accounts} balance_of(a) = total_supply() ≤ MAX_SUPPLY

Only mint raises total supply. Only burn and the transfer tax lower it.
Transfers otherwise redistribute without creating or destroying units.

These tests use property-based testing to verify conservation holds for
arbitrary operation sequences, including ones that get rejected.
"""

import pytest
from hypothesis import given, settings, note
from hypothesis import strategies as st

from tokenledger import (
    TokenLedger, LedgerError, MAX_SUPPLY, INITIAL_SUPPLY, compute_tax,
)

from tests.helpers import OWNER, units, assert_invariants


ACCOUNTS = [OWNER, "alice", "bob", "carol", "dave"]


# =============================================================================
# STRATEGIES FOR PROPERTY-BASED TESTING
# =============================================================================

account = st.sampled_from(ACCOUNTS)

# Mix of tiny amounts (tax rounds to zero) and realistic token amounts
amount = st.one_of(
    st.integers(min_value=0, max_value=10_000),
    st.integers(min_value=0, max_value=units(300_000)),
)

operation = st.one_of(
    st.tuples(st.just("mint"), account, account, amount),
    st.tuples(st.just("burn"), account, account, amount),
    st.tuples(st.just("transfer"), account, account, amount),
    st.tuples(st.just("freeze_wallet"), account, account, st.booleans()),
    st.tuples(st.just("whitelist_wallet"), account, account, st.booleans()),
    st.tuples(st.just("toggle_pause"), account),
    st.tuples(
        st.just("batch_transfer"), account,
        st.lists(account, max_size=4),
        st.lists(amount, max_size=4),
    ),
)


def apply(token: TokenLedger, op: tuple) -> None:
    """Run one generated operation, tolerating rule rejections."""
    name, *args = op
    try:
        getattr(token, name)(*args)
        note(f"applied {op}")
    except LedgerError as e:
        note(f"rejected {op}: {type(e).__name__}")


# =============================================================================
# PROPERTY TESTS
# =============================================================================

class TestConservationProperties:

    @given(st.lists(operation, max_size=30))
    @settings(max_examples=150, deadline=None)
    def test_random_sequences_conserve_supply(self, ops):
        """
        PROPERTY: After any sequence of calls, sum(balances) == total_supply <= cap.
        """
        token = TokenLedger("Token", "TKN", OWNER)
        for op in ops:
            apply(token, op)
            assert_invariants(token)

    @given(amount)
    @settings(max_examples=100)
    def test_transfer_destroys_exactly_the_tax(self, qty):
        """
        PROPERTY: A non-exempt transfer lowers supply by floor(qty * 50 / 10000)
        and credits the recipient with the rest.
        """
        token = TokenLedger("Token", "TKN", OWNER)
        qty = min(qty, INITIAL_SUPPLY)
        supply = token.total_supply()
        token.transfer(OWNER, "bob", qty)
        tax = compute_tax(qty, 50)
        assert token.total_supply() == supply - tax
        assert token.balance_of("bob") == qty - tax

    @given(amount)
    @settings(max_examples=100)
    def test_whitelisted_transfer_conserves_supply(self, qty):
        """PROPERTY: Whitelisted senders never change total supply."""
        token = TokenLedger("Token", "TKN", OWNER)
        token.whitelist_wallet(OWNER, OWNER, True)
        qty = min(qty, INITIAL_SUPPLY)
        token.transfer(OWNER, "bob", qty)
        assert token.total_supply() == INITIAL_SUPPLY
        assert token.balance_of("bob") == qty

    @given(st.integers(min_value=0, max_value=MAX_SUPPLY * 2))
    @settings(max_examples=100)
    def test_mint_never_exceeds_cap(self, qty):
        """PROPERTY: mint either succeeds within the cap or changes nothing."""
        token = TokenLedger("Token", "TKN", OWNER)
        try:
            token.mint(OWNER, "bob", qty)
        except LedgerError:
            assert qty > MAX_SUPPLY - INITIAL_SUPPLY
            assert token.total_supply() == INITIAL_SUPPLY
        else:
            assert qty <= MAX_SUPPLY - INITIAL_SUPPLY
            assert token.total_supply() == INITIAL_SUPPLY + qty
        assert_invariants(token)


class TestConservationExamples:

    def test_mint_transfer_burn_cycle(self):
        token = TokenLedger("Token", "TKN", OWNER)
        token.mint(OWNER, "alice", units(500))
        token.transfer("alice", "bob", units(200))
        token.burn(OWNER, "bob", units(100))
        expected = INITIAL_SUPPLY + units(500) - compute_tax(units(200), 50) - units(100)
        assert token.total_supply() == expected
        assert_invariants(token)

    @pytest.mark.parametrize("qty", [0, 1, 199, 200, units(1), units(123_456)])
    def test_tax_rounding_keeps_books_balanced(self, qty):
        token = TokenLedger("Token", "TKN", OWNER)
        token.transfer(OWNER, "alice", qty)
        assert_invariants(token)
