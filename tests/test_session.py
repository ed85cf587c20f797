"""
test_session.py - Tests for caller-bound sessions (ledger.connect()).
"""

import pytest

from tokenledger import AccountSession, Unauthorized, FrozenWallet, compute_tax

from tests.helpers import OWNER, ALICE, BOB, CAROL, units


class TestAccountSession:

    def test_connect_returns_session(self, token):
        session = token.connect(BOB)
        assert isinstance(session, AccountSession)
        assert session.account == BOB
        assert session.ledger is token

    def test_connect_rejects_empty_account(self, token):
        with pytest.raises(ValueError):
            token.connect("")

    def test_owner_session_mints(self, token):
        token.connect(OWNER).mint(BOB, units(1000))
        assert token.connect(BOB).balance == units(1000)

    def test_non_owner_session_cannot_mint(self, token):
        with pytest.raises(Unauthorized):
            token.connect(BOB).mint(BOB, units(1))

    def test_session_transfer_acts_as_account(self, funded_token):
        funded_token.connect(BOB).transfer(CAROL, units(100))
        assert funded_token.balance_of(BOB) == units(900)
        assert funded_token.balance_of(CAROL) == units(100) - compute_tax(units(100), 50)

    def test_session_admin_calls(self, funded_token):
        owner = funded_token.connect(OWNER)
        owner.freeze_wallet(BOB, True)
        with pytest.raises(FrozenWallet):
            funded_token.connect(BOB).transfer(ALICE, units(1))
        owner.freeze_wallet(BOB, False)
        owner.whitelist_wallet(BOB, True)
        owner.toggle_pause()
        assert funded_token.paused
        owner.toggle_pause()
        owner.burn(BOB, units(1))
        assert funded_token.balance_of(BOB) == units(999)

    def test_session_batch_and_allowances(self, funded_token):
        alice = funded_token.connect(ALICE)
        alice.batch_transfer([BOB, CAROL], [units(1), units(1)])
        alice.approve(BOB, units(5))
        alice.increase_allowance(BOB, units(5))
        alice.decrease_allowance(BOB, units(2))
        assert funded_token.allowance(ALICE, BOB) == units(8)
        funded_token.connect(BOB).transfer_from(ALICE, CAROL, units(8))
        assert funded_token.allowance(ALICE, BOB) == 0

    def test_repr(self, token):
        assert repr(token.connect(BOB)) == "AccountSession(bob @ GOV)"
