"""
conftest.py - Shared pytest fixtures for token ledger tests

Provides common fixtures used across unit, functional and conformance tests:
- A freshly constructed ledger with the default configuration
- A ledger whose holders are already funded
"""

import pytest

from tokenledger import TokenLedger

from tests.helpers import OWNER, ALICE, BOB, units


@pytest.fixture
def token():
    """Fresh ledger: 200,000 tokens minted to the owner, nothing else."""
    return TokenLedger("Governed Token", "GOV", OWNER, verbose=False)


@pytest.fixture
def funded_token(token):
    """Ledger where alice and bob each hold 1,000 tokens minted by the owner."""
    token.mint(OWNER, ALICE, units(1000))
    token.mint(OWNER, BOB, units(1000))
    return token
