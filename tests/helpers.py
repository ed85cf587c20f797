"""
helpers.py - Test helpers shared across the token ledger suites.

Account names, unit scaling and invariant checks used by unit,
functional and conformance tests.
"""

from tokenledger import TokenLedger, to_base_units


OWNER = "owner"
ALICE = "alice"
BOB = "bob"
CAROL = "carol"


def units(value) -> int:
    """Whole tokens to base units."""
    return to_base_units(value)


def snapshot(ledger: TokenLedger) -> dict:
    """Capture every observable piece of state for before/after comparisons."""
    return {
        "balances": ledger.holders(),
        "total_supply": ledger.total_supply(),
        "paused": ledger.paused,
        "frozen": ledger.frozen_wallets(),
        "whitelisted": ledger.whitelisted_wallets(),
        "allowances": ledger.allowances(),
        "events": len(ledger.events),
        "receipts": len(ledger.receipts),
    }


def assert_invariants(ledger: TokenLedger) -> None:
    """sum(balances) == total_supply <= max_supply and nothing negative."""
    result = ledger.verify_supply()
    assert result["valid"], result["discrepancies"]
    assert sum(ledger.holders().values()) == ledger.total_supply()
    assert ledger.total_supply() <= ledger.MAX_SUPPLY
