#!/usr/bin/env python3
"""
demo.py - Walk-through: the life of a governed token

Each step builds on the previous one and prints the resulting balances.

WHAT YOU'LL SEE:
  1-2:  Deployment     - Owner, cap and the pre-minted supply
  3-4:  Issuance       - Minting up to (and past) the cap
  5-6:  Transfers      - The 0.5% burn tax and whitelisted distribution
  7-8:  Governance     - Freezing a wallet and pausing transfers
  9:    Deflation      - Burning below the tax-free floor
  10:   Audit          - Supply verification and the event log

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys

from tokenledger import (
    TokenLedger, LedgerError, to_base_units, from_base_units,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the walk-through. Modify these to experiment."""
    name: str = "Governed Token"
    symbol: str = "GOV"
    owner: str = "owner"
    alice: str = "alice"
    bob: str = "bob"


CONFIG = DemoConfig()
QUICK = "--quick" in sys.argv


def step(number: int, title: str) -> None:
    print(f"\n{'=' * 70}\n STEP {number}: {title}\n{'=' * 70}")
    if not QUICK:
        input("  (press Enter) ")


def show(token: TokenLedger) -> None:
    for account, balance in sorted(token.holders().items()):
        print(f"    {account:<8} {from_base_units(balance):>30}")
    print(f"    {'supply':<8} {from_base_units(token.total_supply()):>30}")


def attempt(description: str, call) -> None:
    try:
        call()
        print(f"  ✓ {description}")
    except LedgerError as e:
        print(f"  ✗ {description}: {type(e).__name__}: {e}")


def main() -> None:
    c = CONFIG

    step(1, "Deploy")
    token = TokenLedger(c.name, c.symbol, c.owner)
    owner = token.connect(c.owner)
    print(f"  owner={token.owner}  cap={from_base_units(token.MAX_SUPPLY)}")
    show(token)

    step(2, "Only the owner governs")
    attempt("alice mints herself 1000", lambda: token.connect(c.alice).mint(c.alice, to_base_units(1000)))

    step(3, "Mint to bob")
    owner.mint(c.bob, to_base_units(1000))
    show(token)

    step(4, "The cap holds")
    attempt("mint 800,001 tokens", lambda: owner.mint(c.bob, to_base_units(800_001)))

    step(5, "Taxed transfer")
    receipt = token.connect(c.bob).transfer(c.alice, to_base_units(100))
    print(f"  burned {from_base_units(receipt.tax_burned)} of 100")
    show(token)

    step(6, "Whitelisted distribution")
    owner.whitelist_wallet(c.owner, True)
    receipt = owner.batch_transfer([c.alice, c.bob], [to_base_units(10), to_base_units(20)])
    print(f"  burned {from_base_units(receipt.tax_burned)}")
    show(token)

    step(7, "Freeze bob")
    owner.freeze_wallet(c.bob, True)
    attempt("bob sends 1", lambda: token.connect(c.bob).transfer(c.alice, to_base_units(1)))
    attempt("alice sends bob 1", lambda: token.connect(c.alice).transfer(c.bob, to_base_units(1)))
    owner.freeze_wallet(c.bob, False)

    step(8, "Pause")
    owner.toggle_pause()
    attempt("alice sends 1", lambda: token.connect(c.alice).transfer(c.bob, to_base_units(1)))
    attempt("owner mints 1 while paused", lambda: owner.mint(c.alice, to_base_units(1)))
    owner.toggle_pause()

    step(9, "Deflate below the tax-free floor")
    owner.burn(c.owner, token.balance_of(c.owner))
    show(token)
    receipt = token.connect(c.bob).transfer(c.alice, to_base_units(100))
    print(f"  burned {from_base_units(receipt.tax_burned)} of 100")

    step(10, "Audit")
    result = token.verify_supply()
    print(f"  valid={result['valid']}  events={len(token.events)}  receipts={len(token.receipts)}")
    print(repr(token.receipts[-1]))


if __name__ == "__main__":
    main()
