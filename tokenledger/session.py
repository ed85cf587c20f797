"""
session.py - Caller-bound access to a TokenLedger.

An AccountSession fixes the acting account so calls read like the token's
public interface: `token.connect("bob").transfer("alice", amount)`.
It holds no state of its own; every call is forwarded to the ledger.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

from .core import Receipt, validate_account

if TYPE_CHECKING:
    from .ledger import TokenLedger


class AccountSession:
    """
    A TokenLedger seen from one account.

    Example:
        owner = token.connect("owner")
        owner.mint("bob", 1000)
        token.connect("bob").transfer("alice", 10)
    """

    def __init__(self, ledger: TokenLedger, account: str):
        self.ledger = ledger
        self.account = validate_account(account)

    @property
    def balance(self) -> int:
        return self.ledger.balance_of(self.account)

    # Transfers

    def transfer(self, to: str, amount: int) -> Receipt:
        return self.ledger.transfer(self.account, to, amount)

    def batch_transfer(self, recipients: Sequence[str], amounts: Sequence[int]) -> Receipt:
        return self.ledger.batch_transfer(self.account, recipients, amounts)

    def approve(self, spender: str, amount: int) -> Receipt:
        return self.ledger.approve(self.account, spender, amount)

    def increase_allowance(self, spender: str, added: int) -> Receipt:
        return self.ledger.increase_allowance(self.account, spender, added)

    def decrease_allowance(self, spender: str, subtracted: int) -> Receipt:
        return self.ledger.decrease_allowance(self.account, spender, subtracted)

    def transfer_from(self, holder: str, to: str, amount: int) -> Receipt:
        return self.ledger.transfer_from(self.account, holder, to, amount)

    # Administration

    def mint(self, to: str, amount: int) -> Receipt:
        return self.ledger.mint(self.account, to, amount)

    def burn(self, from_: str, amount: int) -> Receipt:
        return self.ledger.burn(self.account, from_, amount)

    def freeze_wallet(self, account: str, frozen: bool) -> Receipt:
        return self.ledger.freeze_wallet(self.account, account, frozen)

    def whitelist_wallet(self, account: str, listed: bool) -> Receipt:
        return self.ledger.whitelist_wallet(self.account, account, listed)

    def toggle_pause(self) -> Receipt:
        return self.ledger.toggle_pause(self.account)

    def __repr__(self) -> str:
        return f"AccountSession({self.account} @ {self.ledger.symbol})"
