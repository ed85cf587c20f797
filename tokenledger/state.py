"""
state.py - Mutable state owned by a TokenLedger.

LedgerState is a plain container: it knows how to credit and debit balances
and copy itself, but enforces no business rules. Rule checks live in
TokenLedger, which is the only code that mutates a LedgerState.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Set, Tuple

from .core import InsufficientBalance


# Mapping from account id to base-unit balance. Zero balances are not stored.
BalanceMap = Dict[str, int]

# Mapping from (holder, spender) to remaining allowance.
AllowanceMap = Dict[Tuple[str, str], int]


@dataclass
class LedgerState:
    """
    Balances, supply and governance flags of one ledger.

    Attributes:
        balances: Non-zero balances by account
        total_supply: Units currently in existence
        frozen: Accounts barred from sending
        whitelisted: Accounts exempt from the burn tax
        paused: Global transfer halt
        allowances: Delegated spending limits
    """
    balances: BalanceMap = field(default_factory=dict)
    total_supply: int = 0
    frozen: Set[str] = field(default_factory=set)
    whitelisted: Set[str] = field(default_factory=set)
    paused: bool = False
    allowances: AllowanceMap = field(default_factory=dict)

    def balance(self, account: str) -> int:
        return self.balances.get(account, 0)

    def credit(self, account: str, amount: int) -> None:
        new_balance = self.balance(account) + amount
        self._set_balance(account, new_balance)

    def debit(self, account: str, amount: int) -> None:
        """
        Subtract from an account.

        Callers check sufficiency first; this is the last line against
        a negative balance reaching observable state.
        """
        new_balance = self.balance(account) - amount
        if new_balance < 0:
            raise InsufficientBalance(f"debit would leave {account} at {new_balance}")
        self._set_balance(account, new_balance)

    def _set_balance(self, account: str, amount: int) -> None:
        if amount:
            self.balances[account] = amount
        else:
            # Keep the map compact
            self.balances.pop(account, None)

    def allowance(self, holder: str, spender: str) -> int:
        return self.allowances.get((holder, spender), 0)

    def set_allowance(self, holder: str, spender: str, amount: int) -> None:
        if amount:
            self.allowances[(holder, spender)] = amount
        else:
            self.allowances.pop((holder, spender), None)

    def sum_of_balances(self) -> int:
        # Sorted for deterministic accumulation order
        return sum(self.balances[a] for a in sorted(self.balances))

    def copy(self) -> LedgerState:
        """Fully independent copy, used to stage multi-step operations."""
        return LedgerState(
            balances=dict(self.balances),
            total_supply=self.total_supply,
            frozen=set(self.frozen),
            whitelisted=set(self.whitelisted),
            paused=self.paused,
            allowances=dict(self.allowances),
        )
