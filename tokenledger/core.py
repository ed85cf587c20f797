"""
Core types and pure functions for the token ledger.

This module provides the foundational pieces the ledger is built from:
1. Constants: supply, precision and fee defaults
2. Exceptions: LedgerError and the rule-specific error kinds
3. Immutable records: events emitted by mutating operations, and Receipt
4. Pure helpers: argument validation, unit scaling and tax computation

Nothing in this module holds or mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple, Union


# ============================================================================
# CONSTANTS
# ============================================================================

# Display precision. Balances are stored in base units (integers); one whole
# token is 10**DECIMALS base units.
DECIMALS = 18

# Immutable cap on units in existence.
MAX_SUPPLY = 1_000_000 * 10 ** DECIMALS

# Supply minted to the initial owner at construction.
INITIAL_SUPPLY = 200_000 * 10 ** DECIMALS

# Burn tax in basis points (50 = 0.5%).
BURN_FEES_RATIO = 50
FEE_DENOMINATOR = 10_000

# Ordinary transfers are tax-free while total supply is strictly below this.
TAX_EXEMPT_SUPPLY = 10_000 * 10 ** DECIMALS

# An allowance of this size is never consumed by transfer_from.
MAX_UINT256 = 2 ** 256 - 1

# Source of minted units and destination of burned units in Transfer events.
# Never holds a balance.
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger rule violations."""
    pass


class Unauthorized(LedgerError):
    """Raised when a non-owner calls a privileged operation."""
    pass


class SupplyCapExceeded(LedgerError):
    """Raised when a mint would push total supply past the cap."""
    pass


class InsufficientBalance(LedgerError):
    """Raised when a debit exceeds the account's current balance."""
    pass


class FrozenWallet(LedgerError):
    """Raised when a frozen account tries to send a transfer."""
    pass


class ContractPaused(LedgerError):
    """Raised when a transfer is attempted while the ledger is paused."""
    pass


class LengthMismatch(LedgerError):
    """Raised when batch recipient and amount arrays differ in length."""
    pass


class InsufficientAllowance(LedgerError):
    """Raised when a delegated transfer or allowance decrease exceeds the allowance."""
    pass


class InvalidAddress(LedgerError):
    """Raised when the zero address is used as a mint or transfer destination."""
    pass


# ============================================================================
# EVENTS
# ============================================================================

@dataclass(frozen=True, slots=True)
class Transfer:
    """
    Movement of units between two accounts.

    Attributes:
        sender: Debited account (ZERO_ADDRESS for mints).
        recipient: Credited account (ZERO_ADDRESS for burns).
        amount: Net amount credited to the recipient.
        tax: Amount burned from the transfer (0 when exempt).
        sequence_number: Position of the event in the ledger's event log.
    """
    sender: str
    recipient: str
    amount: int
    tax: int
    sequence_number: int

    @property
    def gross(self) -> int:
        """Amount debited from the sender."""
        return self.amount + self.tax

    def __repr__(self) -> str:
        text = f"Transfer({self.amount}: {self.sender}→{self.recipient}"
        if self.tax:
            text += f", burned {self.tax}"
        return text + ")"


@dataclass(frozen=True, slots=True)
class Approval:
    """Allowance set by `holder` for `spender`."""
    holder: str
    spender: str
    amount: int
    sequence_number: int


@dataclass(frozen=True, slots=True)
class WalletFrozen:
    """Freeze registry membership changed."""
    account: str
    frozen: bool
    sequence_number: int


@dataclass(frozen=True, slots=True)
class WalletWhitelisted:
    """Whitelist membership changed."""
    account: str
    listed: bool
    sequence_number: int


@dataclass(frozen=True, slots=True)
class Paused:
    account: str
    sequence_number: int


@dataclass(frozen=True, slots=True)
class Unpaused:
    account: str
    sequence_number: int


@dataclass(frozen=True, slots=True)
class OwnershipTransferred:
    previous_owner: str
    new_owner: str
    sequence_number: int


Event = Union[
    Transfer, Approval, WalletFrozen, WalletWhitelisted,
    Paused, Unpaused, OwnershipTransferred,
]


# ============================================================================
# RECEIPT
# ============================================================================

@dataclass(frozen=True, slots=True)
class Receipt:
    """
    An executed, immutable record of one successful mutating call.

    Attributes:
        operation: Name of the ledger operation (e.g. "transfer", "mint")
        caller: Account that invoked the operation
        events: Events emitted by the call, in emission order
        exec_id: Unique execution identifier (ledger symbol + sequence)
        sequence_number: Monotonic operation counter within the ledger
    """
    operation: str
    caller: str
    events: Tuple[Event, ...]
    exec_id: str
    sequence_number: int

    @property
    def transfers(self) -> Tuple[Transfer, ...]:
        """Only the Transfer events of this receipt."""
        return tuple(e for e in self.events if isinstance(e, Transfer))

    @property
    def tax_burned(self) -> int:
        """Total burn tax charged by this call."""
        return sum(t.tax for t in self.transfers)

    def __repr__(self) -> str:
        w = 80
        bar = "─" * w

        def pad(text: str) -> str:
            if len(text) > w:
                return text[:w-3] + "..."
            return text + " " * (w - len(text))

        lines = [
            "",
            f"┌{bar}┐",
            f"│{pad(' Receipt: ' + self.exec_id)}│",
            f"├{bar}┤",
            f"│{pad('   operation : ' + self.operation)}│",
            f"│{pad('   caller    : ' + self.caller)}│",
            f"│{pad('   sequence  : ' + str(self.sequence_number))}│",
            f"├{bar}┤",
            f"│{pad(' Events (' + str(len(self.events)) + '):')}│",
        ]
        for i, event in enumerate(self.events):
            lines.append(f"│{pad(f'   [{i}] {event!r}')}│")
        lines.append(f"└{bar}┘")
        return "\n".join(lines)


# ============================================================================
# PURE HELPERS
# ============================================================================

def validate_account(account: str, label: str = "account") -> str:
    """Reject empty or non-string account identifiers."""
    if not isinstance(account, str) or not account.strip():
        raise ValueError(f"{label} must be a non-empty string, got {account!r}")
    return account


def validate_amount(amount: int, label: str = "amount") -> int:
    """
    Reject anything that is not a non-negative integer.

    bool is rejected even though it subclasses int.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"{label} must be an int, got {type(amount).__name__}")
    if amount < 0:
        raise ValueError(f"{label} must be non-negative, got {amount}")
    return amount


def to_base_units(value: Union[int, str, Decimal], decimals: int = DECIMALS) -> int:
    """
    Scale a whole-token amount to base units.

    Accepts ints, Decimals and numeric strings ("1000", "0.5"). Fractions
    finer than the precision are rejected rather than rounded.

    Example:
        to_base_units("1000") == 1000 * 10**18
    """
    if isinstance(value, bool):
        raise ValueError("value must be numeric, got bool")
    quantity = Decimal(str(value)) if not isinstance(value, Decimal) else value
    if not quantity.is_finite():
        raise ValueError(f"value must be finite, got {value}")
    scaled = quantity.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"{value} has more than {decimals} decimal places")
    return int(scaled)


def from_base_units(amount: int, decimals: int = DECIMALS) -> Decimal:
    """Inverse of to_base_units, for display."""
    return Decimal(amount).scaleb(-decimals)


def compute_tax(amount: int, burn_fees_ratio: int) -> int:
    """
    Burn tax on a non-exempt transfer: floor(amount * ratio / 10000).

    Integer division truncates, so small amounts can carry no tax at all.
    """
    return amount * burn_fees_ratio // FEE_DENOMINATOR
