"""
tokenledger - Governed Token Ledger

A fungible-token state machine with a single owner, a supply cap, a freeze
registry, a global pause switch and a burn tax on ordinary transfers.

Usage:
    from tokenledger import TokenLedger, to_base_units

    token = TokenLedger("Governed Token", "GOV", "owner")
    token.mint("owner", "bob", to_base_units("1000"))

    # Ordinary transfer: 0.5% of the amount is burned
    receipt = token.transfer("bob", "alice", to_base_units("100"))
    receipt.tax_burned  # 0.5 tokens in base units

    # Caller-bound view
    token.connect("alice").transfer("carol", to_base_units("10"))
"""

# Core types
from .core import (
    Receipt,
    Event,
    Transfer,
    Approval,
    WalletFrozen,
    WalletWhitelisted,
    Paused,
    Unpaused,
    OwnershipTransferred,
    LedgerError,
    Unauthorized,
    SupplyCapExceeded,
    InsufficientBalance,
    FrozenWallet,
    ContractPaused,
    LengthMismatch,
    InsufficientAllowance,
    InvalidAddress,
    to_base_units,
    from_base_units,
    compute_tax,
    DECIMALS,
    MAX_SUPPLY,
    INITIAL_SUPPLY,
    BURN_FEES_RATIO,
    FEE_DENOMINATOR,
    TAX_EXEMPT_SUPPLY,
    ZERO_ADDRESS,
    MAX_UINT256,
)

# State
from .state import LedgerState

# Ledger
from .ledger import TokenLedger
from .session import AccountSession

__all__ = [
    # Core
    'Receipt', 'Event', 'Transfer', 'Approval', 'WalletFrozen',
    'WalletWhitelisted', 'Paused', 'Unpaused', 'OwnershipTransferred',
    'LedgerError', 'Unauthorized', 'SupplyCapExceeded', 'InsufficientBalance',
    'FrozenWallet', 'ContractPaused', 'LengthMismatch',
    'InsufficientAllowance', 'InvalidAddress',
    'to_base_units', 'from_base_units', 'compute_tax',
    'DECIMALS', 'MAX_SUPPLY', 'INITIAL_SUPPLY', 'BURN_FEES_RATIO',
    'FEE_DENOMINATOR', 'TAX_EXEMPT_SUPPLY', 'ZERO_ADDRESS', 'MAX_UINT256',
    # State
    'LedgerState',
    # Ledger
    'TokenLedger', 'AccountSession',
]

__version__ = '1.0.0'
