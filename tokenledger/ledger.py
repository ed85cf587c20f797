"""
ledger.py - Governed Token Ledger

The TokenLedger class is the central state manager for the token.
It is the only module that mutates state, ensuring controlled and auditable changes.

Key responsibilities:
    - Guards privileged operations behind the single owner
    - Enforces the supply cap on issuance
    - Gates ordinary transfers on the pause flag and the freeze registry
    - Applies the burn tax to non-exempt transfers
    - Executes every call atomically (all changes commit or none do)
    - Always records a Receipt for every applied call
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .core import (
    # Types
    Event, Receipt, Transfer, Approval, WalletFrozen, WalletWhitelisted,
    Paused, Unpaused, OwnershipTransferred,
    # Constants
    DECIMALS, MAX_SUPPLY, INITIAL_SUPPLY, BURN_FEES_RATIO, FEE_DENOMINATOR,
    TAX_EXEMPT_SUPPLY, ZERO_ADDRESS, MAX_UINT256,
    # Exceptions
    LedgerError, Unauthorized, SupplyCapExceeded, InsufficientBalance,
    FrozenWallet, ContractPaused, LengthMismatch, InsufficientAllowance,
    InvalidAddress,
    # Helper functions
    validate_account, validate_amount, compute_tax,
)
from .session import AccountSession
from .state import LedgerState


class TokenLedger:
    """
    Fungible token ledger with owner governance and a burn tax.

    Every mutating method takes the acting account as its first argument
    and either returns a Receipt or raises a LedgerError subclass having
    changed nothing.

    Thread Safety:
        Not thread-safe. Calls must be serialized by the caller.

    Example:
        token = TokenLedger("Governed Token", "GOV", "owner")
        token.mint("owner", "bob", to_base_units("1000"))
        token.transfer("bob", "alice", to_base_units("10"))
        token.connect("alice").transfer("carol", to_base_units("5"))
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        initial_owner: str,
        *,
        decimals: int = DECIMALS,
        max_supply: int = MAX_SUPPLY,
        initial_supply: int = INITIAL_SUPPLY,
        burn_fees_ratio: int = BURN_FEES_RATIO,
        tax_exempt_supply: int = TAX_EXEMPT_SUPPLY,
        verbose: bool = False,
    ):
        """
        Create a ledger and pre-mint the initial supply to the owner.

        Args:
            name: Display name
            symbol: Display symbol, also used in execution ids
            initial_owner: Account that receives ownership and the initial supply
            decimals: Display precision (default: 18)
            max_supply: Immutable supply cap in base units
            initial_supply: Amount minted to the owner at construction
            burn_fees_ratio: Burn tax in basis points (default: 50)
            tax_exempt_supply: Transfers are untaxed while supply is below this
            verbose: Print each receipt and rejection (default: False)

        Raises:
            ValueError: If any parameter is malformed or inconsistent
        """
        if not isinstance(name, str):
            raise ValueError(f"name must be a string, got {type(name).__name__}")
        if not isinstance(symbol, str):
            raise ValueError(f"symbol must be a string, got {type(symbol).__name__}")
        validate_account(initial_owner, "initial_owner")
        if initial_owner == ZERO_ADDRESS:
            raise ValueError("initial_owner cannot be the zero address")
        validate_amount(decimals, "decimals")
        validate_amount(max_supply, "max_supply")
        validate_amount(initial_supply, "initial_supply")
        validate_amount(burn_fees_ratio, "burn_fees_ratio")
        validate_amount(tax_exempt_supply, "tax_exempt_supply")
        if initial_supply > max_supply:
            raise ValueError(
                f"initial_supply {initial_supply} exceeds max_supply {max_supply}"
            )
        if burn_fees_ratio > FEE_DENOMINATOR:
            raise ValueError(
                f"burn_fees_ratio {burn_fees_ratio} exceeds {FEE_DENOMINATOR} basis points"
            )

        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.verbose = verbose
        self._owner = initial_owner
        self._max_supply = max_supply
        self._burn_fees_ratio = burn_fees_ratio
        self._tax_exempt_supply = tax_exempt_supply
        self._state = LedgerState()
        self.receipts: List[Receipt] = []
        # Monotonic counters for receipt and event ordering
        self._next_sequence: int = 0
        self._next_event: int = 0

        emitted: List[Event] = []
        self._emit(emitted, OwnershipTransferred, previous_owner=ZERO_ADDRESS, new_owner=initial_owner)
        self._apply_mint(self._state, initial_owner, initial_supply, emitted)
        self._commit("constructor", initial_owner, emitted)

    # ========================================================================
    # READ-ONLY METHODS
    # ========================================================================

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def max_supply(self) -> int:
        return self._max_supply

    @property
    def MAX_SUPPLY(self) -> int:
        """Alias of max_supply under the token's published getter name."""
        return self._max_supply

    @property
    def burn_fees_ratio(self) -> int:
        """Burn tax in basis points of FEE_DENOMINATOR."""
        return self._burn_fees_ratio

    @property
    def tax_exempt_supply(self) -> int:
        return self._tax_exempt_supply

    @property
    def paused(self) -> bool:
        return self._state.paused

    @property
    def events(self) -> List[Event]:
        """Every event emitted so far, in order. A fresh list each call."""
        return [e for r in self.receipts for e in r.events]

    def balance_of(self, account: str) -> int:
        """Balance of an account in base units (0 for unknown accounts)."""
        return self._state.balance(account)

    def total_supply(self) -> int:
        """Units currently in existence."""
        return self._state.total_supply

    def is_frozen(self, account: str) -> bool:
        return account in self._state.frozen

    def is_whitelisted(self, account: str) -> bool:
        return account in self._state.whitelisted

    def allowance(self, holder: str, spender: str) -> int:
        """Amount `spender` may still move out of `holder` via transfer_from."""
        return self._state.allowance(holder, spender)

    def holders(self) -> Dict[str, int]:
        """All accounts with a non-zero balance."""
        return dict(self._state.balances)

    def allowances(self) -> Dict[Tuple[str, str], int]:
        """Every recorded (holder, spender) allowance."""
        return dict(self._state.allowances)

    def frozen_wallets(self) -> List[str]:
        return sorted(self._state.frozen)

    def whitelisted_wallets(self) -> List[str]:
        return sorted(self._state.whitelisted)

    def quote_transfer(self, sender: str, amount: int) -> Tuple[int, int]:
        """
        Preview the split of a transfer from `sender` at current state.

        Does not check the pause flag, freeze registry or balance; it only
        answers what the recipient would get if the transfer went through.

        Returns:
            (net credited to recipient, tax burned)
        """
        validate_amount(amount)
        tax = self._tax_for(self._state, sender, amount)
        return amount - tax, tax

    def verify_supply(self) -> Dict[str, Any]:
        """
        Verify that the supply invariants hold.

        Checks that the sum of all balances equals total supply, that no
        balance is negative, and that total supply is within the cap.

        Returns:
            Dict with keys:
            - 'valid': bool - True if every invariant holds
            - 'total_supply': int - recorded total supply
            - 'sum_of_balances': int - sum over all balances
            - 'max_supply': int - the cap
            - 'discrepancies': List[str] - description of each violation

        Example:
            result = token.verify_supply()
            assert result['valid'], result['discrepancies']
        """
        state = self._state
        discrepancies = []
        sum_of_balances = state.sum_of_balances()

        if sum_of_balances != state.total_supply:
            discrepancies.append(
                f"sum of balances {sum_of_balances} != total supply {state.total_supply}"
            )
        if not 0 <= state.total_supply <= self._max_supply:
            discrepancies.append(
                f"total supply {state.total_supply} outside [0, {self._max_supply}]"
            )
        for account, balance in sorted(state.balances.items()):
            if balance < 0:
                discrepancies.append(f"{account} has negative balance {balance}")
        if state.balance(ZERO_ADDRESS):
            discrepancies.append("zero address holds a balance")

        return {
            'valid': len(discrepancies) == 0,
            'total_supply': state.total_supply,
            'sum_of_balances': sum_of_balances,
            'max_supply': self._max_supply,
            'discrepancies': discrepancies,
        }

    def connect(self, account: str) -> AccountSession:
        """Return a view of this ledger that acts as `account`."""
        return AccountSession(self, account)

    # ========================================================================
    # ADMINISTRATION (owner only)
    # ========================================================================

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise Unauthorized(f"{caller} is not the owner")

    def mint(self, caller: str, to: str, amount: int) -> Receipt:
        """
        Create `amount` new units in `to`.

        Raises:
            Unauthorized: If caller is not the owner
            InvalidAddress: If `to` is the zero address
            SupplyCapExceeded: If the new total supply would exceed the cap
        """
        def body(emitted: List[Event]) -> None:
            self._require_owner(caller)
            validate_account(to, "to")
            validate_amount(amount)
            self._apply_mint(self._state, to, amount, emitted)

        return self._run("mint", caller, body)

    def burn(self, caller: str, from_: str, amount: int) -> Receipt:
        """
        Destroy `amount` units held by `from_`.

        Administrative: not gated by the pause flag or the freeze registry.

        Raises:
            Unauthorized: If caller is not the owner
            InsufficientBalance: If `from_` holds less than `amount`
        """
        def body(emitted: List[Event]) -> None:
            self._require_owner(caller)
            validate_account(from_, "from_")
            validate_amount(amount)
            state = self._state
            balance = state.balance(from_)
            if balance < amount:
                raise InsufficientBalance(
                    f"burn {amount} from {from_}: balance is {balance}"
                )
            state.debit(from_, amount)
            state.total_supply -= amount
            self._emit(emitted, Transfer, sender=from_, recipient=ZERO_ADDRESS, amount=amount, tax=0)

        return self._run("burn", caller, body)

    def freeze_wallet(self, caller: str, account: str, frozen: bool) -> Receipt:
        """Set whether `account` may send transfers."""
        def body(emitted: List[Event]) -> None:
            self._require_owner(caller)
            validate_account(account)
            if frozen:
                self._state.frozen.add(account)
            else:
                self._state.frozen.discard(account)
            self._emit(emitted, WalletFrozen, account=account, frozen=bool(frozen))

        return self._run("freeze_wallet", caller, body)

    def whitelist_wallet(self, caller: str, account: str, listed: bool) -> Receipt:
        """Set whether transfers sent by `account` are exempt from the burn tax."""
        def body(emitted: List[Event]) -> None:
            self._require_owner(caller)
            validate_account(account)
            if listed:
                self._state.whitelisted.add(account)
            else:
                self._state.whitelisted.discard(account)
            self._emit(emitted, WalletWhitelisted, account=account, listed=bool(listed))

        return self._run("whitelist_wallet", caller, body)

    def toggle_pause(self, caller: str) -> Receipt:
        """Flip the global transfer halt."""
        def body(emitted: List[Event]) -> None:
            self._require_owner(caller)
            self._state.paused = not self._state.paused
            event_type = Paused if self._state.paused else Unpaused
            self._emit(emitted, event_type, account=caller)

        return self._run("toggle_pause", caller, body)

    # ========================================================================
    # TRANSFERS
    # ========================================================================

    def transfer(self, sender: str, to: str, amount: int) -> Receipt:
        """
        Move `amount` from `sender` to `to`, burning the tax if one applies.

        Checks, in order: pause flag, sender frozen, recipient address,
        sender balance.

        Raises:
            ContractPaused: If transfers are paused
            FrozenWallet: If sender is frozen
            InvalidAddress: If `to` is the zero address
            InsufficientBalance: If sender holds less than `amount`
        """
        validate_account(sender, "sender")
        validate_account(to, "to")
        validate_amount(amount)

        def body(emitted: List[Event]) -> None:
            self._apply_transfer(self._state, sender, to, amount, emitted)

        return self._run("transfer", sender, body)

    def batch_transfer(
        self,
        sender: str,
        recipients: Sequence[str],
        amounts: Sequence[int],
    ) -> Receipt:
        """
        Apply one transfer per (recipient, amount) pair, all or nothing.

        Pairs are applied in order, each seeing the balances and supply left
        by the previous ones. The whole batch runs on a staged copy of the
        state, which replaces the live state only if every pair succeeds.
        An empty batch changes nothing and returns a receipt with no events.

        Raises:
            LengthMismatch: If recipients and amounts differ in length
            Any error `transfer` raises, for the first failing pair
        """
        validate_account(sender, "sender")
        recipients = list(recipients)
        amounts = list(amounts)
        for recipient in recipients:
            validate_account(recipient, "recipient")
        for amount in amounts:
            validate_amount(amount)

        def body(emitted: List[Event]) -> None:
            if len(recipients) != len(amounts):
                raise LengthMismatch(
                    f"{len(recipients)} recipients but {len(amounts)} amounts"
                )
            staged = self._state.copy()
            for recipient, amount in zip(recipients, amounts):
                self._apply_transfer(staged, sender, recipient, amount, emitted)
            self._state = staged

        return self._run("batch_transfer", sender, body)

    def approve(self, holder: str, spender: str, amount: int) -> Receipt:
        """Set the amount `spender` may move out of `holder`."""
        validate_account(holder, "holder")
        validate_account(spender, "spender")
        validate_amount(amount)

        def body(emitted: List[Event]) -> None:
            self._state.set_allowance(holder, spender, amount)
            self._emit(emitted, Approval, holder=holder, spender=spender, amount=amount)

        return self._run("approve", holder, body)

    def increase_allowance(self, holder: str, spender: str, added: int) -> Receipt:
        validate_account(holder, "holder")
        validate_account(spender, "spender")
        validate_amount(added, "added")

        def body(emitted: List[Event]) -> None:
            new_allowance = self._state.allowance(holder, spender) + added
            self._state.set_allowance(holder, spender, new_allowance)
            self._emit(emitted, Approval, holder=holder, spender=spender, amount=new_allowance)

        return self._run("increase_allowance", holder, body)

    def decrease_allowance(self, holder: str, spender: str, subtracted: int) -> Receipt:
        """
        Raises:
            InsufficientAllowance: If the allowance would drop below zero
        """
        validate_account(holder, "holder")
        validate_account(spender, "spender")
        validate_amount(subtracted, "subtracted")

        def body(emitted: List[Event]) -> None:
            current = self._state.allowance(holder, spender)
            if current < subtracted:
                raise InsufficientAllowance(
                    f"decrease {subtracted} below zero: {spender} allowance from {holder} is {current}"
                )
            self._state.set_allowance(holder, spender, current - subtracted)
            self._emit(emitted, Approval, holder=holder, spender=spender, amount=current - subtracted)

        return self._run("decrease_allowance", holder, body)

    def transfer_from(self, spender: str, holder: str, to: str, amount: int) -> Receipt:
        """
        Move `amount` out of `holder` on its behalf, consuming allowance.

        Runs the transfer gates against `holder`, then the allowance check.
        An allowance of MAX_UINT256 is treated as unlimited and not consumed.

        Raises:
            ContractPaused, FrozenWallet, InvalidAddress, InsufficientBalance:
                As for transfer, with `holder` as the sender
            InsufficientAllowance: If `spender` may not move `amount`
        """
        validate_account(spender, "spender")
        validate_account(holder, "holder")
        validate_account(to, "to")
        validate_amount(amount)

        def body(emitted: List[Event]) -> None:
            state = self._state
            self._check_transfer(state, holder, to, amount)
            current = state.allowance(holder, spender)
            if current < amount:
                raise InsufficientAllowance(
                    f"{spender} may move {current} from {holder}, requested {amount}"
                )
            if current != MAX_UINT256:
                state.set_allowance(holder, spender, current - amount)
                self._emit(emitted, Approval, holder=holder, spender=spender, amount=current - amount)
            self._apply_transfer(state, holder, to, amount, emitted)

        return self._run("transfer_from", spender, body)

    # ========================================================================
    # INTERNALS
    # ========================================================================

    def _check_transfer(self, state: LedgerState, sender: str, to: str, amount: int) -> None:
        """Raise the first transfer rule `sender` would break. Mutates nothing."""
        if state.paused:
            raise ContractPaused("token transfer while paused")
        if sender in state.frozen:
            raise FrozenWallet(f"{sender} is frozen")
        if to == ZERO_ADDRESS:
            raise InvalidAddress("transfer to the zero address")
        balance = state.balance(sender)
        if balance < amount:
            raise InsufficientBalance(
                f"transfer {amount} from {sender}: balance is {balance}"
            )

    def _tax_for(self, state: LedgerState, sender: str, amount: int) -> int:
        """
        Burn tax for a transfer from `sender` against `state`.

        Exempt when the sender is whitelisted or the supply has already
        fallen below the exemption threshold.
        """
        if sender in state.whitelisted:
            return 0
        if state.total_supply < self._tax_exempt_supply:
            return 0
        return compute_tax(amount, self._burn_fees_ratio)

    def _apply_transfer(
        self,
        state: LedgerState,
        sender: str,
        to: str,
        amount: int,
        emitted: List[Event],
    ) -> None:
        self._check_transfer(state, sender, to, amount)
        tax = self._tax_for(state, sender, amount)
        state.debit(sender, amount)
        state.credit(to, amount - tax)
        state.total_supply -= tax
        self._emit(emitted, Transfer, sender=sender, recipient=to, amount=amount - tax, tax=tax)

    def _apply_mint(self, state: LedgerState, to: str, amount: int, emitted: List[Event]) -> None:
        if to == ZERO_ADDRESS:
            raise InvalidAddress("mint to the zero address")
        new_supply = state.total_supply + amount
        if new_supply > self._max_supply:
            raise SupplyCapExceeded(
                f"minting {amount} brings supply to {new_supply}, cap is {self._max_supply}"
            )
        state.credit(to, amount)
        state.total_supply = new_supply
        self._emit(emitted, Transfer, sender=ZERO_ADDRESS, recipient=to, amount=amount, tax=0)

    def _emit(self, emitted: List[Event], event_type: Callable[..., Event], **fields: Any) -> None:
        """Stage an event; it only reaches the log if the call commits."""
        sequence = self._next_event + len(emitted)
        emitted.append(event_type(sequence_number=sequence, **fields))

    def _generate_exec_id(self, sequence: int) -> str:
        """
        Generate a unique execution ID.

        Format: exec:{symbol}:{sequence:012d}
        """
        return f"exec:{self.symbol}:{sequence:012d}"

    def _run(self, operation: str, caller: str, body: Callable[[List[Event]], None]) -> Receipt:
        """
        Execute one operation body and commit its events.

        The body performs every check before its first mutation (or stages
        its mutations on a copy), so a LedgerError leaves state untouched.
        """
        emitted: List[Event] = []
        try:
            body(emitted)
        except LedgerError as e:
            if self.verbose:
                print(f"✗ REJECTED {operation} by {caller}: {type(e).__name__}: {e}")
            raise
        return self._commit(operation, caller, emitted)

    def _commit(self, operation: str, caller: str, emitted: List[Event]) -> Receipt:
        sequence = self._next_sequence
        self._next_sequence += 1
        self._next_event += len(emitted)
        receipt = Receipt(
            operation=operation,
            caller=caller,
            events=tuple(emitted),
            exec_id=self._generate_exec_id(sequence),
            sequence_number=sequence,
        )
        # Always log - the receipt log is the audit trail
        self.receipts.append(receipt)
        if self.verbose:
            self._print_receipt(receipt)
        return receipt

    def _print_receipt(self, receipt: Receipt) -> None:
        """Print the receipt box with an APPLIED result line."""
        lines = repr(receipt).split('\n')
        w = 80
        bar = "─" * w
        result = " ✓ APPLIED"
        lines[-1] = f"├{bar}┤"
        lines.append(f"│{result}{' ' * (w - len(result))}│")
        lines.append(f"└{bar}┘")
        print("\n".join(lines))

    def clone(self) -> TokenLedger:
        """
        Create a deep copy of this ledger.

        All state is fully independent: modifications to the clone will not
        affect the original ledger, and vice versa. Receipts are immutable
        and shared.
        """
        cloned = TokenLedger.__new__(TokenLedger)
        cloned.name = self.name
        cloned.symbol = self.symbol
        cloned.decimals = self.decimals
        cloned.verbose = self.verbose
        cloned._owner = self._owner
        cloned._max_supply = self._max_supply
        cloned._burn_fees_ratio = self._burn_fees_ratio
        cloned._tax_exempt_supply = self._tax_exempt_supply
        cloned._state = self._state.copy()
        cloned.receipts = list(self.receipts)
        cloned._next_sequence = self._next_sequence
        cloned._next_event = self._next_event
        return cloned

    def __repr__(self) -> str:
        return (
            f"TokenLedger({self.symbol}, supply={self._state.total_supply}, "
            f"holders={len(self._state.balances)}, paused={self._state.paused})"
        )
