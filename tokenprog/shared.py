"""Processors shared by several instructions.

Every processor runs its checks first and writes only once all of them have
passed, so an instruction that fails leaves its accounts untouched.
"""

from __future__ import annotations

from typing import Sequence

from .errors import ErrorKind, ProgramError, TokenError
from .pubkey import is_native_mint
from .runtime import AccountInfo, Rent, Runtime
from .state import (
    Account,
    AccountState,
    Mint,
    Multisig,
    is_valid_signer_index,
    load,
    load_unchecked,
)
from .validation import check_account_owner, validate_owner

_U64_MAX = 2**64 - 1


def _split(accounts: Sequence[AccountInfo], count: int) -> tuple:
    """Return the first ``count`` accounts followed by the list of the rest."""
    accounts = list(accounts)
    if len(accounts) < count:
        raise ProgramError(ErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    return (*accounts[:count], accounts[count:])


def _checked_add(left: int, right: int) -> int:
    total = left + right
    if total > _U64_MAX:
        raise ProgramError(TokenError.OVERFLOW)
    return total


def _checked_sub(left: int, right: int, error: TokenError) -> int:
    if right > left:
        raise ProgramError(error)
    return left - right


def approve(
    accounts: Sequence[AccountInfo], amount: int, expected_decimals: int | None
) -> None:
    """Give a delegate authority over ``amount`` tokens of the source account.

    With ``expected_decimals`` the mint account follows the source account and
    its decimals are checked.
    """
    if expected_decimals is not None:
        source_info, mint_info, delegate_info, owner_info, remaining = _split(accounts, 4)
    else:
        source_info, delegate_info, owner_info, remaining = _split(accounts, 3)
        mint_info = None

    source = load(Account, source_info.data)
    if source.is_frozen():
        raise ProgramError(TokenError.ACCOUNT_FROZEN)

    if mint_info is not None:
        if mint_info.key != source.mint:
            raise ProgramError(TokenError.MINT_MISMATCH)
        mint = load(Mint, mint_info.data)
        if expected_decimals != mint.decimals:
            raise ProgramError(TokenError.MINT_DECIMALS_MISMATCH)

    validate_owner(source.owner, owner_info, remaining)

    source.delegate = delegate_info.key
    source.delegated_amount = amount


def burn(
    accounts: Sequence[AccountInfo], amount: int, expected_decimals: int | None
) -> None:
    """Remove ``amount`` tokens from an account and from the mint supply."""
    source_info, mint_info, authority_info, remaining = _split(accounts, 3)

    source = load(Account, source_info.data)
    if source.is_frozen():
        raise ProgramError(TokenError.ACCOUNT_FROZEN)
    if source.is_native:
        raise ProgramError(TokenError.NATIVE_NOT_SUPPORTED)

    updated_source_amount = _checked_sub(
        source.amount, amount, TokenError.INSUFFICIENT_FUNDS
    )

    mint = load(Mint, mint_info.data)
    if mint_info.key != source.mint:
        raise ProgramError(TokenError.MINT_MISMATCH)
    if expected_decimals is not None and expected_decimals != mint.decimals:
        raise ProgramError(TokenError.MINT_DECIMALS_MISMATCH)

    new_delegated_amount = None
    if not source.is_owned_by_system_program_or_incinerator():
        delegate = source.delegate
        if delegate is not None and authority_info.key == delegate:
            validate_owner(delegate, authority_info, remaining)
            new_delegated_amount = _checked_sub(
                source.delegated_amount, amount, TokenError.INSUFFICIENT_FUNDS
            )
        else:
            validate_owner(source.owner, authority_info, remaining)

    new_supply = None
    if amount == 0:
        check_account_owner(source_info)
        check_account_owner(mint_info)
    else:
        new_supply = _checked_sub(mint.supply, amount, TokenError.OVERFLOW)

    if new_delegated_amount is not None:
        source.delegated_amount = new_delegated_amount
        if new_delegated_amount == 0:
            source.delegate = None
    if new_supply is not None:
        source.amount = updated_source_amount
        mint.supply = new_supply


def initialize_account(
    accounts: Sequence[AccountInfo],
    owner: bytes | None,
    rent_sysvar_account: bool,
    runtime: Runtime,
) -> None:
    """Initialize a token account for a mint.

    Without ``owner`` the owner is taken from the third account. With
    ``rent_sysvar_account`` the rent sysvar account follows the others;
    otherwise rent comes from ``runtime``.
    """
    if owner is not None:
        new_account_info, mint_info, remaining = _split(accounts, 2)
        owner_key = bytes(owner)
    else:
        new_account_info, mint_info, owner_info, remaining = _split(accounts, 3)
        owner_key = owner_info.key

    if rent_sysvar_account:
        if not remaining:
            raise ProgramError(ErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
        rent = Rent.from_account(remaining[0])
    else:
        rent = runtime.sysvar_rent()
    minimum_balance = rent.minimum_balance(new_account_info.data_len)

    native = is_native_mint(mint_info.key)

    account = load_unchecked(Account, new_account_info.data)
    if account.is_initialized():
        raise ProgramError(TokenError.ALREADY_IN_USE)
    if new_account_info.lamports < minimum_balance:
        raise ProgramError(TokenError.NOT_RENT_EXEMPT)

    if not native:
        check_account_owner(mint_info)
        try:
            load(Mint, mint_info.data)
        except ProgramError:
            raise ProgramError(TokenError.INVALID_MINT) from None

    native_balance = None
    if native:
        native_balance = _checked_sub(
            new_account_info.lamports, minimum_balance, TokenError.OVERFLOW
        )

    account.state = AccountState.INITIALIZED
    account.mint = mint_info.key
    account.owner = owner_key
    if native_balance is not None:
        account.is_native = True
        account.native_amount = minimum_balance
        account.amount = native_balance


def initialize_multisig(
    accounts: Sequence[AccountInfo],
    m: int,
    rent_sysvar_account: bool,
    runtime: Runtime,
) -> None:
    """Initialize a multisig account requiring ``m`` of the signer accounts given."""
    if rent_sysvar_account:
        multisig_info, rent_sysvar_info, remaining = _split(accounts, 2)
        rent = Rent.from_account(rent_sysvar_info)
    else:
        multisig_info, remaining = _split(accounts, 1)
        rent = runtime.sysvar_rent()

    is_exempt = rent.is_exempt(multisig_info.lamports, multisig_info.data_len)

    multisig = load_unchecked(Multisig, multisig_info.data)
    if multisig.is_initialized():
        raise ProgramError(TokenError.ALREADY_IN_USE)
    if not is_exempt:
        raise ProgramError(TokenError.NOT_RENT_EXEMPT)

    n = len(remaining)
    if not is_valid_signer_index(n):
        raise ProgramError(TokenError.INVALID_NUMBER_OF_PROVIDED_SIGNERS)
    if not is_valid_signer_index(m):
        raise ProgramError(TokenError.INVALID_NUMBER_OF_REQUIRED_SIGNERS)

    multisig.m = m
    multisig.n = n
    multisig.signers = [info.key for info in remaining]
    multisig.initialized = True


def mint_to(
    accounts: Sequence[AccountInfo], amount: int, expected_decimals: int | None
) -> None:
    """Mint ``amount`` new tokens into the destination account."""
    mint_info, destination_info, owner_info, remaining = _split(accounts, 3)

    destination = load(Account, destination_info.data)
    if destination.is_frozen():
        raise ProgramError(TokenError.ACCOUNT_FROZEN)
    if destination.is_native:
        raise ProgramError(TokenError.NATIVE_NOT_SUPPORTED)
    if mint_info.key != destination.mint:
        raise ProgramError(TokenError.MINT_MISMATCH)

    mint = load(Mint, mint_info.data)
    if expected_decimals is not None and expected_decimals != mint.decimals:
        raise ProgramError(TokenError.MINT_DECIMALS_MISMATCH)

    mint_authority = mint.mint_authority
    if mint_authority is None:
        raise ProgramError(TokenError.FIXED_SUPPLY)
    validate_owner(mint_authority, owner_info, remaining)

    if amount == 0:
        check_account_owner(mint_info)
        check_account_owner(destination_info)
        return

    destination_amount = _checked_add(destination.amount, amount)
    supply = _checked_add(mint.supply, amount)
    destination.amount = destination_amount
    mint.supply = supply


def toggle_account_state(accounts: Sequence[AccountInfo], freeze: bool) -> None:
    """Freeze (``freeze=True``) or thaw a token account with the mint's freeze authority."""
    source_info, mint_info, authority_info, remaining = _split(accounts, 3)

    source = load(Account, source_info.data)
    if freeze == source.is_frozen():
        raise ProgramError(TokenError.INVALID_STATE)
    if source.is_native:
        raise ProgramError(TokenError.NATIVE_NOT_SUPPORTED)
    if mint_info.key != source.mint:
        raise ProgramError(TokenError.MINT_MISMATCH)

    mint = load(Mint, mint_info.data)
    freeze_authority = mint.freeze_authority
    if freeze_authority is None:
        raise ProgramError(TokenError.MINT_CANNOT_FREEZE)
    validate_owner(freeze_authority, authority_info, remaining)

    source.state = AccountState.FROZEN if freeze else AccountState.INITIALIZED


def transfer(
    accounts: Sequence[AccountInfo], amount: int, expected_decimals: int | None
) -> None:
    """Move ``amount`` tokens between accounts, by the owner or a delegate.

    With ``expected_decimals`` the mint account follows the source account and
    its decimals are checked.
    """
    if expected_decimals is not None:
        source_info, mint_info, destination_info, authority_info, remaining = _split(
            accounts, 4
        )
    else:
        source_info, destination_info, authority_info, remaining = _split(accounts, 3)
        mint_info = None

    source = load(Account, source_info.data)
    self_transfer = source_info is destination_info

    if self_transfer:
        if source.is_frozen():
            raise ProgramError(TokenError.ACCOUNT_FROZEN)
        remaining_amount = _checked_sub(source.amount, amount, TokenError.INSUFFICIENT_FUNDS)
    else:
        destination = load(Account, destination_info.data)
        if source.is_frozen() or destination.is_frozen():
            raise ProgramError(TokenError.ACCOUNT_FROZEN)
        remaining_amount = _checked_sub(source.amount, amount, TokenError.INSUFFICIENT_FUNDS)
        if source.mint != destination.mint:
            raise ProgramError(TokenError.MINT_MISMATCH)

    if mint_info is not None:
        if mint_info.key != source.mint:
            raise ProgramError(TokenError.MINT_MISMATCH)
        mint = load(Mint, mint_info.data)
        if expected_decimals != mint.decimals:
            raise ProgramError(TokenError.MINT_DECIMALS_MISMATCH)

    new_delegated_amount = None
    if source.delegate == authority_info.key:
        validate_owner(authority_info.key, authority_info, remaining)
        delegated_amount = _checked_sub(
            source.delegated_amount, amount, TokenError.INSUFFICIENT_FUNDS
        )
        if not self_transfer:
            new_delegated_amount = delegated_amount
    else:
        validate_owner(source.owner, authority_info, remaining)

    move_tokens = not (self_transfer or amount == 0)
    if not move_tokens:
        check_account_owner(source_info)
        check_account_owner(destination_info)
    else:
        destination_amount = _checked_add(destination.amount, amount)
        if source.is_native:
            source_lamports = _checked_sub(
                source_info.lamports, amount, TokenError.OVERFLOW
            )
            destination_lamports = _checked_add(destination_info.lamports, amount)

    if new_delegated_amount is not None:
        source.delegated_amount = new_delegated_amount
        if new_delegated_amount == 0:
            source.delegate = None

    if move_tokens:
        source.amount = remaining_amount
        destination.amount = destination_amount
        if source.is_native:
            source_info.lamports = source_lamports
            destination_info.lamports = destination_lamports