"""Processors for mints, authorities, closing, native sync and amount conversion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .errors import ErrorKind, ProgramError, TokenError
from .instruction import AuthorityType
from .pubkey import PUBKEY_BYTES
from .runtime import AccountInfo, Rent, Runtime
from .state import INCINERATOR_ID, Account, Mint, load, load_unchecked
from .validation import check_account_owner, try_ui_amount_into_amount, validate_owner

_log = logging.getLogger(__name__)

_U64_MAX = 2**64 - 1
_USIZE_BYTES = 8


def _split(accounts: Sequence[AccountInfo], count: int) -> tuple:
    """Return the first ``count`` accounts followed by the list of the rest."""
    accounts = list(accounts)
    if len(accounts) < count:
        raise ProgramError(ErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    return (*accounts[:count], accounts[count:])


def _first(accounts: Sequence[AccountInfo]) -> AccountInfo:
    if not accounts:
        raise ProgramError(ErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    return accounts[0]


def _optional_key(data: bytes, tag_offset: int) -> bytes | None:
    if data[tag_offset] == 0:
        return None
    start = tag_offset + 1
    return data[start:start + PUBKEY_BYTES]


def _load_mint(info: AccountInfo) -> Mint:
    try:
        return load(Mint, info.data)
    except ProgramError:
        raise ProgramError(TokenError.INVALID_MINT) from None


def _read_u64(data: bytes) -> int:
    if len(data) != 8:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    return int.from_bytes(data, "little")


@dataclass(frozen=True)
class InitializeMintArgs:
    """Decoded data of an InitializeMint instruction."""

    decimals: int
    mint_authority: bytes
    freeze_authority: bytes | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> InitializeMintArgs:
        """Decode decimals, mint authority and an optional freeze authority."""
        data = bytes(data)
        if len(data) < 34 or (data[33] != 0 and len(data) < 66):
            raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
        return cls(data[0], data[1:33], _optional_key(data, 33))


@dataclass(frozen=True)
class SetAuthorityArgs:
    """Decoded data of a SetAuthority instruction."""

    authority_type: AuthorityType
    new_authority: bytes | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> SetAuthorityArgs:
        """Decode the authority type and an optional new authority."""
        data = bytes(data)
        if len(data) < 2 or (data[1] != 0 and len(data) < 34):
            raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
        authority_type = AuthorityType.from_index(data[0])
        return cls(authority_type, _optional_key(data, 1))


def process_initialize_mint(
    accounts: Sequence[AccountInfo],
    instruction_data: bytes,
    rent_sysvar_account: bool,
    runtime: Runtime,
) -> None:
    """Initialize a mint; with ``rent_sysvar_account`` the rent sysvar is the second account."""
    args = InitializeMintArgs.from_bytes(instruction_data)

    if rent_sysvar_account:
        mint_info, rent_sysvar_info, _ = _split(accounts, 2)
    else:
        mint_info, _ = _split(accounts, 1)
        rent_sysvar_info = None

    mint = load_unchecked(Mint, mint_info.data)
    if mint.is_initialized():
        raise ProgramError(TokenError.ALREADY_IN_USE)

    if rent_sysvar_info is not None:
        rent = Rent.from_account(rent_sysvar_info)
    else:
        rent = runtime.sysvar_rent()
    if not rent.is_exempt(mint_info.lamports, Mint.LEN):
        raise ProgramError(TokenError.NOT_RENT_EXEMPT)

    mint.initialized = True
    mint.mint_authority = args.mint_authority
    mint.decimals = args.decimals
    if args.freeze_authority is not None:
        mint.freeze_authority = args.freeze_authority


def process_initialize_mint2(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Initialize a mint taking rent from the runtime."""
    process_initialize_mint(accounts, instruction_data, False, runtime)


def _set_account_authority(
    account: Account,
    args: SetAuthorityArgs,
    authority_info: AccountInfo,
    remaining: list[AccountInfo],
) -> None:
    if account.is_frozen():
        raise ProgramError(TokenError.ACCOUNT_FROZEN)

    if args.authority_type is AuthorityType.ACCOUNT_OWNER:
        validate_owner(account.owner, authority_info, remaining)
        if args.new_authority is None:
            raise ProgramError(TokenError.INVALID_INSTRUCTION)
        account.owner = args.new_authority
        account.delegate = None
        account.delegated_amount = 0
        if account.is_native:
            account.close_authority = None
    elif args.authority_type is AuthorityType.CLOSE_ACCOUNT:
        authority = account.close_authority
        if authority is None:
            authority = account.owner
        validate_owner(authority, authority_info, remaining)
        account.close_authority = args.new_authority
    else:
        raise ProgramError(TokenError.AUTHORITY_TYPE_NOT_SUPPORTED)


def _set_mint_authority(
    mint: Mint,
    args: SetAuthorityArgs,
    authority_info: AccountInfo,
    remaining: list[AccountInfo],
) -> None:
    if args.authority_type is AuthorityType.MINT_TOKENS:
        # A fixed supply cannot be undone by setting a new mint authority.
        current = mint.mint_authority
        if current is None:
            raise ProgramError(TokenError.FIXED_SUPPLY)
        validate_owner(current, authority_info, remaining)
        mint.mint_authority = args.new_authority
    elif args.authority_type is AuthorityType.FREEZE_ACCOUNT:
        # A disabled freeze authority cannot be re-enabled.
        current = mint.freeze_authority
        if current is None:
            raise ProgramError(TokenError.MINT_CANNOT_FREEZE)
        validate_owner(current, authority_info, remaining)
        mint.freeze_authority = args.new_authority
    else:
        raise ProgramError(TokenError.AUTHORITY_TYPE_NOT_SUPPORTED)


def process_set_authority(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Change an authority of a token account or a mint."""
    args = SetAuthorityArgs.from_bytes(instruction_data)
    account_info, authority_info, remaining = _split(accounts, 2)

    if account_info.data_len == Account.LEN:
        account = load(Account, account_info.data)
        _set_account_authority(account, args, authority_info, remaining)
    elif account_info.data_len == Mint.LEN:
        mint = load(Mint, account_info.data)
        _set_mint_authority(mint, args, authority_info, remaining)
    else:
        raise ProgramError(ErrorKind.INVALID_ARGUMENT)


def process_close_account(accounts: Sequence[AccountInfo]) -> None:
    """Close a token account, moving all its lamports to the destination."""
    source_info, destination_info, authority_info, remaining = _split(accounts, 3)

    if source_info is destination_info:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA)

    source = load(Account, source_info.data)
    if not source.is_native and source.amount != 0:
        raise ProgramError(TokenError.NON_NATIVE_HAS_BALANCE)

    authority = source.close_authority
    if authority is None:
        authority = source.owner

    if not source.is_owned_by_system_program_or_incinerator():
        validate_owner(authority, authority_info, remaining)
    elif destination_info.key != INCINERATOR_ID:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA)

    total = destination_info.lamports + source_info.lamports
    if total > _U64_MAX:
        raise ProgramError(TokenError.OVERFLOW)
    destination_info.lamports = total
    source_info.close()


def process_revoke(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Remove the delegate of a token account."""
    source_info, owner_info, remaining = _split(accounts, 2)

    source = load(Account, source_info.data)
    if source.is_frozen():
        raise ProgramError(TokenError.ACCOUNT_FROZEN)

    validate_owner(source.owner, owner_info, remaining)

    source.delegate = None
    source.delegated_amount = 0


def process_sync_native(accounts: Sequence[AccountInfo]) -> None:
    """Set a native account's token amount from its lamports above the rent reserve."""
    native_info = _first(accounts)
    check_account_owner(native_info)

    account = load(Account, native_info.data)
    reserve = account.native_amount
    if reserve is None:
        raise ProgramError(TokenError.NON_NATIVE_NOT_SUPPORTED)

    new_amount = native_info.lamports - reserve
    if new_amount < 0:
        raise ProgramError(TokenError.OVERFLOW)
    if new_amount < account.amount:
        raise ProgramError(TokenError.INVALID_STATE)
    account.amount = new_amount


def process_initialize_immutable_owner(accounts: Sequence[AccountInfo]) -> None:
    """Accept an uninitialized token account; immutable owners are not enforced here."""
    token_account_info = _first(accounts)
    account = load_unchecked(Account, token_account_info.data)
    if account.is_initialized():
        raise ProgramError(TokenError.ALREADY_IN_USE)
    _log.info("Please upgrade to SPL Token 2022 for immutable owner support")


def process_get_account_data_size(accounts: Sequence[AccountInfo], runtime: Runtime) -> None:
    """Return the size of a token account for the given mint."""
    mint_info = _first(accounts)
    check_account_owner(mint_info)
    _load_mint(mint_info)
    runtime.set_return_data(Account.LEN.to_bytes(_USIZE_BYTES, "little"))


def format_ui_amount(amount: int, decimals: int) -> str:
    """Format a raw amount with ``decimals`` places, dropping trailing zeros."""
    text = str(amount)
    if decimals == 0:
        return text
    text = text.rjust(decimals + 1, "0")
    text = f"{text[:-decimals]}.{text[-decimals:]}"
    return text.rstrip("0").rstrip(".")


def process_amount_to_ui_amount(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Return the UI string of a raw amount, using the mint's decimals."""
    amount = _read_u64(bytes(instruction_data))
    mint_info = _first(accounts)
    check_account_owner(mint_info)
    mint = _load_mint(mint_info)
    runtime.set_return_data(format_ui_amount(amount, mint.decimals).encode())


def process_ui_amount_to_amount(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Return the raw little-endian amount of a UI string, using the mint's decimals."""
    try:
        ui_amount = bytes(instruction_data).decode("utf-8")
    except UnicodeDecodeError:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA) from None

    mint_info = _first(accounts)
    check_account_owner(mint_info)
    mint = _load_mint(mint_info)

    amount = try_ui_amount_into_amount(ui_amount, mint.decimals)
    runtime.set_return_data(amount.to_bytes(8, "little"))