"""Instruction processors that decode their data and hand off to the shared processors."""

from __future__ import annotations

from typing import Sequence

from . import shared
from .errors import ErrorKind, ProgramError
from .pubkey import PUBKEY_BYTES
from .runtime import AccountInfo, Runtime

_U64_BYTES = 8
_CHECKED_LEN = _U64_BYTES + 1


def _read_amount(instruction_data: bytes) -> int:
    """Decode a data block that is exactly one little-endian u64."""
    data = bytes(instruction_data)
    if len(data) != _U64_BYTES:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    return int.from_bytes(data, "little")


def _read_checked(instruction_data: bytes) -> tuple[int, int]:
    """Decode a data block of a u64 amount followed by a u8 decimals."""
    data = bytes(instruction_data)
    if len(data) != _CHECKED_LEN:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    return int.from_bytes(data[:_U64_BYTES], "little"), data[_U64_BYTES]


def _read_owner(instruction_data: bytes) -> bytes:
    data = bytes(instruction_data)
    if len(data) != PUBKEY_BYTES:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    return data


def _read_m(instruction_data: bytes) -> int:
    data = bytes(instruction_data)
    if not data:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    return data[0]


def process_approve(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Approve a delegate for the amount in the data."""
    shared.approve(accounts, _read_amount(instruction_data), None)


def process_approve_checked(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Approve a delegate, checking the mint's decimals."""
    data = bytes(instruction_data)
    if len(data) < _U64_BYTES:
        raise ProgramError(ErrorKind.INVALID_INSTRUCTION_DATA)
    amount = int.from_bytes(data[:_U64_BYTES], "little")
    decimals = data[_U64_BYTES:_U64_BYTES + 1]
    if not decimals:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA)
    shared.approve(accounts, amount, decimals[0])


def process_burn(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Burn the amount in the data."""
    shared.burn(accounts, _read_amount(instruction_data), None)


def process_burn_checked(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Burn tokens, checking the mint's decimals."""
    amount, decimals = _read_checked(instruction_data)
    shared.burn(accounts, amount, decimals)


def process_freeze_account(accounts: Sequence[AccountInfo]) -> None:
    """Freeze a token account."""
    shared.toggle_account_state(accounts, True)


def process_thaw_account(accounts: Sequence[AccountInfo]) -> None:
    """Thaw a frozen token account."""
    shared.toggle_account_state(accounts, False)


def process_initialize_account(accounts: Sequence[AccountInfo], runtime: Runtime) -> None:
    """Initialize a token account; owner and rent sysvar come from the accounts."""
    shared.initialize_account(accounts, None, True, runtime)


def process_initialize_account2(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Initialize a token account with the owner in the data and the rent sysvar account."""
    owner = _read_owner(instruction_data)
    shared.initialize_account(accounts, owner, True, runtime)


def process_initialize_account3(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Initialize a token account with the owner in the data and rent from the runtime."""
    owner = _read_owner(instruction_data)
    shared.initialize_account(accounts, owner, False, runtime)


def process_initialize_multisig(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Initialize a multisig account, with the rent sysvar account second."""
    shared.initialize_multisig(accounts, _read_m(instruction_data), True, runtime)


def process_initialize_multisig2(
    accounts: Sequence[AccountInfo], instruction_data: bytes, runtime: Runtime
) -> None:
    """Initialize a multisig account, taking rent from the runtime."""
    shared.initialize_multisig(accounts, _read_m(instruction_data), False, runtime)


def process_mint_to(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Mint the amount in the data."""
    shared.mint_to(accounts, _read_amount(instruction_data), None)


def process_mint_to_checked(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Mint tokens, checking the mint's decimals."""
    amount, decimals = _read_checked(instruction_data)
    shared.mint_to(accounts, amount, decimals)


def process_transfer(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Transfer the amount in the data."""
    shared.transfer(accounts, _read_amount(instruction_data), None)


def process_transfer_checked(accounts: Sequence[AccountInfo], instruction_data: bytes) -> None:
    """Transfer tokens, checking the mint and its decimals."""
    amount, decimals = _read_checked(instruction_data)
    shared.transfer(accounts, amount, decimals)