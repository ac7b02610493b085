"""Checks shared by the instruction processors."""

from __future__ import annotations

from typing import Sequence

from .errors import ErrorKind, ProgramError, TokenError
from .pubkey import TOKEN_PROGRAM_ID
from .runtime import AccountInfo
from .state import Multisig, load

# Maximum number of u8 decimals plus the decimal point and a leading zero.
MAX_FORMATTED_DIGITS = 255 + 2

_U64_MAX = 2**64 - 1
_DIGITS = frozenset("0123456789")


def check_account_owner(info: AccountInfo) -> None:
    """Raise ProgramError unless the account is owned by the token program."""
    if info.owner != TOKEN_PROGRAM_ID:
        raise ProgramError(ErrorKind.INCORRECT_PROGRAM_ID)


def validate_owner(
    expected_owner: bytes, owner_info: AccountInfo, signers: Sequence[AccountInfo]
) -> int:
    """Check that the owner, or enough of its multisig signers, signed.

    Returns the number of signatures matched.
    """
    if bytes(expected_owner) != owner_info.key:
        raise ProgramError(TokenError.OWNER_MISMATCH)

    if owner_info.data_len == Multisig.LEN and owner_info.owner == TOKEN_PROGRAM_ID:
        multisig = load(Multisig, owner_info.data)
        keys = multisig.signers
        matched = [False] * len(keys)
        num_signers = 0
        for signer in signers:
            for position, key in enumerate(keys):
                if key == signer.key and not matched[position]:
                    if not signer.is_signer:
                        raise ProgramError(ErrorKind.MISSING_REQUIRED_SIGNATURE)
                    matched[position] = True
                    num_signers += 1
        if num_signers < multisig.m:
            raise ProgramError(ErrorKind.MISSING_REQUIRED_SIGNATURE)
        return num_signers

    if not owner_info.is_signer:
        raise ProgramError(ErrorKind.MISSING_REQUIRED_SIGNATURE)
    return 1


def _parse_u64(text: str) -> int:
    if text.startswith("+"):
        text = text[1:]
    if not text or not set(text) <= _DIGITS:
        raise ProgramError(ErrorKind.INVALID_ARGUMENT)
    value = int(text)
    if value > _U64_MAX:
        raise ProgramError(ErrorKind.INVALID_ARGUMENT)
    return value


def try_ui_amount_into_amount(ui_amount: str, decimals: int) -> int:
    """Convert a UI amount string into a raw token amount with ``decimals`` places."""
    parts = ui_amount.split(".")
    amount_str = parts[0]
    after_decimal = parts[1].rstrip("0") if len(parts) > 1 else ""

    if (
        (not amount_str and not after_decimal)
        or len(parts) > 2
        or len(after_decimal) > decimals
        or len(amount_str) + max(len(after_decimal), decimals) > MAX_FORMATTED_DIGITS
    ):
        raise ProgramError(ErrorKind.INVALID_ARGUMENT)

    padding = "0" * (decimals - len(after_decimal))
    return _parse_u64(amount_str + after_decimal + padding)