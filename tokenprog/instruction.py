"""Instruction discriminators and authority types."""

from __future__ import annotations

from enum import IntEnum

from .errors import ProgramError, TokenError


class InstructionKind(IntEnum):
    """Instructions supported by the token program, keyed by discriminator byte."""

    INITIALIZE_MINT = 0
    INITIALIZE_ACCOUNT = 1
    INITIALIZE_MULTISIG = 2
    TRANSFER = 3
    APPROVE = 4
    REVOKE = 5
    SET_AUTHORITY = 6
    MINT_TO = 7
    BURN = 8
    CLOSE_ACCOUNT = 9
    FREEZE_ACCOUNT = 10
    THAW_ACCOUNT = 11
    TRANSFER_CHECKED = 12
    APPROVE_CHECKED = 13
    MINT_TO_CHECKED = 14
    BURN_CHECKED = 15
    INITIALIZE_ACCOUNT2 = 16
    SYNC_NATIVE = 17
    INITIALIZE_ACCOUNT3 = 18
    INITIALIZE_MULTISIG2 = 19
    INITIALIZE_MINT2 = 20
    GET_ACCOUNT_DATA_SIZE = 21
    INITIALIZE_IMMUTABLE_OWNER = 22
    AMOUNT_TO_UI_AMOUNT = 23
    UI_AMOUNT_TO_AMOUNT = 24


class AuthorityType(IntEnum):
    """The authority a SetAuthority instruction updates."""

    MINT_TOKENS = 0
    FREEZE_ACCOUNT = 1
    ACCOUNT_OWNER = 2
    CLOSE_ACCOUNT = 3

    @classmethod
    def from_index(cls, index: int) -> AuthorityType:
        """Return the authority type for a byte; raises ProgramError(INVALID_INSTRUCTION)."""
        try:
            return cls(index)
        except ValueError:
            raise ProgramError(TokenError.INVALID_INSTRUCTION) from None