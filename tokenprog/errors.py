"""Error types raised by the token program."""

from __future__ import annotations

from enum import Enum, IntEnum


class TokenError(IntEnum):
    """Errors specific to the token program, numbered by their custom code."""

    NOT_RENT_EXEMPT = 0
    INSUFFICIENT_FUNDS = 1
    INVALID_MINT = 2
    MINT_MISMATCH = 3
    OWNER_MISMATCH = 4
    FIXED_SUPPLY = 5
    ALREADY_IN_USE = 6
    INVALID_NUMBER_OF_PROVIDED_SIGNERS = 7
    INVALID_NUMBER_OF_REQUIRED_SIGNERS = 8
    UNINITIALIZED_STATE = 9
    NATIVE_NOT_SUPPORTED = 10
    NON_NATIVE_HAS_BALANCE = 11
    INVALID_INSTRUCTION = 12
    INVALID_STATE = 13
    OVERFLOW = 14
    AUTHORITY_TYPE_NOT_SUPPORTED = 15
    MINT_CANNOT_FREEZE = 16
    ACCOUNT_FROZEN = 17
    MINT_DECIMALS_MISMATCH = 18
    NON_NATIVE_NOT_SUPPORTED = 19

    @property
    def description(self) -> str:
        """Human readable explanation of the error."""
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    TokenError.NOT_RENT_EXEMPT: "Lamport balance below rent-exempt threshold",
    TokenError.INSUFFICIENT_FUNDS: "Insufficient funds for the operation requested",
    TokenError.INVALID_MINT: "Invalid Mint",
    TokenError.MINT_MISMATCH: "Account not associated with this Mint",
    TokenError.OWNER_MISMATCH: "Owner does not match",
    TokenError.FIXED_SUPPLY: "This token's supply is fixed and new tokens cannot be minted",
    TokenError.ALREADY_IN_USE: "The account cannot be initialized because it is already being used",
    TokenError.INVALID_NUMBER_OF_PROVIDED_SIGNERS: "Invalid number of provided signers",
    TokenError.INVALID_NUMBER_OF_REQUIRED_SIGNERS: "Invalid number of required signers",
    TokenError.UNINITIALIZED_STATE: "State is uninitialized",
    TokenError.NATIVE_NOT_SUPPORTED: "Instruction does not support native tokens",
    TokenError.NON_NATIVE_HAS_BALANCE: "Non-native account can only be closed if its balance is zero",
    TokenError.INVALID_INSTRUCTION: "Invalid instruction",
    TokenError.INVALID_STATE: "State is invalid for requested operation",
    TokenError.OVERFLOW: "Operation overflowed",
    TokenError.AUTHORITY_TYPE_NOT_SUPPORTED: "Account does not support specified authority type",
    TokenError.MINT_CANNOT_FREEZE: "This token mint cannot freeze accounts",
    TokenError.ACCOUNT_FROZEN: "Account is frozen; all account operations will fail",
    TokenError.MINT_DECIMALS_MISMATCH: "Mint decimals mismatch between the client and mint",
    TokenError.NON_NATIVE_NOT_SUPPORTED: "Instruction does not support non-native tokens",
}


class ErrorKind(Enum):
    """General categories of program failure."""

    CUSTOM = "custom"
    INVALID_ARGUMENT = "invalid argument"
    INVALID_INSTRUCTION_DATA = "invalid instruction data"
    INVALID_ACCOUNT_DATA = "invalid account data"
    NOT_ENOUGH_ACCOUNT_KEYS = "not enough account keys"
    MISSING_REQUIRED_SIGNATURE = "missing required signature"
    UNINITIALIZED_ACCOUNT = "uninitialized account"
    INCORRECT_PROGRAM_ID = "incorrect program id"
    UNSUPPORTED_SYSVAR = "unsupported sysvar"


class ProgramError(Exception):
    """Raised when an instruction fails.

    A token-specific failure carries ``ErrorKind.CUSTOM`` and a ``TokenError``;
    passing a ``TokenError`` as the only argument is shorthand for that.
    """

    def __init__(self, kind: ErrorKind | TokenError, token_error: TokenError | None = None):
        if isinstance(kind, TokenError):
            if token_error is not None:
                raise ValueError("token error given twice")
            kind, token_error = ErrorKind.CUSTOM, kind
        if not isinstance(kind, ErrorKind):
            raise TypeError(f"expected an ErrorKind, got {kind!r}")
        if kind is ErrorKind.CUSTOM and token_error is None:
            raise ValueError("a custom error needs a token error")
        if kind is not ErrorKind.CUSTOM and token_error is not None:
            raise ValueError("only a custom error carries a token error")
        self.kind = kind
        self.token_error = TokenError(token_error) if token_error is not None else None
        super().__init__(self._message())

    @property
    def custom_code(self) -> int | None:
        """The numeric custom code, or None for a non-custom error."""
        return int(self.token_error) if self.token_error is not None else None

    def _message(self) -> str:
        if self.token_error is not None:
            return f"custom program error {int(self.token_error)}: {self.token_error.description}"
        return self.kind.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProgramError):
            return NotImplemented
        return (self.kind, self.token_error) == (other.kind, other.token_error)

    def __hash__(self) -> int:
        return hash((self.kind, self.token_error))

    def __repr__(self) -> str:
        if self.token_error is not None:
            return f"ProgramError({self.token_error.name})"
        return f"ProgramError({self.kind.name})"