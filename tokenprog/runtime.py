"""Account handles, the rent sysvar and the execution environment."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .errors import ErrorKind, ProgramError
from .pubkey import PUBKEY_BYTES, pubkey

RENT_SYSVAR_ID = pubkey("SysvarRent111111111111111111111111111111111")

# Bytes of metadata charged for every account on top of its data.
ACCOUNT_STORAGE_OVERHEAD = 128

_RENT_LAYOUT = struct.Struct("<QdB")


@dataclass(eq=False)
class AccountInfo:
    """An account handed to an instruction; equality is identity."""

    key: bytes
    owner: bytes = bytes(PUBKEY_BYTES)
    lamports: int = 0
    data: bytearray = field(default_factory=bytearray)
    is_signer: bool = False
    is_writable: bool = False

    def __post_init__(self) -> None:
        self.key = bytes(self.key)
        self.owner = bytes(self.owner)
        if not isinstance(self.data, bytearray):
            self.data = bytearray(self.data)

    @property
    def data_len(self) -> int:
        return len(self.data)

    def close(self) -> None:
        """Zero the lamports, drop the data and clear the owner."""
        self.lamports = 0
        del self.data[:]
        self.owner = bytes(PUBKEY_BYTES)


@dataclass(frozen=True)
class Rent:
    """Rent parameters, as held by the rent sysvar."""

    lamports_per_byte_year: int = 3480
    exemption_threshold: float = 2.0
    burn_percent: int = 50

    def minimum_balance(self, data_len: int) -> int:
        """Lamports an account of ``data_len`` bytes needs to be rent exempt."""
        base = (ACCOUNT_STORAGE_OVERHEAD + data_len) * self.lamports_per_byte_year
        if self.exemption_threshold == 2.0:
            return base * 2
        return int(base * self.exemption_threshold)

    def is_exempt(self, lamports: int, data_len: int) -> bool:
        return lamports >= self.minimum_balance(data_len)

    def to_bytes(self) -> bytes:
        return _RENT_LAYOUT.pack(
            self.lamports_per_byte_year, self.exemption_threshold, self.burn_percent
        )

    @classmethod
    def from_account(cls, info: AccountInfo) -> Rent:
        """Read rent from the rent sysvar account; raises ProgramError otherwise."""
        if info.key != RENT_SYSVAR_ID or info.data_len != _RENT_LAYOUT.size:
            raise ProgramError(ErrorKind.INVALID_ARGUMENT)
        lamports_per_byte_year, threshold, burn = _RENT_LAYOUT.unpack(bytes(info.data))
        return cls(lamports_per_byte_year, threshold, burn)


@dataclass
class Runtime:
    """What an instruction sees of its environment: sysvars, return data and logs."""

    rent: Rent | None = field(default_factory=Rent)
    return_data: bytes = b""
    logs: list[str] = field(default_factory=list)

    def sysvar_rent(self) -> Rent:
        """The rent sysvar; raises ProgramError when it is unavailable."""
        if self.rent is None:
            raise ProgramError(ErrorKind.UNSUPPORTED_SYSVAR)
        return self.rent

    def set_return_data(self, data: bytes) -> None:
        self.return_data = bytes(data)

    def log(self, message: str) -> None:
        self.logs.append(message)