"""Views over the raw account data of mints, token accounts and multisigs."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, ClassVar, TypeVar

from .errors import ErrorKind, ProgramError
from .pubkey import PUBKEY_BYTES, pubkey

# Incinerator address.
INCINERATOR_ID = pubkey("1nc1nerator11111111111111111111111111111111")

# System program id.
SYSTEM_PROGRAM_ID = pubkey("11111111111111111111111111111111")

# Minimum and maximum number of multisignature signers.
MIN_SIGNERS = 1
MAX_SIGNERS = 11

_COPTION_TAG = 4


def _checked_key(value: Any) -> bytes:
    key = bytes(value)
    if len(key) != PUBKEY_BYTES:
        raise ValueError(f"public key must be {PUBKEY_BYTES} bytes, got {len(key)}")
    return key


class _U8:
    def __init__(self, offset: int):
        self.offset = offset

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.data[self.offset]

    def __set__(self, obj, value: int) -> None:
        obj.data[self.offset] = value


class _Flag(_U8):
    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.data[self.offset] == 1

    def __set__(self, obj, value: bool) -> None:
        obj.data[self.offset] = int(bool(value))


class _U64:
    def __init__(self, offset: int):
        self.offset = offset

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return int.from_bytes(obj.data[self.offset:self.offset + 8], "little")

    def __set__(self, obj, value: int) -> None:
        obj.data[self.offset:self.offset + 8] = int(value).to_bytes(8, "little")


class _Key:
    def __init__(self, offset: int):
        self.offset = offset

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return bytes(obj.data[self.offset:self.offset + PUBKEY_BYTES])

    def __set__(self, obj, value: bytes) -> None:
        obj.data[self.offset:self.offset + PUBKEY_BYTES] = _checked_key(value)


class _OptionalKey:
    """A four-byte tag followed by a key; only the first tag byte is used."""

    def __init__(self, offset: int):
        self.offset = offset
        self.key_offset = offset + _COPTION_TAG

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        if obj.data[self.offset] != 1:
            return None
        return bytes(obj.data[self.key_offset:self.key_offset + PUBKEY_BYTES])

    def __set__(self, obj, value: bytes | None) -> None:
        if value is None:
            obj.data[self.offset] = 0
        else:
            key = _checked_key(value)
            obj.data[self.offset] = 1
            obj.data[self.key_offset:self.key_offset + PUBKEY_BYTES] = key


def _check_length(data: Any, length: int) -> None:
    if len(data) != length:
        raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA)


class AccountState(IntEnum):
    """Lifecycle state of a token account."""

    UNINITIALIZED = 0
    INITIALIZED = 1
    FROZEN = 2


class Account:
    """Token account view; writes go straight into the underlying buffer."""

    LEN: ClassVar[int] = 165

    mint = _Key(0)
    owner = _Key(32)
    amount = _U64(64)
    delegate = _OptionalKey(72)
    _STATE = 108
    is_native = _Flag(109)
    _NATIVE_AMOUNT = 113
    delegated_amount = _U64(121)
    close_authority = _OptionalKey(129)

    def __init__(self, data):
        _check_length(data, self.LEN)
        self.data = data

    @property
    def state(self) -> AccountState:
        try:
            return AccountState(self.data[self._STATE])
        except ValueError:
            raise ProgramError(ErrorKind.INVALID_ACCOUNT_DATA) from None

    @state.setter
    def state(self, value: AccountState) -> None:
        self.data[self._STATE] = AccountState(value)

    @property
    def native_amount(self) -> int | None:
        """Rent-exempt reserve of a native account, or None for other accounts."""
        if not self.is_native:
            return None
        start = self._NATIVE_AMOUNT
        return int.from_bytes(self.data[start:start + 8], "little")

    @native_amount.setter
    def native_amount(self, value: int) -> None:
        start = self._NATIVE_AMOUNT
        self.data[start:start + 8] = int(value).to_bytes(8, "little")

    def is_initialized(self) -> bool:
        return self.data[self._STATE] != AccountState.UNINITIALIZED

    def is_frozen(self) -> bool:
        return self.data[self._STATE] == AccountState.FROZEN

    def is_owned_by_system_program_or_incinerator(self) -> bool:
        return self.owner in (SYSTEM_PROGRAM_ID, INCINERATOR_ID)


class Mint:
    """Mint view; writes go straight into the underlying buffer."""

    LEN: ClassVar[int] = 82

    mint_authority = _OptionalKey(0)
    supply = _U64(36)
    decimals = _U8(44)
    initialized = _Flag(45)
    freeze_authority = _OptionalKey(46)

    def __init__(self, data):
        _check_length(data, self.LEN)
        self.data = data

    def is_initialized(self) -> bool:
        return self.initialized


class Multisig:
    """Multisignature account view; writes go straight into the underlying buffer."""

    LEN: ClassVar[int] = 3 + MAX_SIGNERS * PUBKEY_BYTES

    m = _U8(0)
    n = _U8(1)
    initialized = _Flag(2)
    _SIGNERS = 3

    def __init__(self, data):
        _check_length(data, self.LEN)
        self.data = data

    def _slot(self, index: int) -> slice:
        start = self._SIGNERS + index * PUBKEY_BYTES
        return slice(start, start + PUBKEY_BYTES)

    @property
    def signers(self) -> tuple[bytes, ...]:
        """The first ``n`` signer keys."""
        count = min(self.n, MAX_SIGNERS)
        return tuple(bytes(self.data[self._slot(i)]) for i in range(count))

    @signers.setter
    def signers(self, keys) -> None:
        keys = [_checked_key(key) for key in keys]
        if len(keys) > MAX_SIGNERS:
            raise ValueError(f"at most {MAX_SIGNERS} signers")
        for index, key in enumerate(keys):
            self.data[self._slot(index)] = key

    def is_initialized(self) -> bool:
        return self.initialized


def is_valid_signer_index(index: int) -> bool:
    """Return True if index lies between MIN_SIGNERS and MAX_SIGNERS inclusive."""
    return MIN_SIGNERS <= index <= MAX_SIGNERS


T = TypeVar("T", Account, Mint, Multisig)


def load_unchecked(cls: type[T], data) -> T:
    """View data as ``cls`` without checking that it is initialized."""
    _check_length(data, cls.LEN)
    return cls(data)


def load(cls: type[T], data) -> T:
    """View data as an initialized ``cls``; raises ProgramError otherwise."""
    view = load_unchecked(cls, data)
    if not view.is_initialized():
        raise ProgramError(ErrorKind.UNINITIALIZED_ACCOUNT)
    return view