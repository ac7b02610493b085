import pytest

from tokenprog.errors import ErrorKind, ProgramError
from tokenprog.runtime import RENT_SYSVAR_ID, AccountInfo, Rent, Runtime


def test_account_info_equality_is_identity():
    first = AccountInfo(key=bytes(32))
    second = AccountInfo(key=bytes(32))
    assert first == first
    assert not first == second


def test_account_info_converts_data_to_bytearray():
    info = AccountInfo(key=b"\x01" * 32, data=b"\x00\x01")
    info.data[0] = 7
    assert info.data == bytearray(b"\x07\x01")
    assert info.data_len == 2


def test_close():
    info = AccountInfo(key=b"\x01" * 32, owner=b"\x02" * 32, lamports=500, data=bytearray(10))
    info.close()
    assert info.lamports == 0
    assert info.data_len == 0
    assert info.owner == bytes(32)


def test_default_minimum_balance_for_token_account():
    assert Rent().minimum_balance(165) == 2039280


@pytest.mark.parametrize("size", [0, 82, 165, 355])
def test_is_exempt_boundary(size):
    rent = Rent()
    minimum = rent.minimum_balance(size)
    assert rent.is_exempt(minimum, size)
    assert not rent.is_exempt(minimum - 1, size)


def test_non_default_threshold():
    half = Rent(exemption_threshold=1.0)
    assert half.minimum_balance(165) * 2 == Rent().minimum_balance(165)


def test_rent_from_account_round_trip():
    rent = Rent(lamports_per_byte_year=10, exemption_threshold=1.5, burn_percent=3)
    info = AccountInfo(key=RENT_SYSVAR_ID, data=rent.to_bytes())
    assert Rent.from_account(info) == rent


def test_rent_from_wrong_account():
    info = AccountInfo(key=b"\x05" * 32, data=Rent().to_bytes())
    with pytest.raises(ProgramError) as excinfo:
        Rent.from_account(info)
    assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENT


def test_rent_from_short_data():
    info = AccountInfo(key=RENT_SYSVAR_ID, data=bytes(3))
    with pytest.raises(ProgramError) as excinfo:
        Rent.from_account(info)
    assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENT


def test_runtime_rent():
    assert Runtime().sysvar_rent() == Rent()
    with pytest.raises(ProgramError) as excinfo:
        Runtime(rent=None).sysvar_rent()
    assert excinfo.value.kind is ErrorKind.UNSUPPORTED_SYSVAR


def test_return_data_is_replaced():
    runtime = Runtime()
    runtime.set_return_data(bytearray(b"abc"))
    assert runtime.return_data == b"abc"
    runtime.set_return_data(b"z")
    assert runtime.return_data == b"z"


def test_log_appends():
    runtime = Runtime()
    runtime.log("one")
    runtime.log("two")
    assert runtime.logs == ["one", "two"]