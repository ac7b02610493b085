import pytest

from tokenprog.errors import ErrorKind, ProgramError, TokenError


@pytest.mark.parametrize(
    "error, code",
    [
        (TokenError.NOT_RENT_EXEMPT, 0),
        (TokenError.FIXED_SUPPLY, 5),
        (TokenError.NATIVE_NOT_SUPPORTED, 10),
        (TokenError.AUTHORITY_TYPE_NOT_SUPPORTED, 15),
        (TokenError.NON_NATIVE_NOT_SUPPORTED, 19),
    ],
)
def test_token_error_codes_follow_source_order(error, code):
    assert ProgramError(error).custom_code == code


def test_token_error_codes_are_contiguous():
    codes = [ProgramError(e).custom_code for e in TokenError]
    assert codes == list(range(20))


@pytest.mark.parametrize("error", list(TokenError))
def test_shorthand_makes_custom_error(error):
    exc = ProgramError(error)
    assert exc.kind is ErrorKind.CUSTOM
    assert exc.token_error is error
    assert exc.custom_code == int(error)


def test_explicit_custom_equals_shorthand():
    assert ProgramError(ErrorKind.CUSTOM, TokenError.OVERFLOW) == ProgramError(TokenError.OVERFLOW)
    assert hash(ProgramError(ErrorKind.CUSTOM, TokenError.OVERFLOW)) == hash(
        ProgramError(TokenError.OVERFLOW)
    )


def test_non_custom_has_no_code():
    exc = ProgramError(ErrorKind.NOT_ENOUGH_ACCOUNT_KEYS)
    assert exc.custom_code is None
    assert exc.token_error is None


def test_distinct_errors_are_unequal():
    assert not (ProgramError(TokenError.OVERFLOW) == ProgramError(TokenError.INVALID_STATE))
    assert not (
        ProgramError(ErrorKind.INVALID_ARGUMENT) == ProgramError(ErrorKind.INVALID_ACCOUNT_DATA)
    )


def test_custom_without_token_error_rejected():
    with pytest.raises(ValueError):
        ProgramError(ErrorKind.CUSTOM)


def test_token_error_with_other_kind_rejected():
    with pytest.raises(ValueError):
        ProgramError(ErrorKind.INVALID_ARGUMENT, TokenError.OVERFLOW)


def test_bad_kind_rejected():
    with pytest.raises(TypeError):
        ProgramError("oops")


def test_error_is_an_exception_with_message():
    exc = ProgramError(TokenError.ACCOUNT_FROZEN)
    assert isinstance(exc, Exception)
    assert exc.token_error is TokenError.ACCOUNT_FROZEN
    assert "frozen" in str(exc)