from __future__ import annotations

import pytest

from bban_formats import FieldRole
from iban_utils import (
    _numeric_value,
    calculate_check_digits,
    calculate_mod,
    extract_field,
    format_iban,
    get_account_number,
    get_account_type,
    get_bank_code,
    get_bban,
    get_branch_code,
    get_check_digits,
    get_country_code,
    get_identification_number,
    get_national_check_digit,
    get_owner_account_type,
    is_check_digit_valid,
    is_valid_iban,
    normalize_iban,
    validate_iban,
)
from validation_errors import (
    ErrorKind,
    IbanFormatError,
    InvalidCheckDigitError,
    UnsupportedCountryError,
    ValidationError,
)


def _big_int_mod(iban: str) -> int:
    rearranged = iban[4:] + iban[:4]
    return int("".join(str(_numeric_value(ch)) for ch in rearranged)) % 97


def test_valid_ibans_validate(valid_iban: str) -> None:
    fields = validate_iban(valid_iban)
    assert fields.iban == valid_iban
    assert fields.country_code == valid_iban[:2]
    assert fields.check_digits == valid_iban[2:4]
    assert fields.bban == valid_iban[4:]
    assert is_valid_iban(valid_iban)
    assert is_check_digit_valid(valid_iban)


def test_check_digits_match_valid_ibans(valid_iban: str) -> None:
    expected = get_check_digits(valid_iban)
    assert calculate_check_digits(get_country_code(valid_iban), get_bban(valid_iban)) == expected
    # Same input, same answer.
    assert calculate_check_digits(get_country_code(valid_iban), get_bban(valid_iban)) == expected


def test_folded_mod_matches_big_integer_arithmetic(valid_iban: str) -> None:
    assert calculate_mod(valid_iban) == _big_int_mod(valid_iban) == 1
    zeroed = valid_iban[:2] + "00" + valid_iban[4:]
    assert calculate_mod(zeroed) == _big_int_mod(zeroed)


@pytest.mark.parametrize(
    "country_code, bban, expected",
    [
        ("DE", "370400440532013000", "89"),
        ("IE", "AIBK93115212345678", "29"),
        ("GB", "NWBK60161331926819", "29"),
        ("NO", "86011117947", "93"),
    ],
)
def test_calculate_check_digits(country_code: str, bban: str, expected: str) -> None:
    assert calculate_check_digits(country_code, bban) == expected


def test_check_digits_are_zero_padded() -> None:
    digits = calculate_check_digits("DE", "370400440532013000")
    assert len(digits) == 2
    for bban in ("000000000000000000", "999999999999999999", "123456789012345678"):
        assert len(calculate_check_digits("DE", bban)) == 2


def test_calculate_check_digits_rejects_non_alphanumeric() -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        calculate_check_digits("DE", "3704-0044")
    assert excinfo.value.kind is ErrorKind.INVALID_CHARACTER
    assert excinfo.value.details["character"] == "-"
    assert excinfo.value.details["position"] == 8


def test_ireland_scenario() -> None:
    fields = validate_iban("IE29AIBK93115212345678")
    assert fields.country_code == "IE"
    assert fields.check_digits == "29"
    assert fields.bank_code == "AIBK"
    assert fields.branch_code == "931152"
    assert fields.account_number == "12345678"
    assert fields.national_check_digit is None


def test_germany_scenario() -> None:
    fields = validate_iban("DE89370400440532013000")
    assert fields.country_code == "DE"
    assert fields.check_digits == "89"
    assert fields.bank_code == "37040044"
    assert fields.account_number == "0532013000"


def test_zeroed_check_digits_report_expected_value(valid_iban: str) -> None:
    zeroed = valid_iban[:2] + "00" + valid_iban[4:]
    with pytest.raises(InvalidCheckDigitError) as excinfo:
        validate_iban(zeroed)
    error = excinfo.value
    assert error.kind is ErrorKind.INVALID_CHECK_DIGIT
    assert error.found == "00"
    assert error.expected == valid_iban[2:4]
    assert error.details == {"found": "00", "expected": valid_iban[2:4]}


@pytest.mark.parametrize("value", [None, ""])
def test_null_or_empty(value) -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban(value)
    assert excinfo.value.kind is ErrorKind.IS_NULL


@pytest.mark.parametrize("value", ["de89370400440532013000", "1E29AIBK93115212345678", "D"])
def test_country_code_format(value: str) -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban(value)
    assert excinfo.value.kind is ErrorKind.COUNTRY_CODE_FORMAT


@pytest.mark.parametrize("value", ["ZZ89370400440532013000", "US89370400440532013000"])
def test_unsupported_country(value: str) -> None:
    with pytest.raises(UnsupportedCountryError) as excinfo:
        validate_iban(value)
    assert excinfo.value.kind is ErrorKind.UNSUPPORTED_COUNTRY
    assert excinfo.value.country_code == value[:2]


def test_minimum_length() -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban("DE8937040044")
    assert excinfo.value.kind is ErrorKind.INVALID_LENGTH
    assert excinfo.value.details["actual"] == 12
    assert excinfo.value.details["expected"] == 15


@pytest.mark.parametrize("value", ["DE8937040044053201300", "DE893704004405320130000"])
def test_bban_length_must_match_layout(value: str) -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban(value)
    assert excinfo.value.kind is ErrorKind.INVALID_LENGTH
    assert excinfo.value.details["actual"] == len(value) - 4
    assert excinfo.value.details["expected"] == 18


@pytest.mark.parametrize(
    "value, position, character, field",
    [
        ("DE89A70400440532013000", 4, "A", "bank code"),
        ("DE8937040044053201300X", 21, "X", "account number"),
        ("GB29NWB160161331926819", 7, "1", "bank code"),
        ("GB29nWBK60161331926819", 4, "n", "bank code"),
        ("CH930076201162385295-", 20, "-", "account number"),
    ],
)
def test_field_character_class(value: str, position: int, character: str, field: str) -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban(value)
    error = excinfo.value
    assert error.kind is ErrorKind.FIELD_CHARACTER_CLASS
    assert error.details["position"] == position
    assert error.details["character"] == character
    assert error.details["field"] == field
    assert field in str(error).lower()


def test_unexpected_fault_becomes_unknown() -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        validate_iban(12345)  # type: ignore[arg-type]
    assert excinfo.value.kind is ErrorKind.UNKNOWN
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_validation_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        validate_iban("ZZ00")
    assert issubclass(InvalidCheckDigitError, ValidationError)


def test_extract_field() -> None:
    iban = "IE29AIBK93115212345678"
    assert extract_field(iban, FieldRole.BANK_CODE) == "AIBK"
    assert extract_field(iban, "account_number") == "12345678"
    assert extract_field(iban, FieldRole.ACCOUNT_TYPE) is None


def test_extract_field_validates_first() -> None:
    with pytest.raises(InvalidCheckDigitError):
        extract_field("IE00AIBK93115212345678", FieldRole.BANK_CODE)


def test_role_getters() -> None:
    brazil = "BR1800360305000010009795493C1"
    assert get_bank_code(brazil) == "00360305"
    assert get_branch_code(brazil) == "00001"
    assert get_account_number(brazil) == "0009795493"
    assert get_account_type(brazil) == "C"
    assert get_owner_account_type(brazil) == "1"
    assert get_identification_number("IS140159260076545510730339") == "5510730339"
    assert get_national_check_digit("IT60X0542811101000000123456") == "X"


def test_normalize_and_format() -> None:
    assert normalize_iban(" de89 3704 0044\t0532 0130 00 ") == "DE89370400440532013000"
    assert normalize_iban(None) == ""
    assert format_iban("DE89370400440532013000") == "DE89 3704 0044 0532 0130 00"


def test_is_valid_iban_false_for_invalid() -> None:
    assert not is_valid_iban("DE00370400440532013000")
    assert not is_valid_iban(None)


@pytest.mark.parametrize("country_code", ["D", "DEU", "12", ""])
def test_calculate_check_digits_requires_two_letter_country_code(country_code: str) -> None:
    with pytest.raises(IbanFormatError) as excinfo:
        calculate_check_digits(country_code, "370400440532013000")
    assert excinfo.value.kind is ErrorKind.COUNTRY_CODE_FORMAT
    assert excinfo.value.details["country_code"] == country_code
