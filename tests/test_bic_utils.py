from __future__ import annotations

import pytest

from bic_utils import is_valid_bic, normalize_bic, validate_bic
from validation_errors import BicFormatError, ErrorKind, UnsupportedCountryError


def test_bic8_validates() -> None:
    fields = validate_bic("DEUTDEFF")
    assert fields.bank_code == "DEUT"
    assert fields.country_code == "DE"
    assert fields.location_code == "FF"
    assert fields.branch_code is None


def test_bic11_validates_with_branch_code() -> None:
    fields = validate_bic("DEUTDEFF500")
    assert fields.branch_code == "500"
    assert is_valid_bic("DEUTDEFF500")


def test_lower_case_bic_fails_case_format() -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic("deutdeff")
    assert excinfo.value.kind is ErrorKind.CASE_FORMAT


def test_null_bic() -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic(None)
    assert excinfo.value.kind is ErrorKind.IS_NULL


@pytest.mark.parametrize("value", ["", "DEUTDEF", "DEUTDEFF5", "DEUTDEFF5000"])
def test_invalid_length_reports_allowed_lengths(value: str) -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic(value)
    error = excinfo.value
    assert error.kind is ErrorKind.INVALID_LENGTH
    assert error.details == {"actual": len(value), "expected": (8, 11)}
    assert "8 or 11" in str(error)
    assert error.to_dict()["details"]["expected"] == [8, 11]


def test_bank_code_must_be_letters() -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic("DEU1DEFF")
    assert excinfo.value.kind is ErrorKind.FIELD_CHARACTER_CLASS
    assert excinfo.value.details["field"] == "bank code"
    assert excinfo.value.details["position"] == 3


def test_country_code_must_be_letters() -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic("DEUT1EFF")
    assert excinfo.value.kind is ErrorKind.COUNTRY_CODE_FORMAT


def test_unknown_country_code() -> None:
    with pytest.raises(UnsupportedCountryError) as excinfo:
        validate_bic("DEUTZZFF")
    assert excinfo.value.kind is ErrorKind.UNSUPPORTED_COUNTRY
    assert excinfo.value.country_code == "ZZ"
    assert "ZZ" in str(excinfo.value)


def test_bic_country_needs_no_iban_layout() -> None:
    assert validate_bic("CHASUS33").country_code == "US"


@pytest.mark.parametrize(
    "value, field, position",
    [("DEUTDE-F", "location code", 6), ("DEUTDEFF5_0", "branch code", 9)],
)
def test_location_and_branch_codes_are_alphanumeric(value: str, field: str, position: int) -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic(value)
    assert excinfo.value.kind is ErrorKind.FIELD_CHARACTER_CLASS
    assert excinfo.value.details["field"] == field
    assert excinfo.value.details["position"] == position


def test_unexpected_fault_becomes_unknown() -> None:
    with pytest.raises(BicFormatError) as excinfo:
        validate_bic(list("DEUTDEFF"))  # type: ignore[arg-type]
    assert excinfo.value.kind is ErrorKind.UNKNOWN
    assert excinfo.value.__cause__ is not None


def test_normalize_bic() -> None:
    assert normalize_bic(" deut de ff\t500 ") == "DEUTDEFF500"
    assert normalize_bic(None) == ""
