"""BIC (SWIFT code) validation."""
from __future__ import annotations

import re
import string
from dataclasses import dataclass

from country_codes import is_known_country
from validation_errors import BicFormatError, ErrorKind, UnsupportedCountryError, ValidationError

BIC8_LENGTH = 8
BIC11_LENGTH = 11

BANK_CODE_INDEX = 0
BANK_CODE_LENGTH = 4
COUNTRY_CODE_INDEX = BANK_CODE_INDEX + BANK_CODE_LENGTH
COUNTRY_CODE_LENGTH = 2
LOCATION_CODE_INDEX = COUNTRY_CODE_INDEX + COUNTRY_CODE_LENGTH
LOCATION_CODE_LENGTH = 2
BRANCH_CODE_INDEX = LOCATION_CODE_INDEX + LOCATION_CODE_LENGTH
BRANCH_CODE_LENGTH = 3

_LETTERS = frozenset(string.ascii_letters)
_LETTERS_OR_DIGITS = frozenset(string.ascii_letters + string.digits)


@dataclass(frozen=True)
class BicFields:
    bic: str
    bank_code: str
    country_code: str
    location_code: str
    branch_code: str | None = None


def get_bank_code(bic: str) -> str:
    return bic[BANK_CODE_INDEX : BANK_CODE_INDEX + BANK_CODE_LENGTH]


def get_country_code(bic: str) -> str:
    return bic[COUNTRY_CODE_INDEX : COUNTRY_CODE_INDEX + COUNTRY_CODE_LENGTH]


def get_location_code(bic: str) -> str:
    return bic[LOCATION_CODE_INDEX : LOCATION_CODE_INDEX + LOCATION_CODE_LENGTH]


def get_branch_code(bic: str) -> str | None:
    if not has_branch_code(bic):
        return None
    return bic[BRANCH_CODE_INDEX : BRANCH_CODE_INDEX + BRANCH_CODE_LENGTH]


def normalize_bic(bic: str | None) -> str:
    """Remove whitespace and make upper-case."""
    return re.sub(r"\s+", "", bic or "").upper()


def has_branch_code(bic: str) -> bool:
    return len(bic) == BIC11_LENGTH


def _check_characters(value: str, allowed: frozenset[str], field: str, start: int, expected: str) -> None:
    for offset, ch in enumerate(value):
        if ch not in allowed:
            raise BicFormatError(
                ErrorKind.FIELD_CHARACTER_CLASS,
                field=field,
                value=value,
                position=start + offset,
                character=ch,
                expected=expected,
            )


def _validate_country_code(bic: str) -> None:
    country_code = get_country_code(bic)
    if len(country_code) < COUNTRY_CODE_LENGTH or not all(
        ch in string.ascii_uppercase for ch in country_code
    ):
        raise BicFormatError(ErrorKind.COUNTRY_CODE_FORMAT, country_code=country_code)
    if not is_known_country(country_code):
        raise UnsupportedCountryError(country_code, subject="BIC")


def _validate_bic(bic: str | None) -> BicFields:
    if bic is None:
        raise BicFormatError(ErrorKind.IS_NULL)

    if len(bic) not in (BIC8_LENGTH, BIC11_LENGTH):
        raise BicFormatError(
            ErrorKind.INVALID_LENGTH, actual=len(bic), expected=(BIC8_LENGTH, BIC11_LENGTH)
        )

    if bic != bic.upper():
        raise BicFormatError(ErrorKind.CASE_FORMAT, value=bic)

    _check_characters(get_bank_code(bic), _LETTERS, "bank code", BANK_CODE_INDEX, "letters")
    _validate_country_code(bic)
    _check_characters(
        get_location_code(bic), _LETTERS_OR_DIGITS, "location code", LOCATION_CODE_INDEX,
        "letters or digits",
    )
    if has_branch_code(bic):
        _check_characters(
            get_branch_code(bic), _LETTERS_OR_DIGITS, "branch code", BRANCH_CODE_INDEX,
            "letters or digits",
        )

    return BicFields(
        bic=bic,
        bank_code=get_bank_code(bic),
        country_code=get_country_code(bic),
        location_code=get_location_code(bic),
        branch_code=get_branch_code(bic),
    )


def validate_bic(bic: str | None) -> BicFields:
    """
    Validate a BIC and return its components.

    Raises a ``ValidationError`` subclass describing the first failed check.
    Unexpected faults are re-raised as ``ErrorKind.UNKNOWN``.
    """
    try:
        return _validate_bic(bic)
    except ValidationError:
        raise
    except Exception as exc:
        raise BicFormatError(ErrorKind.UNKNOWN, error=str(exc)) from exc


def is_valid_bic(bic: str | None) -> bool:
    try:
        validate_bic(bic)
    except ValidationError:
        return False
    return True
