# iban_utils.py
"""IBAN structural validation and mod-97 check digits."""
from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from typing import Mapping

from bban_formats import IBAN_PREFIX_LENGTH, BbanLayout, FieldRole, FieldType, layout_for
from country_codes import COUNTRY_CODE_LENGTH
from validation_errors import (
    ErrorKind,
    IbanFormatError,
    InvalidCheckDigitError,
    UnsupportedCountryError,
    ValidationError,
)

MOD = 97
# Reduce the running total once it passes nine digits.
MAX = 999_999_999

MIN_IBAN_LENGTH = 15
CHECK_DIGIT_INDEX = COUNTRY_CODE_LENGTH
CHECK_DIGIT_LENGTH = 2
BBAN_INDEX = IBAN_PREFIX_LENGTH
DEFAULT_CHECK_DIGITS = "00"

FIELD_TYPE_CHARACTERS = {
    FieldType.UPPER_ALPHA: frozenset(string.ascii_uppercase),
    FieldType.ALPHA_NUMERIC: frozenset(string.ascii_letters + string.digits),
    FieldType.NUMERIC: frozenset(string.digits),
}

FIELD_TYPE_DESCRIPTIONS = {
    FieldType.UPPER_ALPHA: "upper case letters",
    FieldType.ALPHA_NUMERIC: "letters or digits",
    FieldType.NUMERIC: "digits",
}


@dataclass(frozen=True)
class IbanFields:
    """Components of a validated IBAN."""

    iban: str
    country_code: str
    check_digits: str
    bban: str
    fields: Mapping[FieldRole, str] = field(default_factory=dict)

    @property
    def bank_code(self) -> str | None:
        return self.fields.get(FieldRole.BANK_CODE)

    @property
    def branch_code(self) -> str | None:
        return self.fields.get(FieldRole.BRANCH_CODE)

    @property
    def account_number(self) -> str | None:
        return self.fields.get(FieldRole.ACCOUNT_NUMBER)

    @property
    def national_check_digit(self) -> str | None:
        return self.fields.get(FieldRole.NATIONAL_CHECK_DIGIT)

    @property
    def account_type(self) -> str | None:
        return self.fields.get(FieldRole.ACCOUNT_TYPE)

    @property
    def owner_account_type(self) -> str | None:
        return self.fields.get(FieldRole.OWNER_ACCOUNT_TYPE)

    @property
    def identification_number(self) -> str | None:
        return self.fields.get(FieldRole.IDENTIFICATION_NUMBER)


def normalize_iban(iban: str | None) -> str:
    """Remove whitespace and make upper-case."""
    return re.sub(r"\s+", "", iban or "").upper()


def format_iban(iban: str) -> str:
    """Return the print format: groups of four characters separated by spaces."""
    return " ".join(iban[i : i + 4] for i in range(0, len(iban), 4))


def matches_field_type(field_type: FieldType, ch: str) -> bool:
    return ch in FIELD_TYPE_CHARACTERS[field_type]


def get_country_code(iban: str) -> str:
    return iban[:COUNTRY_CODE_LENGTH]


def get_check_digits(iban: str) -> str:
    return iban[CHECK_DIGIT_INDEX : CHECK_DIGIT_INDEX + CHECK_DIGIT_LENGTH]


def get_bban(iban: str) -> str:
    return iban[BBAN_INDEX:]


# --- check digits -----------------------------------------------------------


def _numeric_value(ch: str) -> int:
    """Map a character to its mod-97 value (digit -> itself, A=10 ... Z=35)."""
    if ch in string.digits:
        return ord(ch) - ord("0")
    if ch in string.ascii_letters:
        return ord(ch.upper()) - ord("A") + 10
    return -1


def calculate_mod(iban: str) -> int:
    """
    Compute the IBAN modulo 97 over BBAN + country code + check digits.

    Letters expand to two digits, so the running total is multiplied by 100
    for them and by 10 for digits, and reduced modulo 97 whenever it grows
    past nine digits.
    """
    bban = get_bban(iban)
    rearranged = bban + iban[:BBAN_INDEX]
    total = 0
    for index, ch in enumerate(rearranged):
        value = _numeric_value(ch)
        if value < 0 or value > 35:
            position = index + BBAN_INDEX if index < len(bban) else index - len(bban)
            raise IbanFormatError(ErrorKind.INVALID_CHARACTER, position=position, character=ch)
        total = (total * 100 if value > 9 else total * 10) + value
        if total > MAX:
            total %= MOD
    return total % MOD


def calculate_check_digits(country_code: str, bban: str) -> str:
    """Return the two check digits for ``country_code`` and ``bban``."""
    if len(country_code) != COUNTRY_CODE_LENGTH or not all(
        ch in string.ascii_letters for ch in country_code
    ):
        raise IbanFormatError(ErrorKind.COUNTRY_CODE_FORMAT, country_code=country_code)
    mod_result = calculate_mod(country_code + DEFAULT_CHECK_DIGITS + bban)
    return f"{98 - mod_result:02d}"


def is_check_digit_valid(iban: str) -> bool:
    expected = calculate_check_digits(get_country_code(iban), get_bban(iban))
    return get_check_digits(iban) == expected


# --- structural validation --------------------------------------------------


def validate_country_code(iban: str) -> BbanLayout:
    """Check the country code prefix and return the country's BBAN layout."""
    country_code = get_country_code(iban)
    if len(country_code) < COUNTRY_CODE_LENGTH or not all(
        ch in string.ascii_uppercase for ch in country_code
    ):
        raise IbanFormatError(ErrorKind.COUNTRY_CODE_FORMAT, country_code=country_code)

    layout = layout_for(country_code)
    if layout is None:
        raise UnsupportedCountryError(country_code)
    return layout


def validate_field_characters(layout: BbanLayout, bban: str) -> None:
    """Check each BBAN field against its character class."""
    for spec, start, end in layout.offsets():
        value = bban[start:end]
        for offset, ch in enumerate(value):
            if not matches_field_type(spec.field_type, ch):
                raise IbanFormatError(
                    ErrorKind.FIELD_CHARACTER_CLASS,
                    field=spec.role.label,
                    value=value,
                    position=BBAN_INDEX + start + offset,
                    character=ch,
                    expected=FIELD_TYPE_DESCRIPTIONS[spec.field_type],
                )


def _split_fields(layout: BbanLayout, bban: str) -> dict[FieldRole, str]:
    fields: dict[FieldRole, str] = {}
    for spec, start, end in layout.offsets():
        fields.setdefault(spec.role, bban[start:end])
    return fields


def _validate_iban(iban: str | None) -> IbanFields:
    if not iban:
        raise IbanFormatError(ErrorKind.IS_NULL)

    layout = validate_country_code(iban)

    if len(iban) < MIN_IBAN_LENGTH:
        raise IbanFormatError(
            ErrorKind.INVALID_LENGTH, value=iban, actual=len(iban), expected=MIN_IBAN_LENGTH
        )

    bban = get_bban(iban)
    if len(bban) != layout.length:
        raise IbanFormatError(
            ErrorKind.INVALID_LENGTH, value=bban, actual=len(bban), expected=layout.length
        )

    validate_field_characters(layout, bban)

    check_digits = get_check_digits(iban)
    expected = calculate_check_digits(get_country_code(iban), bban)
    if check_digits != expected:
        raise InvalidCheckDigitError(iban, check_digits, expected)

    return IbanFields(
        iban=iban,
        country_code=get_country_code(iban),
        check_digits=check_digits,
        bban=bban,
        fields=_split_fields(layout, bban),
    )


def validate_iban(iban: str | None) -> IbanFields:
    """
    Validate an IBAN and return its components.

    Raises a ``ValidationError`` subclass describing the first failed check.
    Unexpected faults are re-raised as ``ErrorKind.UNKNOWN``.
    """
    try:
        return _validate_iban(iban)
    except ValidationError:
        raise
    except Exception as exc:
        raise IbanFormatError(ErrorKind.UNKNOWN, error=str(exc)) from exc


def is_valid_iban(iban: str | None) -> bool:
    try:
        validate_iban(iban)
    except ValidationError:
        return False
    return True


def extract_field(iban: str, role: FieldRole | str) -> str | None:
    """Validate ``iban`` and return the value of the first field with ``role``."""
    role = FieldRole(role)
    return validate_iban(iban).fields.get(role)


def get_bank_code(iban: str) -> str | None:
    return extract_field(iban, FieldRole.BANK_CODE)


def get_branch_code(iban: str) -> str | None:
    return extract_field(iban, FieldRole.BRANCH_CODE)


def get_account_number(iban: str) -> str | None:
    return extract_field(iban, FieldRole.ACCOUNT_NUMBER)


def get_national_check_digit(iban: str) -> str | None:
    return extract_field(iban, FieldRole.NATIONAL_CHECK_DIGIT)


def get_account_type(iban: str) -> str | None:
    return extract_field(iban, FieldRole.ACCOUNT_TYPE)


def get_owner_account_type(iban: str) -> str | None:
    return extract_field(iban, FieldRole.OWNER_ACCOUNT_TYPE)


def get_identification_number(iban: str) -> str | None:
    return extract_field(iban, FieldRole.IDENTIFICATION_NUMBER)
