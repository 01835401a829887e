"""Validation of IBANs that are still being typed.

``check_incomplete`` accepts any prefix of an IBAN. It raises as soon as the
prefix can no longer be extended into a valid IBAN, returns ``False`` while
the prefix is clean but incomplete, and ``True`` once the full length is
reached and the complete IBAN validates.
"""
from __future__ import annotations

import string

from bban_formats import IBAN_PREFIX_LENGTH, BbanLayout, layout_for, max_length_for
from country_codes import COUNTRY_CODE_LENGTH
from iban_utils import (
    BBAN_INDEX,
    CHECK_DIGIT_INDEX,
    FIELD_TYPE_DESCRIPTIONS,
    get_bban,
    get_country_code,
    matches_field_type,
    validate_iban,
)
from validation_errors import ErrorKind, IbanFormatError, UnsupportedCountryError, ValidationError


def _check_country_code(prefix: str) -> None:
    for position, ch in enumerate(prefix[:COUNTRY_CODE_LENGTH]):
        if ch not in string.ascii_uppercase:
            raise IbanFormatError(
                ErrorKind.COUNTRY_CODE_FORMAT,
                country_code=prefix[:COUNTRY_CODE_LENGTH],
                position=position,
                character=ch,
            )

    if len(prefix) >= COUNTRY_CODE_LENGTH:
        country_code = get_country_code(prefix)
        if layout_for(country_code) is None:
            raise UnsupportedCountryError(country_code)


def _check_check_digits(prefix: str) -> None:
    for position in range(CHECK_DIGIT_INDEX, min(len(prefix), BBAN_INDEX)):
        ch = prefix[position]
        if ch not in string.digits:
            raise IbanFormatError(
                ErrorKind.FIELD_CHARACTER_CLASS,
                field="check digits",
                value=prefix[CHECK_DIGIT_INDEX:BBAN_INDEX],
                position=position,
                character=ch,
                expected="digits",
            )


def _check_bban_characters(layout: BbanLayout, bban: str) -> None:
    """Check each BBAN character typed so far against its position's class."""
    for index, (field_type, ch) in enumerate(zip(layout.character_types(), bban)):
        if not matches_field_type(field_type, ch):
            raise IbanFormatError(
                ErrorKind.FIELD_CHARACTER_CLASS,
                field=layout.field_at(index).role.label,
                position=BBAN_INDEX + index,
                character=ch,
                expected=FIELD_TYPE_DESCRIPTIONS[field_type],
            )


def iban_length_for(prefix: str) -> int | None:
    """Full IBAN length expected for the prefix's country, if known yet."""
    if len(prefix) < COUNTRY_CODE_LENGTH:
        return None
    return max_length_for(get_country_code(prefix))


def _check_incomplete(prefix: str | None) -> bool:
    if prefix is None:
        raise IbanFormatError(ErrorKind.IS_NULL)

    _check_country_code(prefix)
    _check_check_digits(prefix)

    if len(prefix) <= IBAN_PREFIX_LENGTH:
        return False

    country_code = get_country_code(prefix)
    max_length = max_length_for(country_code)
    if len(prefix) > max_length:
        raise IbanFormatError(
            ErrorKind.INVALID_LENGTH, value=prefix, actual=len(prefix), expected=max_length
        )

    _check_bban_characters(layout_for(country_code), get_bban(prefix))

    if len(prefix) == max_length:
        validate_iban(prefix)
        return True
    return False


def check_incomplete(prefix: str | None) -> bool:
    """
    Check a possibly incomplete IBAN.

    Returns ``True`` when ``prefix`` is a complete, valid IBAN and ``False``
    when it is a clean prefix that may still become one. Raises a
    ``ValidationError`` subclass at the first character that rules that out.
    """
    try:
        return _check_incomplete(prefix)
    except ValidationError:
        raise
    except Exception as exc:
        raise IbanFormatError(ErrorKind.UNKNOWN, error=str(exc)) from exc
