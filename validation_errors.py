"""Typed validation errors raised by the IBAN and BIC validators."""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    IS_NULL = "is_null"
    INVALID_LENGTH = "invalid_length"
    COUNTRY_CODE_FORMAT = "country_code_format"
    UNSUPPORTED_COUNTRY = "unsupported_country"
    INVALID_CHECK_DIGIT = "invalid_check_digit"
    FIELD_CHARACTER_CLASS = "field_character_class"
    CASE_FORMAT = "case_format"
    INVALID_CHARACTER = "invalid_character"
    UNKNOWN = "unknown"


class ValidationError(ValueError):
    """Raised when an IBAN or BIC fails validation.

    ``kind`` classifies the failure and ``details`` carries the structured
    context (lengths, positions, offending characters, check digits) needed to
    build a message without re-deriving it.
    """

    subject = "value"

    def __init__(self, kind: ErrorKind, message: str | None = None, **details: Any) -> None:
        self.kind = kind
        self.details = details
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        details = self.details
        if self.kind is ErrorKind.IS_NULL:
            return f"Null or empty input can't be a valid {self.subject}."
        if self.kind is ErrorKind.INVALID_LENGTH:
            expected = details.get("expected")
            if isinstance(expected, (list, tuple)):
                expected = " or ".join(str(item) for item in expected)
            return (
                f"{self.subject} length is {details.get('actual')}, "
                f"expected length is {expected}."
            )
        if self.kind is ErrorKind.COUNTRY_CODE_FORMAT:
            return f"{self.subject} country code must contain two upper case letters."
        if self.kind is ErrorKind.UNSUPPORTED_COUNTRY:
            return f"Country code {details.get('country_code')!r} is not supported."
        if self.kind is ErrorKind.CASE_FORMAT:
            return f"{self.subject} must contain only upper case letters."
        if self.kind is ErrorKind.INVALID_CHARACTER:
            return (
                f"Invalid character {details.get('character')!r} "
                f"at position {details.get('position')}."
            )
        if self.kind is ErrorKind.FIELD_CHARACTER_CLASS:
            return (
                f"{details.get('field', 'field').capitalize()} allows only "
                f"{details.get('expected')}; found {details.get('character')!r} "
                f"at position {details.get('position')}."
            )
        if self.kind is ErrorKind.UNKNOWN:
            return f"Unexpected error while validating {self.subject}: {details.get('error')}"
        return f"Invalid {self.subject}."

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": str(self),
            "details": {key: _plain(value) for key, value in self.details.items()},
        }


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


class IbanFormatError(ValidationError):
    subject = "IBAN"


class BicFormatError(ValidationError):
    subject = "BIC"


class UnsupportedCountryError(ValidationError):
    """The country code is well formed but has no known BBAN structure."""

    subject = "IBAN"

    def __init__(self, country_code: str, message: str | None = None, subject: str | None = None) -> None:
        if subject is not None:
            self.subject = subject
        super().__init__(ErrorKind.UNSUPPORTED_COUNTRY, message, country_code=country_code)
        self.country_code = country_code


class InvalidCheckDigitError(IbanFormatError):
    def __init__(self, iban: str, found: str, expected: str) -> None:
        self.iban = iban
        self.found = found
        self.expected = expected
        super().__init__(
            ErrorKind.INVALID_CHECK_DIGIT,
            f"{iban} has invalid check digits {found}, expected check digits are {expected}.",
            found=found,
            expected=expected,
        )
