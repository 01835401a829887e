"""Per-country BBAN structures.

Each supported country maps to an ordered :class:`BbanLayout`: a sequence of
fixed-length, typed fields (bank code, branch code, account number, ...).
Layouts are written in the registry's compact notation, e.g. ``"8n"`` for
eight digits, ``"4a"`` for four upper-case letters and ``"12c"`` for twelve
letters or digits.

A country without a layout is not supported for IBAN. The mapping is built
once at import time and is read-only afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator

from country_codes import is_known_country

# country code + check digits
IBAN_PREFIX_LENGTH = 4


class FieldType(Enum):
    """Character class allowed in a BBAN field."""

    UPPER_ALPHA = "a"
    ALPHA_NUMERIC = "c"
    NUMERIC = "n"


class FieldRole(Enum):
    BANK_CODE = "bank_code"
    BRANCH_CODE = "branch_code"
    ACCOUNT_NUMBER = "account_number"
    NATIONAL_CHECK_DIGIT = "national_check_digit"
    ACCOUNT_TYPE = "account_type"
    OWNER_ACCOUNT_TYPE = "owner_account_type"
    IDENTIFICATION_NUMBER = "identification_number"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class FieldSpec:
    role: FieldRole
    length: int
    field_type: FieldType


@dataclass(frozen=True)
class BbanLayout:
    """Ordered field specification of one country's BBAN."""

    fields: tuple[FieldSpec, ...]

    @property
    def length(self) -> int:
        return sum(spec.length for spec in self.fields)

    def offsets(self) -> Iterator[tuple[FieldSpec, int, int]]:
        """Yield ``(spec, start, end)`` for every field, relative to the BBAN."""

        start = 0
        for spec in self.fields:
            end = start + spec.length
            yield spec, start, end
            start = end

    def character_types(self) -> tuple[FieldType, ...]:
        """Expand the layout into the expected character class of each position."""

        return tuple(spec.field_type for spec in self.fields for _ in range(spec.length))

    def field_at(self, position: int) -> FieldSpec:
        """Return the field covering a BBAN position."""

        for spec, start, end in self.offsets():
            if start <= position < end:
                return spec
        raise IndexError(f"BBAN position {position} is outside a {self.length} character layout")


BANK = FieldRole.BANK_CODE
BRANCH = FieldRole.BRANCH_CODE
ACCOUNT = FieldRole.ACCOUNT_NUMBER
NATIONAL_CHECK = FieldRole.NATIONAL_CHECK_DIGIT
ACCOUNT_TYPE = FieldRole.ACCOUNT_TYPE
OWNER_TYPE = FieldRole.OWNER_ACCOUNT_TYPE
IDENTIFICATION = FieldRole.IDENTIFICATION_NUMBER


def _layout(*entries: tuple[FieldRole, str]) -> BbanLayout:
    fields = []
    for role, notation in entries:
        fields.append(FieldSpec(role, int(notation[:-1]), FieldType(notation[-1])))
    return BbanLayout(tuple(fields))


_LAYOUTS = {
    "AD": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "12c")),
    "AE": _layout((BANK, "3n"), (ACCOUNT, "16c")),
    "AL": _layout((BANK, "3n"), (BRANCH, "4n"), (NATIONAL_CHECK, "1n"), (ACCOUNT, "16c")),
    "AO": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "AT": _layout((BANK, "5n"), (ACCOUNT, "11n")),
    "AZ": _layout((BANK, "4a"), (ACCOUNT, "20c")),
    "BA": _layout((BANK, "3n"), (BRANCH, "3n"), (ACCOUNT, "8n"), (NATIONAL_CHECK, "2n")),
    "BE": _layout((BANK, "3n"), (ACCOUNT, "7n"), (NATIONAL_CHECK, "2n")),
    "BF": _layout((BANK, "5c"), (BRANCH, "5n"), (ACCOUNT, "12n"), (NATIONAL_CHECK, "2n")),
    "BG": _layout((BANK, "4a"), (BRANCH, "4n"), (ACCOUNT_TYPE, "2n"), (ACCOUNT, "8c")),
    "BH": _layout((BANK, "4a"), (ACCOUNT, "14c")),
    "BI": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "BJ": _layout((BANK, "5c"), (BRANCH, "5n"), (ACCOUNT, "12n"), (NATIONAL_CHECK, "2n")),
    "BR": _layout(
        (BANK, "8n"), (BRANCH, "5n"), (ACCOUNT, "10n"), (ACCOUNT_TYPE, "1a"), (OWNER_TYPE, "1c")
    ),
    "BY": _layout((BANK, "4c"), (BRANCH, "4n"), (ACCOUNT, "16c")),
    "CH": _layout((BANK, "5n"), (ACCOUNT, "12c")),
    "CI": _layout((BANK, "5c"), (BRANCH, "5n"), (ACCOUNT, "12n"), (NATIONAL_CHECK, "2n")),
    "CM": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "CR": _layout((BANK, "4n"), (ACCOUNT, "14n")),
    "CV": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "CY": _layout((BANK, "3n"), (BRANCH, "5n"), (ACCOUNT, "16c")),
    "CZ": _layout((BANK, "4n"), (ACCOUNT, "16n")),
    "DE": _layout((BANK, "8n"), (ACCOUNT, "10n")),
    "DJ": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "DK": _layout((BANK, "4n"), (ACCOUNT, "10n")),
    "DO": _layout((BANK, "4c"), (ACCOUNT, "20n")),
    "DZ": _layout((ACCOUNT, "22n")),
    "EE": _layout((BANK, "2n"), (BRANCH, "2n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "1n")),
    "EG": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "17n")),
    "ES": _layout((BANK, "4n"), (BRANCH, "4n"), (NATIONAL_CHECK, "2n"), (ACCOUNT, "10n")),
    "FI": _layout((BANK, "6n"), (ACCOUNT, "7n"), (NATIONAL_CHECK, "1n")),
    "FK": _layout((BANK, "2a"), (ACCOUNT, "12n")),
    "FO": _layout((BANK, "4n"), (ACCOUNT, "9n"), (NATIONAL_CHECK, "1n")),
    "FR": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11c"), (NATIONAL_CHECK, "2n")),
    "GB": _layout((BANK, "4a"), (BRANCH, "6n"), (ACCOUNT, "8n")),
    "GE": _layout((BANK, "2a"), (ACCOUNT, "16n")),
    "GI": _layout((BANK, "4a"), (ACCOUNT, "15c")),
    "GL": _layout((BANK, "4n"), (ACCOUNT, "10n")),
    "GR": _layout((BANK, "3n"), (BRANCH, "4n"), (ACCOUNT, "16c")),
    "GT": _layout((BANK, "4c"), (ACCOUNT, "20c")),
    "HN": _layout((BANK, "4a"), (ACCOUNT, "20n")),
    "HR": _layout((BANK, "7n"), (ACCOUNT, "10n")),
    "HU": _layout((BANK, "3n"), (BRANCH, "4n"), (ACCOUNT, "16n"), (NATIONAL_CHECK, "1n")),
    "IE": _layout((BANK, "4a"), (BRANCH, "6n"), (ACCOUNT, "8n")),
    "IL": _layout((BANK, "3n"), (BRANCH, "3n"), (ACCOUNT, "13n")),
    "IQ": _layout((BANK, "4a"), (BRANCH, "3n"), (ACCOUNT, "12n")),
    "IR": _layout((ACCOUNT, "22n")),
    "IS": _layout((BANK, "4n"), (BRANCH, "2n"), (ACCOUNT, "6n"), (IDENTIFICATION, "10n")),
    "IT": _layout((NATIONAL_CHECK, "1a"), (BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "12c")),
    "JO": _layout((BANK, "4a"), (BRANCH, "4n"), (ACCOUNT, "18c")),
    "KW": _layout((BANK, "4a"), (ACCOUNT, "22c")),
    "KZ": _layout((BANK, "3n"), (ACCOUNT, "13c")),
    "LB": _layout((BANK, "4n"), (ACCOUNT, "20c")),
    "LC": _layout((BANK, "4a"), (ACCOUNT, "24c")),
    "LI": _layout((BANK, "5n"), (ACCOUNT, "12c")),
    "LT": _layout((BANK, "5n"), (ACCOUNT, "11n")),
    "LU": _layout((BANK, "3n"), (ACCOUNT, "13c")),
    "LV": _layout((BANK, "4a"), (ACCOUNT, "13c")),
    "LY": _layout((BANK, "3n"), (BRANCH, "3n"), (ACCOUNT, "15n")),
    "MC": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11c"), (NATIONAL_CHECK, "2n")),
    "MD": _layout((BANK, "2c"), (ACCOUNT, "18c")),
    "ME": _layout((BANK, "3n"), (ACCOUNT, "13n"), (NATIONAL_CHECK, "2n")),
    "MG": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "MK": _layout((BANK, "3n"), (ACCOUNT, "10c"), (NATIONAL_CHECK, "2n")),
    "ML": _layout((BANK, "5c"), (BRANCH, "5n"), (ACCOUNT, "12n"), (NATIONAL_CHECK, "2n")),
    "MN": _layout((BANK, "4n"), (ACCOUNT, "12n")),
    "MR": _layout((BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "MT": _layout((BANK, "4a"), (BRANCH, "5n"), (ACCOUNT, "18c")),
    "MU": _layout((BANK, "6c"), (BRANCH, "2n"), (ACCOUNT, "18c")),
    "MZ": _layout((ACCOUNT, "21n")),
    "NI": _layout((BANK, "4a"), (ACCOUNT, "20n")),
    "NL": _layout((BANK, "4a"), (ACCOUNT, "10n")),
    "NO": _layout((BANK, "4n"), (ACCOUNT, "6n"), (NATIONAL_CHECK, "1n")),
    "OM": _layout((BANK, "3n"), (ACCOUNT, "16c")),
    "PK": _layout((BANK, "4a"), (ACCOUNT, "16c")),
    "PL": _layout((BANK, "3n"), (BRANCH, "4n"), (NATIONAL_CHECK, "1n"), (ACCOUNT, "16n")),
    "PS": _layout((BANK, "4a"), (ACCOUNT, "21c")),
    "PT": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "11n"), (NATIONAL_CHECK, "2n")),
    "QA": _layout((BANK, "4a"), (ACCOUNT, "21c")),
    "RO": _layout((BANK, "4a"), (ACCOUNT, "16c")),
    "RS": _layout((BANK, "3n"), (ACCOUNT, "13n"), (NATIONAL_CHECK, "2n")),
    "RU": _layout((BANK, "9n"), (BRANCH, "5n"), (ACCOUNT, "15c")),
    "SA": _layout((BANK, "2n"), (ACCOUNT, "18c")),
    "SC": _layout((BANK, "4a"), (BRANCH, "4n"), (ACCOUNT, "16n"), (ACCOUNT_TYPE, "3a")),
    "SD": _layout((BANK, "2n"), (ACCOUNT, "12n")),
    "SE": _layout((BANK, "3n"), (ACCOUNT, "17n")),
    "SI": _layout((BANK, "2n"), (BRANCH, "3n"), (ACCOUNT, "8n"), (NATIONAL_CHECK, "2n")),
    "SK": _layout((BANK, "4n"), (ACCOUNT, "16n")),
    "SM": _layout((NATIONAL_CHECK, "1a"), (BANK, "5n"), (BRANCH, "5n"), (ACCOUNT, "12c")),
    "SN": _layout((BANK, "5c"), (BRANCH, "5n"), (ACCOUNT, "12n"), (NATIONAL_CHECK, "2n")),
    "SO": _layout((BANK, "4n"), (BRANCH, "3n"), (ACCOUNT, "12n")),
    "ST": _layout((BANK, "4n"), (BRANCH, "4n"), (ACCOUNT, "13n")),
    "SV": _layout((BANK, "4a"), (ACCOUNT, "20n")),
    "TL": _layout((BANK, "3n"), (ACCOUNT, "14n"), (NATIONAL_CHECK, "2n")),
    "TN": _layout((BANK, "2n"), (BRANCH, "3n"), (ACCOUNT, "15c")),
    "TR": _layout((BANK, "5n"), (NATIONAL_CHECK, "1c"), (ACCOUNT, "16c")),
    "UA": _layout((BANK, "6n"), (ACCOUNT, "19c")),
    "VA": _layout((BANK, "3n"), (ACCOUNT, "15n")),
    "VG": _layout((BANK, "4a"), (ACCOUNT, "16n")),
    "XK": _layout((BANK, "2n"), (BRANCH, "2n"), (ACCOUNT, "10n"), (NATIONAL_CHECK, "2n")),
    "YE": _layout((BANK, "4a"), (BRANCH, "4n"), (ACCOUNT, "18c")),
}

LAYOUTS = MappingProxyType(_LAYOUTS)


def layout_for(country_code: str | None) -> BbanLayout | None:
    """Return the BBAN layout of ``country_code`` or ``None`` when unsupported."""

    if not is_known_country(country_code):
        return None
    return LAYOUTS.get(country_code)


def max_length_for(country_code: str | None) -> int | None:
    """Full IBAN length (country code, check digits and BBAN) for a country."""

    layout = layout_for(country_code)
    if layout is None:
        return None
    return IBAN_PREFIX_LENGTH + layout.length


def supported_countries() -> list[str]:
    return sorted(LAYOUTS)
