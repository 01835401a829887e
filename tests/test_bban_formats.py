from __future__ import annotations

import pytest

from bban_formats import (
    LAYOUTS,
    FieldRole,
    FieldType,
    layout_for,
    max_length_for,
    supported_countries,
)
from country_codes import COUNTRIES, country_name, is_known_country


def test_layout_for_germany() -> None:
    layout = layout_for("DE")
    assert layout is not None
    assert layout.length == 18
    assert [spec.role for spec in layout.fields] == [FieldRole.BANK_CODE, FieldRole.ACCOUNT_NUMBER]
    assert all(spec.field_type is FieldType.NUMERIC for spec in layout.fields)


@pytest.mark.parametrize("code", ["ZZ", "US", "de", "", None, "DEU"])
def test_layout_for_unsupported_country_is_none(code) -> None:
    assert layout_for(code) is None
    assert max_length_for(code) is None


@pytest.mark.parametrize(
    "code, expected",
    [("DE", 22), ("GB", 22), ("NO", 15), ("FR", 27), ("MT", 31), ("LC", 32), ("RU", 33)],
)
def test_max_length_for(code: str, expected: int) -> None:
    assert max_length_for(code) == expected


def test_all_layouts_produce_plausible_iban_lengths() -> None:
    for code, layout in LAYOUTS.items():
        assert 15 <= 4 + layout.length <= 34, code
        assert is_known_country(code)


def test_character_types_expand_each_position() -> None:
    layout = layout_for("IT")
    types = layout.character_types()
    assert len(types) == layout.length
    assert types[0] is FieldType.UPPER_ALPHA
    assert set(types[1:11]) == {FieldType.NUMERIC}
    assert set(types[11:]) == {FieldType.ALPHA_NUMERIC}


def test_offsets_are_cumulative() -> None:
    layout = layout_for("IE")
    assert [(spec.role, start, end) for spec, start, end in layout.offsets()] == [
        (FieldRole.BANK_CODE, 0, 4),
        (FieldRole.BRANCH_CODE, 4, 10),
        (FieldRole.ACCOUNT_NUMBER, 10, 18),
    ]


def test_field_at() -> None:
    layout = layout_for("GB")
    assert layout.field_at(0).role is FieldRole.BANK_CODE
    assert layout.field_at(4).role is FieldRole.BRANCH_CODE
    assert layout.field_at(17).role is FieldRole.ACCOUNT_NUMBER
    with pytest.raises(IndexError):
        layout.field_at(18)


def test_country_codes_are_resolvable_after_two_letters() -> None:
    # No code is a prefix of another, so two letters always identify a country.
    for code in COUNTRIES:
        assert len(code) == 2
        assert code.isalpha() and code.isupper()


def test_supported_countries_sorted() -> None:
    countries = supported_countries()
    assert countries == sorted(countries)
    assert "DE" in countries
    assert "US" not in countries


def test_country_name() -> None:
    assert country_name("IE") == "Ireland"
    assert country_name("ZZ") is None
    assert country_name(None) is None


def test_every_layout_country_is_an_assigned_code() -> None:
    for code in supported_countries():
        assert is_known_country(code)
