"""IBAN validation service for MCP."""
from __future__ import annotations

import re
from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel

from bban_formats import FieldRole, max_length_for
from iban_checker import check_incomplete, iban_length_for
from iban_utils import (
    calculate_check_digits,
    extract_field,
    format_iban,
    normalize_iban,
    validate_iban,
)
from mcp_framework import run_logged
from validation_errors import ValidationError


class IbanResult(BaseModel):
    valid: bool
    normalized_iban: str
    formatted_iban: str | None = None
    country: str | None = None
    check_digits: str | None = None
    bban: str | None = None
    bank_code: str | None = None
    branch_code: str | None = None
    account_number: str | None = None
    national_check_digit: str | None = None
    account_type: str | None = None
    owner_account_type: str | None = None
    identification_number: str | None = None
    reason: str | None = None
    error_kind: str | None = None
    error_details: dict[str, Any] | None = None


class IncompleteIbanResult(BaseModel):
    prefix: str
    complete: bool
    extensible: bool
    max_length: int | None = None
    reason: str | None = None
    error_kind: str | None = None
    error_details: dict[str, Any] | None = None


def _error_fields(exc: ValidationError) -> dict[str, Any]:
    error = exc.to_dict()
    return {"reason": error["message"], "error_kind": error["kind"], "error_details": error["details"]}


def check_iban(iban: str) -> IbanResult:
    """Validate a user-supplied IBAN (spaces and lower case allowed)."""

    normalized = normalize_iban(iban)
    try:
        fields = validate_iban(normalized)
    except ValidationError as exc:
        return IbanResult(
            valid=False,
            normalized_iban=normalized,
            country=normalized[:2] or None,
            **_error_fields(exc),
        )

    return IbanResult(
        valid=True,
        normalized_iban=normalized,
        formatted_iban=format_iban(normalized),
        country=fields.country_code,
        check_digits=fields.check_digits,
        bban=fields.bban,
        bank_code=fields.bank_code,
        branch_code=fields.branch_code,
        account_number=fields.account_number,
        national_check_digit=fields.national_check_digit,
        account_type=fields.account_type,
        owner_account_type=fields.owner_account_type,
        identification_number=fields.identification_number,
        reason="IBAN is valid.",
    )


def compute_check_digits(country_code: str, bban: str) -> dict[str, str]:
    country_code = country_code.strip().upper()
    bban = normalize_iban(bban)
    check_digits = calculate_check_digits(country_code, bban)
    return {
        "country_code": country_code,
        "bban": bban,
        "check_digits": check_digits,
        "iban": f"{country_code}{check_digits}{bban}",
    }


def get_iban_field(iban: str, role: str) -> dict[str, str | None]:
    normalized = normalize_iban(iban)
    try:
        field_role = FieldRole(role.strip().lower().replace(" ", "_"))
    except ValueError as exc:
        allowed = ", ".join(item.value for item in FieldRole)
        raise ValueError(f"Unknown field role {role!r}. Supported roles: {allowed}.") from exc
    return {
        "iban": normalized,
        "role": field_role.value,
        "value": extract_field(normalized, field_role),
    }


def check_incomplete_iban(prefix: str) -> IncompleteIbanResult:
    """Classify an IBAN that may still be in the process of being typed."""

    prefix = re.sub(r"\s+", "", prefix or "")
    try:
        complete = check_incomplete(prefix)
    except ValidationError as exc:
        return IncompleteIbanResult(
            prefix=prefix,
            complete=False,
            extensible=False,
            max_length=iban_length_for(prefix),
            **_error_fields(exc),
        )

    return IncompleteIbanResult(
        prefix=prefix,
        complete=complete,
        extensible=not complete,
        max_length=iban_length_for(prefix),
    )


def lookup_max_length(country_code: str) -> dict[str, Any]:
    country_code = country_code.strip().upper()
    max_length = max_length_for(country_code)
    return {
        "country_code": country_code,
        "supported": max_length is not None,
        "max_length": max_length,
    }


def register_iban_service(mcp: FastMCP) -> None:
    """Register IBAN validation tools on the provided MCP instance."""

    @mcp.tool()
    def iban_check(iban: str) -> IbanResult:
        """
        Validate an IBAN and return its components.

        Args:
            iban: IBAN string (can contain spaces, lower/upper case)
        """

        return run_logged("iban_check", {"iban": iban}, lambda: check_iban(iban))

    @mcp.tool()
    def iban_check_digits(country_code: str, bban: str) -> dict[str, str]:
        """Calculate the two mod-97 check digits for a country code and BBAN."""

        return run_logged(
            "iban_check_digits",
            {"country_code": country_code, "bban": bban},
            lambda: compute_check_digits(country_code, bban),
        )

    @mcp.tool()
    def iban_field(iban: str, role: str) -> dict[str, str | None]:
        """
        Extract one BBAN field from a valid IBAN.

        Roles: bank_code, branch_code, account_number, national_check_digit,
        account_type, owner_account_type, identification_number.
        """

        return run_logged(
            "iban_field", {"iban": iban, "role": role}, lambda: get_iban_field(iban, role)
        )

    @mcp.tool()
    def iban_check_incomplete(prefix: str) -> IncompleteIbanResult:
        """
        Check an IBAN as it is typed.

        ``complete`` is true once the full IBAN validates; ``extensible`` is
        true while the prefix can still become a valid IBAN.
        """

        return run_logged(
            "iban_check_incomplete", {"prefix": prefix}, lambda: check_incomplete_iban(prefix)
        )

    @mcp.tool()
    def iban_max_length(country_code: str) -> dict[str, Any]:
        """Return the full IBAN length used by a country, if it issues IBANs."""

        return run_logged(
            "iban_max_length",
            {"country_code": country_code},
            lambda: lookup_max_length(country_code),
        )
