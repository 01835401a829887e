"""BIC validation service for MCP."""
from __future__ import annotations

from typing import Any

from fastmcp import FastMCP
from pydantic import BaseModel

from bic_utils import normalize_bic, validate_bic
from mcp_framework import run_logged
from validation_errors import ValidationError


class BicResult(BaseModel):
    valid: bool
    normalized_bic: str
    bank_code: str | None = None
    country: str | None = None
    location_code: str | None = None
    branch_code: str | None = None
    reason: str | None = None
    error_kind: str | None = None
    error_details: dict[str, Any] | None = None


def check_bic(bic: str) -> BicResult:
    """Validate a user-supplied BIC after stripping spaces and upper-casing it."""

    normalized = normalize_bic(bic)
    try:
        fields = validate_bic(normalized)
    except ValidationError as exc:
        error = exc.to_dict()
        return BicResult(
            valid=False,
            normalized_bic=normalized,
            reason=error["message"],
            error_kind=error["kind"],
            error_details=error["details"],
        )

    return BicResult(
        valid=True,
        normalized_bic=normalized,
        bank_code=fields.bank_code,
        country=fields.country_code,
        location_code=fields.location_code,
        branch_code=fields.branch_code,
        reason="BIC is valid.",
    )


def register_bic_service(mcp: FastMCP) -> None:
    """Register BIC validation tools on the provided MCP instance."""

    @mcp.tool()
    def bic_check(bic: str) -> BicResult:
        """
        Validate a BIC (SWIFT code) and return its components.

        Args:
            bic: 8 or 11 character BIC (spaces and lower case are normalized)
        """

        return run_logged("bic_check", {"bic": bic}, lambda: check_bic(bic))
