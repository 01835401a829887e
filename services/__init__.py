"""MCP services exposing the IBAN and BIC validators."""

from .bic_service import register_bic_service
from .iban_service import register_iban_service

__all__ = ["register_iban_service", "register_bic_service"]
