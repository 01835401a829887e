"""IBAN/BIC MCP server composed from the validation services."""
from __future__ import annotations

import uvicorn

from config import load_settings
from mcp_framework import ServiceDefinition, attach_request_logger, create_mcp_server, log_interaction
from services import register_bic_service, register_iban_service

services = [
    ServiceDefinition(
        name="iban",
        description="Validate IBANs, compute check digits and extract BBAN fields.",
        register=register_iban_service,
    ),
    ServiceDefinition(
        name="bic",
        description="Validate BIC (SWIFT) codes and split them into their parts.",
        register=register_bic_service,
    ),
]

settings = load_settings()

mcp, http_app = create_mcp_server(services, settings)
if settings.log_requests:
    attach_request_logger(http_app)

log_interaction(
    "startup",
    {"services": [service.name for service in services]},
    {"app": settings.app_name, "host": settings.host, "port": settings.port},
)


if __name__ == "__main__":
    # Streamable HTTP transport; serves on http://<host>:<port>/mcp
    uvicorn.run(
        http_app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )
