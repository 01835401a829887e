"""Helpers for composing the IBAN FastMCP server from reusable services."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, TypeVar

from fastmcp import FastMCP
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from config import Settings

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")


@dataclass
class ServiceDefinition:
    """Describe a service that can register tools on a FastMCP instance."""

    name: str
    description: str
    register: Callable[[FastMCP], None]


def _to_loggable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return data


def log_interaction(action: str, input_data: Any, output_data: Any) -> None:
    """Emit a structured log entry via the standard uvicorn logger (JSON Lines)."""

    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "action": action,
        "input": _to_loggable(input_data),
        "output": _to_loggable(output_data),
    }

    try:
        serialized = json.dumps(entry, ensure_ascii=False)
    except TypeError:
        sanitized_entry = {
            "timestamp": entry["timestamp"],
            "action": entry["action"],
            "input": json.loads(json.dumps(entry["input"], default=str)),
            "output": json.loads(json.dumps(entry["output"], default=str)),
        }
        serialized = json.dumps(sanitized_entry, ensure_ascii=False)

    logger.info(serialized)


def run_logged(action: str, input_data: dict[str, Any], call: Callable[[], T]) -> T:
    """Run a tool body, logging its result or the exception it raised."""

    try:
        result = call()
    except Exception as exc:
        log_interaction(
            f"{action}_error",
            input_data,
            {"error": str(exc), "type": exc.__class__.__name__},
        )
        raise

    log_interaction(action, input_data, result)
    return result


def create_mcp_server(services: Iterable[ServiceDefinition], settings: Settings):
    """Create an MCP server instance and register all provided services."""

    mcp = FastMCP(settings.app_name)

    for service in services:
        service.register(mcp)

    app = mcp.http_app(json_response=settings.json_response)
    return mcp, app


def attach_request_logger(app, *, action: str = "http_request") -> None:
    """Attach middleware that logs incoming HTTP requests and responses."""

    class RequestLoggerMiddleware(BaseHTTPMiddleware):
        def __init__(self, app):
            super().__init__(app)
            self.action = action

        async def dispatch(
            self, request: Request, call_next: RequestResponseEndpoint
        ) -> Response:
            request_body = await request.body()
            request_info: dict[str, Any] = {
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            }

            if request_body:
                try:
                    payload = json.loads(request_body.decode("utf-8"))
                    if isinstance(payload, dict):
                        request_info["jsonrpc_method"] = payload.get("method")
                        params = payload.get("params")
                        if isinstance(params, dict):
                            request_info["tool"] = params.get("name")
                except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                    request_info["body_parse_error"] = str(exc)

            response: Response | None = None
            error_detail: dict[str, Any] | None = None

            try:
                response = await call_next(request)
                return response
            except Exception as exc:
                error_detail = {"error": str(exc), "type": exc.__class__.__name__}
                raise
            finally:
                output_data: dict[str, Any] = {
                    "status_code": response.status_code if response else None
                }
                if error_detail:
                    output_data.update(error_detail)
                log_interaction(self.action, request_info, output_data)

    app.add_middleware(RequestLoggerMiddleware)
