"""Runtime settings for the IBAN MCP server.

Values come from environment variables and fall back to local development
defaults:

* ``IBAN_MCP_APP_NAME`` (defaults to ``"iban-suite"``)
* ``IBAN_MCP_HOST`` (defaults to ``"127.0.0.1"``)
* ``IBAN_MCP_PORT`` (defaults to ``8000``)
* ``IBAN_MCP_LOG_LEVEL`` (defaults to ``"info"``)
* ``IBAN_MCP_JSON_RESPONSE`` (defaults to ``true``)
* ``IBAN_MCP_LOG_REQUESTS`` (defaults to ``true``)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    app_name: str = "iban-suite"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
    json_response: bool = True
    log_requests: bool = True


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _get_port(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc
    if not 0 < port < 65536:
        raise ValueError(f"{name} must be between 1 and 65535, got {port}.")
    return port


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Read settings from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    defaults = Settings()
    return Settings(
        app_name=env.get("IBAN_MCP_APP_NAME", defaults.app_name),
        host=env.get("IBAN_MCP_HOST", defaults.host),
        port=_get_port(env, "IBAN_MCP_PORT", defaults.port),
        log_level=env.get("IBAN_MCP_LOG_LEVEL", defaults.log_level).lower(),
        json_response=_get_bool(env, "IBAN_MCP_JSON_RESPONSE", defaults.json_response),
        log_requests=_get_bool(env, "IBAN_MCP_LOG_REQUESTS", defaults.log_requests),
    )
