"""Configuration for the Coralogix API and the MCP server process."""

import os
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Coralogix region endpoints
CORALOGIX_ENDPOINTS: Dict[str, str] = {
    "EUROPE": "https://api.coralogix.com",
    "EUROPE2": "https://api.eu2.coralogix.com",
    "INDIA": "https://api.app.coralogix.in",
    "US": "https://api.coralogix.us",
    "SINGAPORE": "https://api.coralogixsg.com",
}

DEFAULT_REGION = "EUROPE"
DEFAULT_TIMEOUT = 30.0
TRANSPORTS = ("http", "stdio")


def get_coralogix_endpoint(region: Optional[str] = None) -> str:
    """Resolve a region name to its API base URL (defaults to EUROPE)."""
    if not region:
        return CORALOGIX_ENDPOINTS[DEFAULT_REGION]

    endpoint = CORALOGIX_ENDPOINTS.get(region.upper())
    if endpoint is None:
        raise ConfigurationError(
            f"Invalid region: {region}. "
            f"Valid regions are: {', '.join(CORALOGIX_ENDPOINTS)}"
        )
    return endpoint


@dataclass(frozen=True)
class CoralogixConfig:
    """Connection settings shared by every API client."""
    api_key: str
    base_url: str
    timeout: float = DEFAULT_TIMEOUT
    # Injected by tests to fake the Coralogix API
    transport: Optional[httpx.AsyncBaseTransport] = field(default=None, repr=False)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def client(self) -> httpx.AsyncClient:
        """Create an authenticated client; callers own its lifetime."""
        kwargs: Dict[str, Any] = {
            "base_url": self.base_url,
            "headers": self.headers,
            "timeout": self.timeout,
        }
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)


def create_coralogix_config(
    api_key: str,
    region: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CoralogixConfig:
    """Build a CoralogixConfig for the given key and region."""
    if not api_key:
        raise ConfigurationError("Coralogix API key is required")

    return CoralogixConfig(
        api_key=api_key,
        base_url=get_coralogix_endpoint(region),
        timeout=timeout,
        transport=transport,
    )


def load_coralogix_config(environ: Mapping[str, str] = os.environ) -> CoralogixConfig:
    """Read CORALOGIX_API_KEY, CORALOGIX_REGION and CORALOGIX_TIMEOUT."""
    api_key = environ.get("CORALOGIX_API_KEY", "")
    if not api_key:
        raise ConfigurationError("CORALOGIX_API_KEY must be set")

    raw_timeout = environ.get("CORALOGIX_TIMEOUT", "")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"Invalid CORALOGIX_TIMEOUT: {raw_timeout}")

    config = create_coralogix_config(
        api_key=api_key,
        region=environ.get("CORALOGIX_REGION") or None,
        timeout=timeout,
    )
    logger.info(f"Using Coralogix endpoint {config.base_url}")
    return config


@dataclass(frozen=True)
class ServerSettings:
    """Process-level settings for the MCP server."""
    host: str = "0.0.0.0"
    port: int = 8000
    transport: str = "http"
    log_level: str = "INFO"
    api_token: str = field(default="", repr=False)


def load_server_settings(environ: Mapping[str, str] = os.environ) -> ServerSettings:
    """Read HOST, PORT, MCP_TRANSPORT, LOG_LEVEL and MCP_API_TOKEN."""
    raw_port = environ.get("PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        raise ConfigurationError(f"Invalid PORT: {raw_port}")

    transport = environ.get("MCP_TRANSPORT", "http").lower()
    if transport not in TRANSPORTS:
        raise ConfigurationError(
            f"Invalid MCP_TRANSPORT: {transport}. Valid values are: {', '.join(TRANSPORTS)}"
        )

    return ServerSettings(
        host=environ.get("HOST", "0.0.0.0"),
        port=port,
        transport=transport,
        log_level=environ.get("LOG_LEVEL", "INFO"),
        api_token=environ.get("MCP_API_TOKEN", ""),
    )
