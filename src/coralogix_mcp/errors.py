"""Error types raised by the Coralogix MCP server."""

from typing import List, Optional, Tuple


class CoralogixMCPError(Exception):
    """Base class for all server errors."""


class ConfigurationError(CoralogixMCPError):
    """Invalid startup configuration or tool declaration."""


class ValidationError(CoralogixMCPError):
    """Tool arguments failed schema validation."""

    def __init__(self, tool_name: str, errors: List[Tuple[str, str]]):
        self.tool_name = tool_name
        self.errors = errors
        details = "; ".join(f"{field}: {message}" for field, message in errors)
        super().__init__(f"Invalid arguments for {tool_name}: {details}")

    @property
    def fields(self) -> List[str]:
        return [field for field, _ in self.errors]


class UnknownToolError(CoralogixMCPError):
    """No handler is registered under the requested name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class DataUnavailableError(CoralogixMCPError):
    """Upstream call succeeded but the expected payload was missing."""


class UpstreamError(CoralogixMCPError):
    """Transport failure or non-2xx response from the Coralogix API."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.method = method
        self.path = path
        super().__init__(message)
