"""Coralogix logs tools."""

import logging
from typing import Any, Iterable, List, Optional, Set

from pydantic import Field

from ..coralogix import LogsApiClient
from ..errors import DataUnavailableError, UpstreamError
from .base import MAX_EPOCH_SECONDS, HandlerMap, ToolArguments, build_tool_descriptor, parse_arguments, text_response

logger = logging.getLogger(__name__)


class GetLogsInput(ToolArguments):
    query: str = Field(description="Coralogix logs query string")
    from_: float = Field(alias="from", ge=0, le=MAX_EPOCH_SECONDS, description="Start time in epoch seconds")
    to: float = Field(ge=0, le=MAX_EPOCH_SECONDS, description="End time in epoch seconds")
    limit: int = Field(default=100, ge=1, description="Maximum number of logs to return")


class GetAllServicesInput(ToolArguments):
    query: str = Field(default="*", description="Coralogix logs query string")
    from_: float = Field(alias="from", ge=0, le=MAX_EPOCH_SECONDS, description="Start time in epoch seconds")
    to: float = Field(ge=0, le=MAX_EPOCH_SECONDS, description="End time in epoch seconds")
    limit: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of logs to return for service extraction",
    )


LOGS_TOOLS = (
    build_tool_descriptor(GetLogsInput, "get_logs", "Search and retrieve logs from Coralogix"),
    build_tool_descriptor(
        GetAllServicesInput,
        "get_all_services",
        "Extract all unique service names from logs in Coralogix",
    ),
)


def extract_services(logs: Iterable[Any]) -> List[str]:
    """Collect the distinct service names found in log records, sorted.

    A record's top-level ``service`` wins over ``attributes.service``.
    Records whose service is missing, empty or not a string are skipped.
    """
    services: Set[str] = set()
    for record in logs:
        if not isinstance(record, dict):
            continue
        service = record.get("service")
        if not service:
            attributes = record.get("attributes")
            service = attributes.get("service") if isinstance(attributes, dict) else None
        if isinstance(service, str) and service:
            services.add(service)
        elif service:
            logger.debug(f"Skipping non-string service value: {service!r}")
    return sorted(services)


def create_logs_handlers(api_client: LogsApiClient) -> HandlerMap:
    """Build the logs handlers around a LogsApiClient."""

    async def _search(query: str, from_: float, to: float, limit: int) -> List[Any]:
        response = await api_client.search_logs(query=query, from_=from_, to=to, limit=limit)
        if not isinstance(response, dict) or response.get("logs") is None:
            raise DataUnavailableError("No logs data returned")
        return response["logs"]

    async def _services_from_api() -> Optional[List[str]]:
        """Primary source; None when the services API fails or has nothing."""
        try:
            response = await api_client.get_services()
        except UpstreamError as e:
            logger.warning(f"Services API failed, falling back to log extraction: {e}")
            return None

        services = response.get("services") if isinstance(response, dict) else None
        names = [service for service in services if isinstance(service, str)] if isinstance(services, list) else []
        if not names:
            logger.info("Services API returned no services, falling back to log extraction")
            return None
        return sorted(names)

    async def get_logs(arguments):
        params = parse_arguments(GetLogsInput, "get_logs", arguments)
        logs = await _search(params.query, params.from_, params.to, params.limit)
        return text_response("Logs data:", logs)

    async def get_all_services(arguments):
        params = parse_arguments(GetAllServicesInput, "get_all_services", arguments)

        services = await _services_from_api()
        if services is None:
            logs = await _search(params.query, params.from_, params.to, params.limit)
            services = extract_services(logs)

        return text_response("Services:", services)

    return {
        "get_logs": get_logs,
        "get_all_services": get_all_services,
    }
