"""Coralogix traces tools."""

from typing import Optional

from pydantic import Field

from ..coralogix import TracesApiClient
from ..errors import DataUnavailableError
from .base import MAX_EPOCH_SECONDS, HandlerMap, ToolArguments, build_tool_descriptor, parse_arguments, text_response


class SearchTracesInput(ToolArguments):
    query: str = Field(description="Coralogix trace query string")
    from_: float = Field(alias="from", ge=0, le=MAX_EPOCH_SECONDS, description="Start time in epoch seconds")
    to: float = Field(ge=0, le=MAX_EPOCH_SECONDS, description="End time in epoch seconds")
    limit: int = Field(default=100, ge=1, description="Maximum number of traces to return")
    service: Optional[str] = Field(default=None, description="Filter by service name")
    operation: Optional[str] = Field(default=None, description="Filter by operation name")


TRACES_TOOLS = (
    build_tool_descriptor(SearchTracesInput, "search_traces", "Search and retrieve traces from Coralogix"),
)


def build_trace_query(query: str, service: Optional[str] = None, operation: Optional[str] = None) -> str:
    """Append service/operation filters to a trace query as literal tokens."""
    if service:
        query = f"{query} service:{service}"
    if operation:
        query = f"{query} operation:{operation}"
    return query


def create_traces_handlers(api_client: TracesApiClient) -> HandlerMap:
    """Build the traces handlers around a TracesApiClient."""

    async def search_traces(arguments):
        params = parse_arguments(SearchTracesInput, "search_traces", arguments)
        response = await api_client.search_traces(
            query=build_trace_query(params.query, params.service, params.operation),
            from_=params.from_,
            to=params.to,
            limit=params.limit,
        )
        if not isinstance(response, dict) or response.get("traces") is None:
            raise DataUnavailableError("No traces data returned")
        return text_response("Traces:", response["traces"])

    return {"search_traces": search_traces}
