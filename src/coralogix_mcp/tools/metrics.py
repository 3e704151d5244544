"""Coralogix metrics tools."""

from pydantic import Field

from ..coralogix import MetricsApiClient
from ..errors import DataUnavailableError
from .base import MAX_EPOCH_SECONDS, HandlerMap, ToolArguments, build_tool_descriptor, parse_arguments, text_response


class QueryMetricsInput(ToolArguments):
    query: str = Field(description="Coralogix metrics query string")
    from_: float = Field(alias="from", ge=0, le=MAX_EPOCH_SECONDS, description="Start time in epoch seconds")
    to: float = Field(ge=0, le=MAX_EPOCH_SECONDS, description="End time in epoch seconds")


METRICS_TOOLS = (
    build_tool_descriptor(QueryMetricsInput, "query_metrics", "Retrieve metrics data from Coralogix"),
)


def create_metrics_handlers(api_client: MetricsApiClient) -> HandlerMap:
    """Build the metrics handlers around a MetricsApiClient."""

    async def query_metrics(arguments):
        params = parse_arguments(QueryMetricsInput, "query_metrics", arguments)
        response = await api_client.query_metrics(query=params.query, from_=params.from_, to=params.to)
        if response is None:
            raise DataUnavailableError("No metrics data returned")
        return text_response("Metrics data:", response)

    return {"query_metrics": query_metrics}
