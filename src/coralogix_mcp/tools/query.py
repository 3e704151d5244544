"""Coralogix DataPrime query tools."""

from pydantic import Field

from ..coralogix import QueryApiClient
from ..errors import DataUnavailableError
from .base import MAX_EPOCH_SECONDS, HandlerMap, ToolArguments, build_tool_descriptor, parse_arguments, text_response


class DataPrimeQueryInput(ToolArguments):
    query: str = Field(min_length=1, description="DataPrime query (e.g., \"source logs | filter $m.severity == ERROR\")")
    from_: float = Field(alias="from", ge=0, le=MAX_EPOCH_SECONDS, description="Start time in epoch seconds")
    to: float = Field(ge=0, le=MAX_EPOCH_SECONDS, description="End time in epoch seconds")


QUERY_TOOLS = (
    build_tool_descriptor(
        DataPrimeQueryInput,
        "execute_dataprime_query",
        "Run a DataPrime query against Coralogix data",
    ),
)


def create_query_handlers(api_client: QueryApiClient) -> HandlerMap:
    """Build the DataPrime handlers around a QueryApiClient."""

    async def execute_dataprime_query(arguments):
        params = parse_arguments(DataPrimeQueryInput, "execute_dataprime_query", arguments)
        response = await api_client.execute_query(query=params.query, from_=params.from_, to=params.to)
        if response is None:
            raise DataUnavailableError("No query results returned")
        return text_response("Query results:", response)

    return {"execute_dataprime_query": execute_dataprime_query}
