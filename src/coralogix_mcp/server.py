"""Coralogix MCP Server - Main entry point."""

import logging
from typing import Any, Dict, Sequence

import uvicorn
from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import Field

from . import __version__
from .base import create_starlette_app, setup_logging
from .config import CoralogixConfig, load_coralogix_config, load_server_settings
from .coralogix import AlertsApiClient, LogsApiClient, MetricsApiClient, QueryApiClient, TracesApiClient
from .dispatcher import ToolDispatcher
from .registry import ToolGroup, build_handlers, build_registry
from .tools import alerts, logs, metrics, query, traces

logger = logging.getLogger(__name__)

SERVICE_NAME = "coralogix-mcp"

INSTRUCTIONS = """Coralogix observability tools.

    Provides tools for:
    - **Alerts**: list_alerts, get_alert
    - **Logs**: get_logs, get_all_services
    - **Metrics**: query_metrics
    - **Traces**: search_traces (optional service/operation filters)
    - **DataPrime**: execute_dataprime_query

    All time bounds (`from`, `to`) are epoch seconds.
    """

# Registration order is the order tools are listed in
TOOL_GROUPS: Sequence[ToolGroup] = (
    ToolGroup("alerts", alerts.ALERTS_TOOLS, AlertsApiClient, alerts.create_alerts_handlers),
    ToolGroup("logs", logs.LOGS_TOOLS, LogsApiClient, logs.create_logs_handlers),
    ToolGroup("metrics", metrics.METRICS_TOOLS, MetricsApiClient, metrics.create_metrics_handlers),
    ToolGroup("traces", traces.TRACES_TOOLS, TracesApiClient, traces.create_traces_handlers),
    ToolGroup("query", query.QUERY_TOOLS, QueryApiClient, query.create_query_handlers),
)


def create_dispatcher(config: CoralogixConfig, groups: Sequence[ToolGroup] = TOOL_GROUPS) -> ToolDispatcher:
    """Build the registry and handlers once and wire them into a dispatcher."""
    registry = build_registry(groups)
    handlers = build_handlers(groups, config)
    return ToolDispatcher(registry, handlers)


class DispatchedTool(Tool):
    """FastMCP tool whose calls go through the dispatcher."""
    dispatcher: Any = Field(exclude=True)

    async def run(self, arguments: Dict[str, Any]) -> ToolResult:
        response = await self.dispatcher.dispatch(self.name, arguments)
        return ToolResult(
            content=[TextContent(type="text", text=item.text) for item in response.content]
        )


def create_mcp_server(dispatcher: ToolDispatcher) -> FastMCP:
    """Create a FastMCP server advertising every registered tool."""
    mcp = FastMCP(name=SERVICE_NAME, instructions=INSTRUCTIONS)
    for descriptor in dispatcher.list_tools():
        mcp.add_tool(DispatchedTool(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.to_dict()["inputSchema"],
            dispatcher=dispatcher,
        ))
    return mcp


def main():
    """Run the server."""
    settings = load_server_settings()
    setup_logging(settings.log_level)

    config = load_coralogix_config()
    dispatcher = create_dispatcher(config)
    mcp = create_mcp_server(dispatcher)
    logger.info(f"Registered {len(dispatcher.list_tools())} tools")

    if settings.transport == "stdio":
        logger.info(f"Starting {SERVICE_NAME} on stdio")
        mcp.run(transport="stdio")
        return

    app = create_starlette_app(mcp, dispatcher, SERVICE_NAME, __version__, settings.api_token)
    logger.info(f"Starting {SERVICE_NAME} on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
