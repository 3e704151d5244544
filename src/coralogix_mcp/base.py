"""HTTP app, REST bridge and logging setup for the MCP server."""

import logging
from typing import Awaitable, Callable

from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from .dispatcher import ToolDispatcher
from .errors import DataUnavailableError, UnknownToolError, UpstreamError, ValidationError


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure logging with standard format.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured root logger
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    return logging.getLogger(__name__)


def create_rest_bridge(
    dispatcher: ToolDispatcher,
    name: str,
    api_token: str = ""
) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Create a REST endpoint that invokes tools without the MCP protocol.

    Args:
        dispatcher: Dispatcher holding the registered tools
        name: Service name for logging
        api_token: Bearer token required on requests; empty disables auth

    Returns:
        Async endpoint function for the /api/call route
    """
    logger = logging.getLogger(f"{name}.rest_bridge")

    async def api_call(request: Request) -> JSONResponse:
        """REST endpoint to invoke tools via POST.

        Request body:
            {
                "tool": "tool_name",
                "arguments": {"arg1": "value1", ...}
            }

        Response:
            {
                "status": "success" | "error",
                "tool": "tool_name",
                "output": <tool text> | null,
                "error": <error message> | null
            }
        """
        if api_token:
            auth_header = request.headers.get("Authorization", "")
            if not auth_header.startswith("Bearer "):
                return JSONResponse(
                    {"status": "error", "error": "Missing Bearer token"},
                    status_code=401
                )
            if auth_header[7:] != api_token:
                return JSONResponse(
                    {"status": "error", "error": "Invalid token"},
                    status_code=403
                )

        try:
            body = await request.json()
        except ValueError as e:
            return JSONResponse(
                {"status": "error", "error": f"Invalid JSON: {e}"},
                status_code=400
            )

        if not isinstance(body, dict) or not body.get("tool"):
            return JSONResponse(
                {"status": "error", "error": "Missing 'tool' field"},
                status_code=400
            )

        if not isinstance(body["tool"], str):
            return JSONResponse(
                {"status": "error", "error": "'tool' must be a string"},
                status_code=400
            )

        if not isinstance(body.get("arguments") or {}, dict):
            return JSONResponse(
                {"status": "error", "error": "'arguments' must be an object"},
                status_code=400
            )

        tool_name = body["tool"]
        arguments = body.get("arguments") or {}
        logger.info(f"REST bridge call: {tool_name}({arguments})")

        try:
            result = await dispatcher.dispatch(tool_name, arguments)
        except UnknownToolError:
            status_code = 404
            error = f"Tool not found: {tool_name}"
        except ValidationError as e:
            status_code = 400
            error = str(e)
        except (DataUnavailableError, UpstreamError) as e:
            status_code = 502
            error = str(e)
        else:
            return JSONResponse({
                "status": "success",
                "tool": tool_name,
                "output": result.content[0].text
            })

        return JSONResponse({
            "status": "error",
            "tool": tool_name,
            "error": error
        }, status_code=status_code)

    return api_call


def create_starlette_app(
    mcp: FastMCP,
    dispatcher: ToolDispatcher,
    name: str,
    version: str = "1.0.0",
    api_token: str = ""
) -> Starlette:
    """Create a Starlette app with health endpoints, REST bridge and MCP routes.

    Args:
        mcp: FastMCP instance
        dispatcher: Dispatcher backing both the MCP tools and the REST bridge
        name: Service name for health response
        version: Service version for health response
        api_token: Bearer token for /api/call; empty disables auth

    Returns:
        Configured Starlette application
    """

    async def health(request):
        """Basic health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": name,
            "version": version,
            "tools": len(dispatcher.list_tools()),
        })

    async def ready(request):
        """Readiness check endpoint."""
        return JSONResponse({"ready": True})

    # Use http_app() for stateless HTTP MCP transport
    mcp_app = mcp.http_app(stateless_http=True)

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/ready", ready, methods=["GET"]),
        Route("/api/call", create_rest_bridge(dispatcher, name, api_token), methods=["POST"]),
        Mount("/", app=mcp_app),
    ]

    return Starlette(routes=routes, lifespan=mcp_app.lifespan)
