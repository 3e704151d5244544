"""Routes tool invocations to their handlers."""

import json
import logging
from typing import Any, List, Mapping, Optional

from .errors import ConfigurationError, UnknownToolError
from .registry import ToolRegistry
from .tools.base import Handler, ToolDescriptor, ToolResponse

logger = logging.getLogger(__name__)


def _describe_arguments(arguments: Any) -> str:
    try:
        return json.dumps(arguments)
    except (TypeError, ValueError):
        return repr(arguments)


class ToolDispatcher:
    """Dispatches invocations by tool name.

    Holds only the immutable registry and handler map, so concurrent
    dispatches need no locking. Failures are logged with the tool name and
    arguments, then re-raised unchanged.
    """

    def __init__(self, registry: ToolRegistry, handlers: Mapping[str, Handler]):
        missing = [name for name in registry.names if name not in handlers]
        orphans = [name for name in handlers if name not in registry]
        if missing or orphans:
            raise ConfigurationError(
                f"Handlers do not match registered tools (missing: {missing}, orphan: {orphans})"
            )
        self.registry = registry
        self._handlers = handlers

    def list_tools(self) -> List[ToolDescriptor]:
        return self.registry.list_tools()

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Invoke the named tool.

        Raises:
            UnknownToolError: no tool is registered under ``name``.
            ValidationError, DataUnavailableError, UpstreamError: from the handler.
        """
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            return await handler(arguments)
        except Exception as e:
            logger.error(
                f"Request: {name}, {_describe_arguments(arguments)} failed: {e}",
                exc_info=True,
            )
            raise
