"""Tool registry - the catalog of tools advertised to MCP clients."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Type

from .config import CoralogixConfig
from .coralogix import CoralogixApiClient
from .errors import ConfigurationError
from .tools.base import HandlerMap, ToolDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolGroup:
    """A group of tools backed by one Coralogix API area."""
    name: str
    tools: Tuple[ToolDescriptor, ...]
    client_class: Type[CoralogixApiClient]
    create_handlers: Callable[[Any], HandlerMap]


class ToolRegistry:
    """Immutable name -> descriptor mapping, in registration order."""

    def __init__(self, descriptors: Sequence[ToolDescriptor]):
        by_name: Dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in by_name:
                raise ConfigurationError(f"Duplicate tool name: {descriptor.name}")
            by_name[descriptor.name] = descriptor
        self._tools = MappingProxyType(by_name)

    def list_tools(self) -> List[ToolDescriptor]:
        """All descriptors, group order then declaration order."""
        return list(self._tools.values())

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


def build_registry(groups: Sequence[ToolGroup]) -> ToolRegistry:
    """Concatenate each group's tools into a registry."""
    descriptors = [descriptor for group in groups for descriptor in group.tools]
    registry = ToolRegistry(descriptors)
    logger.debug(f"Registered {len(registry)} tools from {len(groups)} groups")
    return registry


def build_handlers(groups: Sequence[ToolGroup], config: CoralogixConfig) -> Mapping[str, Any]:
    """Construct each group's API client and merge the handler maps.

    Each group's handlers must match its declared tools one-to-one.
    """
    handlers: Dict[str, Any] = {}
    for group in groups:
        group_handlers = group.create_handlers(group.client_class(config))
        declared = {descriptor.name for descriptor in group.tools}
        if set(group_handlers) != declared:
            missing = sorted(declared - set(group_handlers))
            orphans = sorted(set(group_handlers) - declared)
            raise ConfigurationError(
                f"Tool group {group.name} handlers do not match its tools "
                f"(missing: {missing}, orphan: {orphans})"
            )
        for name, handler in group_handlers.items():
            if name in handlers:
                raise ConfigurationError(f"Duplicate tool name: {name}")
            handlers[name] = handler
    return MappingProxyType(handlers)
