"""Tool schemas, descriptors and the response envelope shared by all tool groups.

Every tool declares its arguments as a pydantic model deriving from
``ToolArguments``. The model serves three purposes:

- ``build_tool_descriptor`` introspects it into the JSON schema advertised
  to MCP clients, so no tool hand-writes its parameter list
- ``parse_arguments`` validates untrusted invocation arguments against it
  before a handler reads any field
- field descriptions double as caller-facing documentation
"""

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Literal, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigurationError, ValidationError

logger = logging.getLogger(__name__)

ArgsT = TypeVar("ArgsT", bound="ToolArguments")

# 9999-12-31T23:59:59Z; keeps epoch milliseconds finite
MAX_EPOCH_SECONDS = 253402300799


class ToolArguments(BaseModel):
    """Base for tool argument schemas.

    Strict mode keeps numbers and strings from being coerced into each
    other, and infinity/NaN are rejected; undeclared fields are ignored.
    """
    model_config = ConfigDict(
        strict=True, extra="ignore", populate_by_name=True, frozen=True, allow_inf_nan=False
    )


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Success envelope returned by every handler."""
    content: List[TextContent]


def text_response(prefix: str, payload: Any) -> ToolResponse:
    """Wrap a payload as a single text element: ``"<prefix> <json>"``."""
    return ToolResponse(content=[TextContent(text=f"{prefix} {json.dumps(payload)}")])


Handler = Callable[[Optional[Mapping[str, Any]]], Awaitable[ToolResponse]]
HandlerMap = Dict[str, Handler]


@dataclass(frozen=True)
class ToolDescriptor:
    """Introspectable description of one tool."""
    name: str
    description: str
    schema: Type[ToolArguments] = field(repr=False)
    input_schema: Dict[str, Any] = field(repr=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": copy.deepcopy(self.input_schema),
        }


def build_tool_descriptor(schema: Type[ToolArguments], name: str, description: str) -> ToolDescriptor:
    """Combine an argument schema with a tool name and description.

    Raises:
        ConfigurationError: empty name/description, or a schema field
            without a description.
    """
    if not name or not name.strip():
        raise ConfigurationError("Tool name must not be empty")
    if not description or not description.strip():
        raise ConfigurationError(f"Tool {name} must have a description")

    undocumented = [
        field_info.alias or field_name
        for field_name, field_info in schema.model_fields.items()
        if not field_info.description
    ]
    if undocumented:
        raise ConfigurationError(
            f"Tool {name} has fields without descriptions: {', '.join(undocumented)}"
        )

    return ToolDescriptor(
        name=name,
        description=description,
        schema=schema,
        input_schema=schema.model_json_schema(by_alias=True),
    )


def _error_field(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def parse_arguments(schema: Type[ArgsT], tool_name: str, arguments: Optional[Mapping[str, Any]]) -> ArgsT:
    """Validate raw invocation arguments against a tool schema.

    Missing optional fields take their declared defaults.

    Raises:
        ValidationError: naming each offending field and the violated constraint.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError(tool_name, [("arguments", "Input should be an object")])

    try:
        return schema.model_validate(dict(arguments))
    except PydanticValidationError as e:
        errors = [(_error_field(err["loc"]), err["msg"]) for err in e.errors()]
        logger.debug(f"Rejected arguments for {tool_name}: {errors}")
        raise ValidationError(tool_name, errors)
