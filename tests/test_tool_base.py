"""Tests for argument validation, tool descriptors and the response envelope."""

import json
from typing import Optional

import pytest
from pydantic import Field

from coralogix_mcp.errors import ConfigurationError, ValidationError
from coralogix_mcp.tools.base import ToolArguments, build_tool_descriptor, parse_arguments, text_response
from coralogix_mcp.tools.logs import GetAllServicesInput, GetLogsInput
from coralogix_mcp.tools.traces import SearchTracesInput


def test_defaults_applied_for_missing_optional_fields():
    params = parse_arguments(GetAllServicesInput, "get_all_services", {"from": 1, "to": 2})
    assert params.query == "*"
    assert params.limit == 1000
    assert params.from_ == 1
    assert params.to == 2


def test_declared_values_pass_through_unchanged():
    params = parse_arguments(SearchTracesInput, "search_traces", {
        "query": "error:true",
        "from": 1640995000.5,
        "to": 1640996000,
        "limit": 5,
        "service": "web",
    })
    assert params.query == "error:true"
    assert params.from_ == 1640995000.5
    assert params.limit == 5
    assert params.service == "web"
    assert params.operation is None


def test_undeclared_fields_are_ignored():
    params = parse_arguments(GetLogsInput, "get_logs", {"query": "*", "from": 1, "to": 2, "verbose": True})
    assert not hasattr(params, "verbose")


def test_missing_required_field_is_named():
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", {"query": "*", "to": 2})
    assert exc_info.value.fields == ["from"]
    assert "get_logs" in str(exc_info.value)
    assert "from" in str(exc_info.value)


def test_numbers_are_not_coerced_from_strings():
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", {"query": "*", "from": "1640995000", "to": 2, "limit": "10"})
    assert set(exc_info.value.fields) == {"from", "limit"}


def test_strings_are_not_coerced_from_numbers():
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", {"query": 42, "from": 1, "to": 2})
    assert exc_info.value.fields == ["query"]


def test_limit_must_be_positive():
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", {"query": "*", "from": 1, "to": 2, "limit": 0})
    assert exc_info.value.fields == ["limit"]


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_times_rejected(value):
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", {"query": "*", "from": value, "to": 2})
    assert exc_info.value.fields == ["from"]


def test_out_of_range_times_rejected():
    """Times whose millisecond form would overflow fail validation."""
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(SearchTracesInput, "search_traces", {"query": "", "from": 1e308, "to": -1})
    assert set(exc_info.value.fields) == {"from", "to"}


def test_none_arguments_treated_as_empty():
    with pytest.raises(ValidationError) as exc_info:
        parse_arguments(GetLogsInput, "get_logs", None)
    assert set(exc_info.value.fields) == {"query", "from", "to"}


def test_non_mapping_arguments_rejected():
    with pytest.raises(ValidationError, match="arguments"):
        parse_arguments(GetLogsInput, "get_logs", ["query"])


def test_descriptor_schema_is_introspected():
    descriptor = build_tool_descriptor(GetLogsInput, "get_logs", "Search logs")
    schema = descriptor.to_dict()["inputSchema"]

    assert descriptor.to_dict()["name"] == "get_logs"
    assert schema["type"] == "object"
    assert list(schema["properties"]) == ["query", "from", "to", "limit"]
    assert set(schema["required"]) == {"query", "from", "to"}
    assert schema["properties"]["limit"]["default"] == 100
    assert schema["properties"]["from"]["description"] == "Start time in epoch seconds"


def test_descriptor_to_dict_is_a_copy():
    descriptor = build_tool_descriptor(GetLogsInput, "get_logs", "Search logs")
    descriptor.to_dict()["inputSchema"]["properties"].clear()
    assert "query" in descriptor.to_dict()["inputSchema"]["properties"]


def test_descriptor_requires_name_and_description():
    with pytest.raises(ConfigurationError, match="name"):
        build_tool_descriptor(GetLogsInput, "", "Search logs")
    with pytest.raises(ConfigurationError, match="description"):
        build_tool_descriptor(GetLogsInput, "get_logs", "  ")


def test_descriptor_requires_field_descriptions():
    class Undocumented(ToolArguments):
        query: str = Field(description="Query")
        window: Optional[int] = None

    with pytest.raises(ConfigurationError, match="window"):
        build_tool_descriptor(Undocumented, "undocumented", "Has an undocumented field")


def test_text_response_has_single_text_element():
    response = text_response("Logs data:", [{"message": "hi"}])
    assert len(response.content) == 1
    assert response.content[0].type == "text"
    text = response.content[0].text
    assert text.startswith("Logs data: ")
    assert json.loads(text[len("Logs data: "):]) == [{"message": "hi"}]
