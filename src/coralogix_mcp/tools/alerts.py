"""Coralogix alerts tools."""

import logging
from typing import Optional

from pydantic import Field

from ..coralogix import AlertsApiClient
from ..errors import DataUnavailableError
from .base import HandlerMap, ToolArguments, build_tool_descriptor, parse_arguments, text_response

logger = logging.getLogger(__name__)


class ListAlertsInput(ToolArguments):
    status: Optional[str] = Field(default=None, description='Filter alerts by status (e.g., "active", "resolved")')
    severity: Optional[str] = Field(
        default=None,
        description='Filter alerts by severity (e.g., "critical", "warning", "info")',
    )
    limit: int = Field(default=20, ge=1, description="Maximum number of alerts to return")
    offset: int = Field(default=0, ge=0, description="Offset for pagination")


class GetAlertInput(ToolArguments):
    alert_id: str = Field(min_length=1, description="ID of the alert to fetch")


ALERTS_TOOLS = (
    build_tool_descriptor(ListAlertsInput, "list_alerts", "Retrieve a list of alerts from Coralogix"),
    build_tool_descriptor(
        GetAlertInput,
        "get_alert",
        "Retrieve detailed information about a specific Coralogix alert",
    ),
)


def create_alerts_handlers(api_client: AlertsApiClient) -> HandlerMap:
    """Build the alerts handlers around an AlertsApiClient."""

    async def list_alerts(arguments):
        params = parse_arguments(ListAlertsInput, "list_alerts", arguments)
        response = await api_client.list_alerts(
            status=params.status,
            severity=params.severity,
            limit=params.limit,
            offset=params.offset,
        )
        if not isinstance(response, dict) or response.get("alerts") is None:
            raise DataUnavailableError("No alerts data returned")
        return text_response("Alerts:", response["alerts"])

    async def get_alert(arguments):
        params = parse_arguments(GetAlertInput, "get_alert", arguments)
        response = await api_client.get_alert(params.alert_id)
        if response is None:
            raise DataUnavailableError("No alert data returned")
        return text_response("Alert details:", response)

    return {
        "list_alerts": list_alerts,
        "get_alert": get_alert,
    }
