"""Coralogix API clients, one per API area."""

import json
import logging
import urllib.parse
from typing import Any, Dict, Optional

import httpx

from .config import CoralogixConfig
from .errors import UpstreamError

logger = logging.getLogger(__name__)


def _to_millis(epoch_seconds: float) -> int:
    return int(epoch_seconds * 1000)


def _error_message(response: httpx.Response) -> str:
    """Pull a readable message out of an error response."""
    text = response.text.strip() if response.text else ""
    if text:
        try:
            body = json.loads(text)
        except json.JSONDecodeError:
            return text
        if isinstance(body, dict):
            for key in ("message", "error"):
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]
        return text
    return f"Coralogix API returned status {response.status_code}"


class CoralogixApiClient:
    """Shared request plumbing for the Coralogix API areas."""

    def __init__(self, config: CoralogixConfig):
        self.config = config

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None if empty)."""
        logger.debug(f"Coralogix request: {method} {path}")
        try:
            async with self.config.client() as client:
                response = await client.request(method, path, params=params, json=json_body)
        except httpx.HTTPError as e:
            logger.error(f"Coralogix API request failed: {method} {path}: {type(e).__name__}: {e}")
            raise UpstreamError(str(e) or type(e).__name__, method=method, path=path)

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Coralogix API error: {response.status_code} for {method} {path}: {message}")
            raise UpstreamError(message, status_code=response.status_code, method=method, path=path)

        if not response.content:
            return None
        try:
            return response.json()
        except json.JSONDecodeError:
            raise UpstreamError(
                f"Coralogix API returned invalid JSON for {path}",
                status_code=response.status_code,
                method=method,
                path=path,
            )


class AlertsApiClient(CoralogixApiClient):
    async def list_alerts(
        self,
        status: Optional[str] = None,
        severity: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> Any:
        params = {
            key: value
            for key, value in {
                "status": status,
                "severity": severity,
                "limit": limit,
                "offset": offset,
            }.items()
            if value is not None
        }
        return await self._request("GET", "/api/v1/alerts", params=params)

    async def get_alert(self, alert_id: str) -> Any:
        return await self._request("GET", f"/api/v1/alerts/{urllib.parse.quote(alert_id, safe='')}")


class LogsApiClient(CoralogixApiClient):
    async def search_logs(self, query: str, from_: float, to: float, limit: int = 100) -> Any:
        return await self._request("POST", "/api/v1/logs/search", json_body={
            "query": query,
            "startTime": _to_millis(from_),
            "endTime": _to_millis(to),
            "limit": limit,
        })

    async def get_services(self) -> Any:
        return await self._request("GET", "/api/v1/services")


class MetricsApiClient(CoralogixApiClient):
    async def query_metrics(self, query: str, from_: float, to: float) -> Any:
        return await self._request("POST", "/api/v1/metrics/query", json_body={
            "query": query,
            "startTime": _to_millis(from_),
            "endTime": _to_millis(to),
        })


class QueryApiClient(CoralogixApiClient):
    """DataPrime direct query API."""

    async def execute_query(self, query: str, from_: float, to: float) -> Any:
        return await self._request("POST", "/api/v1/dataprime/query", json_body={
            "query": query,
            "startTime": _to_millis(from_),
            "endTime": _to_millis(to),
        })


class TracesApiClient(CoralogixApiClient):
    async def search_traces(self, query: str, from_: float, to: float, limit: int = 100) -> Any:
        return await self._request("POST", "/api/v1/traces/search", json_body={
            "query": query,
            "startTime": _to_millis(from_),
            "endTime": _to_millis(to),
            "limit": limit,
        })
