"""Coralogix tool groups."""

from . import alerts
from . import logs
from . import metrics
from . import traces
from . import query

__all__ = ["alerts", "logs", "metrics", "traces", "query"]
