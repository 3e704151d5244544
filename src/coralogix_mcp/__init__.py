"""Coralogix MCP - Coralogix observability data exposed as MCP tools.

Tool groups:
- Alerts (list, details)
- Logs (search, service discovery)
- Metrics (queries)
- Traces (search with service/operation filters)
- DataPrime (direct queries)
"""

__version__ = "1.0.0"
