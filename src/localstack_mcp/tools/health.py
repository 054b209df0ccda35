# tools/health.py
"""
Health Tools - LocalStack health monitoring.
"""

from __future__ import annotations

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from localstack_mcp.capabilities.health_monitor import HealthMonitor


def register_health_tools(mcp: FastMCP, monitor: Optional[HealthMonitor] = None) -> None:
    """Register health check tools."""
    health_monitor = monitor or HealthMonitor()

    @mcp.tool()
    async def check_localstack_health(endpoint: Optional[str] = None) -> str:
        """
        Check LocalStack container health and service status.

        Args:
            endpoint: LocalStack endpoint URL (default: configured endpoint,
                http://localhost:4566)

        Returns:
            JSON with overall status, per-service status, diagnostics and
            recommendations
        """
        return json.dumps(await health_monitor.check_health(endpoint), indent=2)


__all__ = ["register_health_tools"]
