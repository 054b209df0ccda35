# capabilities/health_monitor.py
"""
LocalStack Health Monitor

Polls the LocalStack internal endpoints and turns them into a verdict:

    healthy    no service reports "error"
    degraded   some services report "error" (half or fewer)
    unhealthy  more than half report "error", or the health endpoint is down

Only /_localstack/health is required. diagnose, init and config are read
when available and feed the diagnostics and recommendations.
"""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

import httpx

from localstack_mcp.config.logging import get_logger
from localstack_mcp.config.settings import get_setting
from localstack_mcp.emulator.client import EmulatorClient

logger = get_logger(__name__)

HEALTH_TIMEOUT = 5.0
DIAGNOSTIC_TIMEOUT = 3.0
SLOW_RESPONSE_SECONDS = 5.0

CONNECTION_FAILURE_RECOMMENDATIONS = [
    "Verify LocalStack container is running: docker ps | grep localstack",
    "Check if port 4566 is accessible: curl -f http://localhost:4566/_localstack/health",
    "Ensure no firewall is blocking the connection",
    "Verify LocalStack endpoint URL is correct",
    "Check Docker networking configuration",
    "Review LocalStack container logs: docker logs localstack",
]

_PROBE_ERRORS = (httpx.HTTPError, ValueError)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def classify_health(services: list[dict[str, Any]]) -> str:
    unavailable = sum(1 for s in services if s["status"] == "error")
    if unavailable == 0:
        return "healthy"
    if unavailable > len(services) / 2:
        return "unhealthy"
    return "degraded"


class HealthMonitor:
    """Health checks against one LocalStack endpoint."""

    def __init__(self, client_factory: Optional[Callable[[str], EmulatorClient]] = None):
        """
        Args:
            client_factory: Builds a client for an endpoint URL
                (default: EmulatorClient(endpoint=url))
        """
        self._client_factory = client_factory or (lambda url: EmulatorClient(endpoint=url))

    async def perform_health_check(self, endpoint: str) -> dict[str, Any]:
        """Run the full check.

        Raises:
            httpx.HTTPError: The health endpoint is unreachable or non-2xx
        """
        async with self._client_factory(endpoint.rstrip("/")) as client:
            health = await client.health(timeout=HEALTH_TIMEOUT)

            services = [
                {"service": name, "status": status}
                for name, status in (health.get("services") or {}).items()
            ]
            recommendations: list[str] = []

            diagnostics: dict[str, Any] = {}
            try:
                diagnostics = await client.get_json("/_localstack/diagnose", timeout=DIAGNOSTIC_TIMEOUT)
            except _PROBE_ERRORS:
                recommendations.append("Unable to retrieve diagnostic information")

            init_status: dict[str, Any] = {}
            try:
                init_status = await client.get_json("/_localstack/init", timeout=DIAGNOSTIC_TIMEOUT)
            except _PROBE_ERRORS:
                logger.debug("Init endpoint not available", endpoint=endpoint)

            unavailable = sum(1 for s in services if s["status"] == "error")
            disabled = sum(1 for s in services if s["status"] == "disabled")
            if unavailable:
                recommendations.append(
                    f"{unavailable} services are unavailable - check container resources"
                )
            if disabled:
                recommendations.append(
                    f"{disabled} services are disabled - update SERVICES environment variable if needed"
                )

            await self._add_performance_recommendations(client, recommendations)

        return {
            "overall": classify_health(services),
            "version": health.get("version"),
            "services": services,
            "diagnostics": {**diagnostics, "initStatus": init_status},
            "recommendations": recommendations,
            "timestamp": _now(),
        }

    async def _add_performance_recommendations(
        self, client: EmulatorClient, recommendations: list[str]
    ) -> None:
        try:
            start = time.perf_counter()
            await client.health()
            elapsed = time.perf_counter() - start
        except _PROBE_ERRORS:
            recommendations.append("Performance checks failed - container may be under high load")
            return

        if elapsed > SLOW_RESPONSE_SECONDS:
            recommendations.append(
                "High response time detected - consider increasing container memory or reducing enabled services"
            )

        try:
            config = await client.get_json("/_localstack/config")
        except _PROBE_ERRORS:
            return
        if config.get("LAMBDA_EXECUTOR") != "docker-reuse":
            recommendations.append(
                "Consider setting LAMBDA_EXECUTOR=docker-reuse for faster Lambda execution"
            )

    async def check_health(self, endpoint: Optional[str] = None) -> dict[str, Any]:
        """Health report; connection failures become an "unhealthy" report."""
        endpoint = endpoint or get_setting("localstack.endpoint")
        try:
            return await self.perform_health_check(endpoint)
        except _PROBE_ERRORS as e:
            logger.warning("Health check failed", endpoint=endpoint, error=str(e))
            return {
                "overall": "unhealthy",
                "error": str(e),
                "recommendations": list(CONNECTION_FAILURE_RECOMMENDATIONS),
                "timestamp": _now(),
            }

    async def monitor_health(
        self,
        endpoint: str,
        interval_seconds: float = 30.0,
        on_result: Optional[Callable[[dict[str, Any]], Awaitable[None] | None]] = None,
        iterations: Optional[int] = None,
    ) -> None:
        """Repeat check_health every interval_seconds.

        Runs forever unless iterations is given.
        """
        count = 0
        while iterations is None or count < iterations:
            result = await self.check_health(endpoint)
            if on_result is not None:
                maybe_awaitable = on_result(result)
                if asyncio.iscoroutine(maybe_awaitable):
                    await maybe_awaitable
            count += 1
            if iterations is None or count < iterations:
                await asyncio.sleep(interval_seconds)


__all__ = [
    "CONNECTION_FAILURE_RECOMMENDATIONS",
    "HealthMonitor",
    "classify_health",
]
