"""
client.py - LocalStack HTTP Client

Thin async wrapper over httpx for the LocalStack edge port.

Every request carries a placeholder SigV4 Authorization header. LocalStack
checks that a signature is present but does not verify it. Transport errors
and non-2xx responses propagate unchanged; there are no retries.

Usage:
    from localstack_mcp.emulator.client import EmulatorClient

    async with EmulatorClient() as client:
        response = await client.call("GET", "/")
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from localstack_mcp.config.logging import get_logger
from localstack_mcp.config.settings import get_setting
from localstack_mcp.errors import EmulatorUnavailableError

logger = get_logger(__name__)

HEALTH_PATH = "/_localstack/health"


def placeholder_authorization(service: str = "s3") -> str:
    """SigV4-shaped header; the credential scope names the target service."""
    return (
        f"AWS4-HMAC-SHA256 Credential=test/20220101/us-east-1/{service}/aws4_request, "
        "SignedHeaders=host;x-amz-date, Signature=test"
    )


class EmulatorClient:
    """Async HTTP client for a LocalStack instance."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            endpoint: Base URL (default: localstack.endpoint setting)
            timeout: Default per-request timeout in seconds
                (default: localstack.request_timeout setting)
            transport: Custom httpx transport (tests pass httpx.MockTransport)
        """
        self.endpoint = (endpoint or get_setting("localstack.endpoint")).rstrip("/")
        if timeout is None:
            timeout = float(get_setting("localstack.request_timeout", 30.0))
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "EmulatorClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.endpoint,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def call(
        self,
        method: str,
        path: str,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        form: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
        service: str = "s3",
    ) -> httpx.Response:
        """Issue a request against the emulator.

        Args:
            method: HTTP method
            path: Path relative to the endpoint
            headers: Extra headers, merged over the placeholder Authorization
            body: JSON body (DynamoDB/Lambda style APIs)
            form: URL-encoded query-protocol parameters (SQS/SNS style APIs)
            params: URL query parameters
            timeout: Override of the default timeout for this request
            service: Service named in the placeholder credential scope

        Raises:
            httpx.TransportError: Emulator unreachable
            httpx.HTTPStatusError: Non-2xx response
        """
        client = await self._ensure_client()
        request_headers = {"Authorization": placeholder_authorization(service)}
        request_headers.update(headers or {})

        kwargs: dict[str, Any] = {"headers": request_headers}
        if body is not None:
            kwargs["json"] = body
        if form is not None:
            kwargs["data"] = form
        if params is not None:
            kwargs["params"] = params
        if timeout is not None:
            kwargs["timeout"] = timeout

        response = await client.request(method, path, **kwargs)
        logger.debug("LocalStack request", method=method, path=path, status=response.status_code)
        response.raise_for_status()
        return response

    async def get_json(self, path: str, timeout: Optional[float] = None) -> dict[str, Any]:
        """GET a LocalStack internal endpoint and decode its JSON body."""
        response = await self.call("GET", path, timeout=timeout)
        data = response.json()
        return data if isinstance(data, dict) else {}

    async def health(self, timeout: Optional[float] = None) -> dict[str, Any]:
        return await self.get_json(HEALTH_PATH, timeout=timeout)

    async def get_version(self) -> str:
        """LocalStack version from the health endpoint, or "unknown"."""
        try:
            health = await self.health()
        except (httpx.HTTPError, ValueError):
            return "unknown"
        return str(health.get("version") or "unknown")

    async def validate_connectivity(self) -> None:
        """Probe the health endpoint with the short connect timeout.

        Raises:
            EmulatorUnavailableError: The health endpoint did not answer 2xx
        """
        timeout = float(get_setting("localstack.connect_timeout", 5.0))
        try:
            await self.call("GET", HEALTH_PATH, timeout=timeout)
        except httpx.HTTPError as e:
            logger.warning("LocalStack unreachable", endpoint=self.endpoint, error=str(e))
            raise EmulatorUnavailableError(endpoint=self.endpoint, reason=str(e)) from e


__all__ = ["EmulatorClient", "HEALTH_PATH", "placeholder_authorization"]
