# tools/network.py
"""
Network Tools - docker-compose and environment generation for LocalStack.
"""

from __future__ import annotations

import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from localstack_mcp.capabilities.network_config import DEFAULT_NETWORK, generate_config


def register_network_tools(mcp: FastMCP) -> None:
    """Register network configuration tools."""

    @mcp.tool()
    async def generate_network_config(
        container_name: str = "localstack",
        services: Optional[list[str]] = None,
        network_name: str = DEFAULT_NETWORK,
        enable_persistence: bool = True,
    ) -> str:
        """
        Generate Docker networking configuration for LocalStack.

        Args:
            container_name: LocalStack container name
            services: AWS services to enable
            network_name: Docker network to attach the container to
            enable_persistence: Persist LocalStack state under ./localstack-data

        Returns:
            JSON with docker-compose YAML, environment variables,
            networking guide and troubleshooting guide
        """
        config = generate_config(container_name, services or [], network_name, enable_persistence)
        return json.dumps(config, indent=2)


__all__ = ["register_network_tools"]
