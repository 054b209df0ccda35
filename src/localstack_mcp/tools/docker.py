# tools/docker.py
"""
Docker Tools - Environment detection for LocalStack.
"""

from __future__ import annotations

import asyncio
import json
import os
from typing import Optional

from mcp.server.fastmcp import FastMCP

from localstack_mcp.capabilities.docker_detector import DockerDetector


def register_docker_tools(mcp: FastMCP, detector: Optional[DockerDetector] = None) -> None:
    """Register Docker environment detection tools."""
    docker_detector = detector or DockerDetector()

    @mcp.tool()
    async def detect_docker_environment(project_path: Optional[str] = None) -> str:
        """
        Detect Docker environment and container setup for LocalStack.

        Checks the Docker daemon, docker-compose files, an existing LocalStack
        container, the network mode, and which AWS services the project uses.

        Args:
            project_path: Path to the project directory (default: current directory)

        Returns:
            JSON with detection results and a suggested configuration
        """
        path = project_path or os.getcwd()
        result = await asyncio.to_thread(docker_detector.detect_environment, path)
        return json.dumps(result, indent=2)


__all__ = ["register_docker_tools"]
