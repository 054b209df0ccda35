# localstack_mcp/server.py
"""
LocalStack MCP Server

Exposes LocalStack environment tooling over MCP:
- Docker environment detection
- Network/docker-compose configuration
- Health monitoring
- State export/import for sharing environments

Run via `localstack-mcp serve` or `python -m localstack_mcp.server` (stdio).
"""

from __future__ import annotations

from typing import Callable, Optional

from mcp.server.fastmcp import FastMCP

from localstack_mcp import __version__
from localstack_mcp.config.logging import configure_logging
from localstack_mcp.config.settings import get_setting
from localstack_mcp.state.manager import StateManager
from localstack_mcp.tools import (
    register_docker_tools,
    register_health_tools,
    register_network_tools,
    register_state_tools,
)
from localstack_mcp.ui import banner, console, tool_failed, tool_registered

SERVER_NAME = "localstack-mcp-server"

INSTRUCTIONS = """LocalStack development environment tools.

- detect_docker_environment: inspect Docker, compose files and project AWS usage
- generate_network_config: docker-compose + environment for LocalStack
- check_localstack_health: service status, diagnostics, recommendations
- export_localstack_state / import_localstack_state: share environments as YAML
"""


def _register_tools(mcp: FastMCP, module_name: str, register_func: Callable[[FastMCP], None]) -> bool:
    """Register one tool module; failures are reported but do not stop startup."""
    try:
        register_func(mcp)
    except Exception as e:
        tool_failed(module_name, str(e))
        return False
    tool_registered(module_name)
    return True


def create_server(manager: Optional[StateManager] = None) -> FastMCP:
    """Build the FastMCP server with all tool modules registered."""
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    _register_tools(mcp, "Docker", register_docker_tools)
    _register_tools(mcp, "Network", register_network_tools)
    _register_tools(mcp, "Health", register_health_tools)
    _register_tools(mcp, "State", lambda server: register_state_tools(server, manager))

    return mcp


def main(transport: str = "stdio") -> None:
    """Configure logging, print the banner on stderr and serve."""
    configure_logging(level=get_setting("logging.level", "INFO"))
    console.print(
        banner(
            f"LocalStack MCP Server v{__version__}",
            f"Endpoint: {get_setting('localstack.endpoint')}",
        )
    )
    mcp = create_server()
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
