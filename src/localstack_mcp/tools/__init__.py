"""
localstack_mcp.tools - MCP tool registration.

Each module exposes register_*_tools(mcp); tools return JSON text.
"""

from .docker import register_docker_tools
from .health import register_health_tools
from .network import register_network_tools
from .state import register_state_tools

__all__ = [
    "register_docker_tools",
    "register_health_tools",
    "register_network_tools",
    "register_state_tools",
]
