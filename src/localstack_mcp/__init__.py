"""
localstack_mcp - MCP server for LocalStack development environments.

Modules:
- config: settings, conf directory and structlog setup
- emulator: async HTTP client for the LocalStack edge port
- state: snapshot export/import (extractors, reconstructors, YAML codec)
- capabilities: Docker detection, network config generation, health checks
- tools: MCP tool registration
- server: FastMCP composition root
- cli: typer command line
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
