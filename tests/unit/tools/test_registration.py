"""Tests for MCP tool registration and the server composition root."""

from __future__ import annotations

import json

import pytest
from mcp.server.fastmcp import FastMCP

from localstack_mcp.capabilities.health_monitor import HealthMonitor
from localstack_mcp.server import SERVER_NAME, create_server
from localstack_mcp.state.manager import StateManager
from localstack_mcp.tools import register_health_tools, register_network_tools, register_state_tools

EXPECTED_TOOLS = {
    "detect_docker_environment",
    "generate_network_config",
    "check_localstack_health",
    "export_localstack_state",
    "import_localstack_state",
}


def _text(result) -> str:
    # call_tool returns content blocks, or (content, structured) on newer mcp releases
    content = result[0] if isinstance(result, tuple) else result
    return content[0].text


@pytest.mark.asyncio
async def test_server_registers_all_tools():
    mcp = create_server()
    assert mcp.name == SERVER_NAME
    tools = await mcp.list_tools()
    assert {tool.name for tool in tools} == EXPECTED_TOOLS


@pytest.mark.asyncio
async def test_network_tool_returns_json():
    mcp = FastMCP("test")
    register_network_tools(mcp)

    result = await mcp.call_tool("generate_network_config", {"container_name": "ls", "services": ["s3"]})

    config = json.loads(_text(result))
    assert config["networkingGuide"]["containerToContainer"]["endpoint"] == "http://ls:4566"


@pytest.mark.asyncio
async def test_health_tool_returns_json(client_factory):
    mcp = FastMCP("test")
    register_health_tools(mcp, HealthMonitor(client_factory=client_factory))

    result = await mcp.call_tool("check_localstack_health", {"endpoint": "http://localstack.test:4566"})

    assert json.loads(_text(result))["overall"] == "healthy"


@pytest.mark.asyncio
async def test_state_tools_round_trip(client_factory, fake_localstack, tmp_path):
    mcp = FastMCP("test")
    register_state_tools(mcp, StateManager(client_factory=client_factory))
    fake_localstack.buckets["assets"] = []
    path = str(tmp_path / "state.yml")

    exported = json.loads(
        _text(await mcp.call_tool("export_localstack_state", {"services": ["s3"], "output_path": path}))
    )
    fake_localstack.buckets.clear()
    imported = json.loads(_text(await mcp.call_tool("import_localstack_state", {"state_path": path})))

    assert exported["success"] is True
    assert imported["summary"]["importedResources"] == 1
    assert "assets" in fake_localstack.buckets
