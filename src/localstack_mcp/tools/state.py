# tools/state.py
"""
State Tools - LocalStack snapshot export/import

Tools:
    export_localstack_state: Write selected services' resources to a YAML snapshot
    import_localstack_state: Recreate resources from a snapshot

Both return JSON documents with a `success` flag. Fatal errors come back as
`error` + `troubleshooting` instead of being raised to the MCP client.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from localstack_mcp.config.logging import get_logger
from localstack_mcp.config.settings import get_setting
from localstack_mcp.errors import LocalStackMCPError
from localstack_mcp.state.manager import (
    EXPORT_TROUBLESHOOTING,
    IMPORT_TROUBLESHOOTING,
    StateManager,
)

logger = get_logger(__name__)


def _failure(e: Exception, troubleshooting: list[str]) -> dict[str, Any]:
    result: dict[str, Any] = {
        "success": False,
        "error": str(e),
        "troubleshooting": list(troubleshooting),
    }
    if isinstance(e, LocalStackMCPError) and e.code is not None:
        result["errorCode"] = e.code.value
    return result


async def run_export(
    manager: StateManager,
    services: Optional[list[str]] = None,
    output_path: Optional[str] = None,
    include_data: bool = True,
) -> dict[str, Any]:
    """Export tool body; an empty service list means state.default_services."""
    requested = list(services) if services else list(get_setting("state.default_services", []))
    try:
        summary = await manager.export_state(requested, output_path, include_data)
    except Exception as e:
        logger.error("State export failed", services=requested, error=str(e))
        return _failure(e, EXPORT_TROUBLESHOOTING)

    return {
        "success": True,
        "exportPath": summary.export_path,
        "summary": summary.to_document(),
    }


async def run_import(manager: StateManager, state_path: str) -> dict[str, Any]:
    """Import tool body."""
    try:
        summary = await manager.import_state(state_path)
    except Exception as e:
        logger.error("State import failed", path=state_path, error=str(e))
        return _failure(e, IMPORT_TROUBLESHOOTING)

    document = summary.to_document()
    recommendations = document.pop("recommendations")
    return {
        "success": True,
        "summary": document,
        "recommendations": recommendations,
    }


def register_state_tools(mcp: FastMCP, manager: Optional[StateManager] = None) -> None:
    """Register snapshot export/import tools."""
    state_manager = manager or StateManager()

    @mcp.tool()
    async def export_localstack_state(
        services: Optional[list[str]] = None,
        output_path: Optional[str] = None,
        include_data: bool = True,
    ) -> str:
        """
        Export LocalStack state for team sharing.

        Args:
            services: Service kinds to include (s3, dynamodb, sqs, sns, lambda).
                Defaults to all supported services.
            output_path: Where to write the YAML snapshot
                (default: localstack-state-<timestamp>.yml)
            include_data: Include per-item metadata (S3 object listings,
                DynamoDB item counts). Object contents are never exported.

        Returns:
            JSON with export path, resource counts and recommendations
        """
        return json.dumps(await run_export(state_manager, services, output_path, include_data), indent=2)

    @mcp.tool()
    async def import_localstack_state(state_path: str) -> str:
        """
        Import LocalStack state from an export file.

        S3 buckets and SQS queues are recreated; DynamoDB tables, SNS topics
        and Lambda functions are reported as skipped.

        Args:
            state_path: Path to the YAML snapshot to import

        Returns:
            JSON with imported/skipped counts, errors and recommendations
        """
        return json.dumps(await run_import(state_manager, state_path), indent=2)


__all__ = ["register_state_tools", "run_export", "run_import"]
