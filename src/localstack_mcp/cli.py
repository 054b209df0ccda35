"""cli.py - Typer Application

Usage:
    localstack-mcp serve                      # MCP server over stdio
    localstack-mcp health --watch             # poll LocalStack health
    localstack-mcp export -s s3 -s sqs -o state.yml
    localstack-mcp import state.yml
"""

from __future__ import annotations

import asyncio
import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import typer

from localstack_mcp import __version__
from localstack_mcp.capabilities.health_monitor import HealthMonitor
from localstack_mcp.config.directory import set_conf_dir
from localstack_mcp.config.logging import configure_logging
from localstack_mcp.config.settings import get_setting, get_settings
from localstack_mcp.state.manager import StateManager
from localstack_mcp.tools.state import run_export, run_import
from localstack_mcp.ui import console, error, key_value_table, success, warning

app = typer.Typer(
    name="localstack-mcp",
    help="LocalStack MCP Server - environment detection, health and state sharing",
    add_completion=False,
)


class TransportMode(str, Enum):
    stdio = "stdio"
    sse = "sse"


@app.callback()
def _configure(
    conf: Optional[Path] = typer.Option(
        None, "--conf", help="Configuration directory containing settings.yaml"
    ),
) -> None:
    if conf is not None:
        set_conf_dir(str(conf))
        get_settings().reload()
    configure_logging(level=get_setting("logging.level", "INFO"))


def _print_json(document: dict[str, Any]) -> None:
    # stdout carries the machine-readable result
    typer.echo(json.dumps(document, indent=2))


@app.command("serve", help="Start the MCP server")
def serve(
    transport: TransportMode = typer.Option(
        TransportMode.stdio, "--transport", "-t", help="MCP transport"
    ),
) -> None:
    from localstack_mcp.server import main as server_main

    server_main(transport.value)


def _show_health(result: dict[str, Any]) -> None:
    overall = result["overall"]
    if overall == "healthy":
        success(f"LocalStack is healthy (version {result.get('version')})")
    elif overall == "degraded":
        warning("LocalStack is degraded")
    else:
        error(f"LocalStack is unhealthy: {result.get('error', 'services unavailable')}")
    for recommendation in result.get("recommendations", []):
        console.print(f"  • {recommendation}")


@app.command("health", help="Check LocalStack health")
def health(
    endpoint: Optional[str] = typer.Option(None, "--endpoint", "-e", help="LocalStack endpoint URL"),
    watch: bool = typer.Option(False, "--watch", "-w", help="Keep polling"),
    interval: float = typer.Option(30.0, "--interval", "-i", help="Polling interval in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the JSON report"),
) -> None:
    monitor = HealthMonitor()

    def report(result: dict[str, Any]) -> None:
        if as_json:
            _print_json(result)
        else:
            _show_health(result)

    if watch:
        target = endpoint or get_setting("localstack.endpoint")
        try:
            asyncio.run(monitor.monitor_health(target, interval, on_result=report))
        except KeyboardInterrupt:
            warning("Stopped")
        return

    result = asyncio.run(monitor.check_health(endpoint))
    report(result)
    if result["overall"] == "unhealthy":
        raise typer.Exit(1)


@app.command("export", help="Export LocalStack state to a YAML snapshot")
def export(
    service: Optional[list[str]] = typer.Option(
        None, "--service", "-s", help="Service kind to export (repeatable)"
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Snapshot path"),
    include_data: bool = typer.Option(True, "--data/--no-data", help="Include per-item detail"),
) -> None:
    result = asyncio.run(run_export(StateManager(), service, output, include_data))
    if not result["success"]:
        error(f"Export failed: {result['error']}")
        for tip in result["troubleshooting"]:
            console.print(f"  • {tip}")
        raise typer.Exit(1)

    summary = result["summary"]
    console.print(key_value_table("Export", summary, skip={"recommendations", "services", "degraded"}))
    for kind, count in summary["services"].items():
        console.print(f"  {kind}: {count}")
    for kind, reason in summary["degraded"].items():
        warning(f"{kind} not exported: {reason}")
    success(f"State written to {result['exportPath']}")


@app.command("import", help="Import LocalStack state from a YAML snapshot")
def import_(
    path: str = typer.Argument(..., help="Snapshot file to import"),
) -> None:
    result = asyncio.run(run_import(StateManager(), path))
    if not result["success"]:
        error(f"Import failed: {result['error']}")
        for tip in result["troubleshooting"]:
            console.print(f"  • {tip}")
        raise typer.Exit(1)

    console.print(key_value_table("Import", result["summary"], skip={"errors"}))
    for message in result["summary"]["errors"]:
        warning(message)
    for recommendation in result["recommendations"]:
        console.print(f"  • {recommendation}")


@app.command("version", help="Show version")
def version() -> None:
    typer.echo(__version__)


def entry_point() -> None:
    """Entry point for the localstack-mcp console script."""
    app()


__all__ = ["app", "entry_point"]
