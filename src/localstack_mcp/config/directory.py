# config/directory.py
"""
Configuration Directory Management

Resolves the directory holding settings.yaml, in priority order:
1. set_conf_dir() (called by the CLI for --conf)
2. --conf / --conf=<dir> on the command line
3. $LOCALSTACK_MCP_CONF
4. $XDG_CONFIG_HOME/localstack-mcp (default ~/.config/localstack-mcp)

Usage:
    from localstack_mcp.config.directory import get_conf_dir, set_conf_dir
"""

from __future__ import annotations

import os
import sys
import threading
from pathlib import Path

_CONF_DIR: str | None = None
_conf_dir_lock = threading.Lock()


def set_conf_dir(path: str | None) -> None:
    """Set (or clear, with None) the configuration directory."""
    global _CONF_DIR
    with _conf_dir_lock:
        _CONF_DIR = path


def _parse_cli_conf(args: list[str]) -> str | None:
    for i, arg in enumerate(args):
        if arg == "--conf" and i + 1 < len(args):
            return args[i + 1]
        if arg.startswith("--conf="):
            return arg.split("=", 1)[1]
    return None


def get_conf_dir() -> Path:
    """Get the configuration directory."""
    if _CONF_DIR is not None:
        return Path(_CONF_DIR).expanduser()

    cli_conf = _parse_cli_conf(sys.argv)
    if cli_conf:
        return Path(cli_conf).expanduser()

    env_conf = os.environ.get("LOCALSTACK_MCP_CONF")
    if env_conf:
        return Path(env_conf).expanduser()

    xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(xdg) / "localstack-mcp"


__all__ = ["get_conf_dir", "set_conf_dir"]
