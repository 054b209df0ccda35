"""
localstack_mcp.config - Settings and logging.
"""

from .directory import get_conf_dir, set_conf_dir
from .logging import configure_logging, get_logger
from .settings import Settings, get_setting, get_settings

__all__ = [
    "Settings",
    "configure_logging",
    "get_conf_dir",
    "get_logger",
    "get_setting",
    "get_settings",
    "set_conf_dir",
]
