"""
localstack_mcp.emulator - LocalStack HTTP access.
"""

from .client import HEALTH_PATH, EmulatorClient, placeholder_authorization

__all__ = ["EmulatorClient", "HEALTH_PATH", "placeholder_authorization"]
