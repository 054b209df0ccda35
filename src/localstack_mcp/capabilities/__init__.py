"""
localstack_mcp.capabilities - Domain logic behind the MCP tools.

Modules:
    docker_detector: Docker/compose/AWS-usage detection
    network_config: docker-compose and environment generation
    health_monitor: LocalStack health polling
"""

from .docker_detector import DockerDetector
from .health_monitor import HealthMonitor
from .network_config import generate_config

__all__ = ["DockerDetector", "HealthMonitor", "generate_config"]
