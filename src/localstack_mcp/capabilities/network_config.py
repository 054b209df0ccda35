# capabilities/network_config.py
"""
Network Configuration Generator

Builds everything needed to run LocalStack next to an application:
a docker-compose document, client environment variables, a networking guide
for host/container/CI access, and a troubleshooting guide.
"""

from __future__ import annotations

from typing import Any, Optional

import yaml

LOCALSTACK_IMAGE = "localstack/localstack:latest"
EDGE_PORT = 4566
DEFAULT_NETWORK = "localstack-network"
DEFAULT_SERVICES = ["s3", "lambda", "sqs", "sns", "dynamodb"]

SERVICE_ENVIRONMENT: dict[str, dict[str, str]] = {
    "lambda": {
        "LAMBDA_EXECUTOR": "docker-reuse",
        "LAMBDA_REMOVE_CONTAINERS": "true",
    },
    "s3": {
        "S3_SKIP_SIGNATURE_VALIDATION": "true",
    },
    "dynamodb": {
        "DYNAMODB_SHARE_DB": "1",
    },
    "sqs": {
        "SQS_ENDPOINT_STRATEGY": "domain",
    },
}


def build_compose(
    container_name: str = "localstack",
    services: Optional[list[str]] = None,
    network_name: str = DEFAULT_NETWORK,
    enable_persistence: bool = True,
    localstack_host: str = "localhost",
) -> dict[str, Any]:
    """docker-compose structure for a single LocalStack container."""
    services = services if services is not None else DEFAULT_SERVICES

    environment = [
        f"SERVICES={','.join(services)}",
        "DEBUG=1",
        "DOCKER_HOST=unix:///var/run/docker.sock",
        f"LOCALSTACK_HOST={localstack_host}",
    ]
    # Persistence keeps state in the project instead of $TMPDIR
    if enable_persistence:
        environment.append("PERSISTENCE=1")
        data_volume = "./localstack-data:/var/lib/localstack"
    else:
        data_volume = "${TMPDIR:-/tmp}/localstack:/var/lib/localstack"

    return {
        "version": "3.8",
        "services": {
            container_name: {
                "container_name": container_name,
                "image": LOCALSTACK_IMAGE,
                "ports": [f"{EDGE_PORT}:{EDGE_PORT}"],
                "environment": environment,
                "volumes": [
                    data_volume,
                    "/var/run/docker.sock:/var/run/docker.sock",
                ],
                "networks": [network_name],
                "healthcheck": {
                    "test": ["CMD", "curl", "-f", f"http://localhost:{EDGE_PORT}/_localstack/health"],
                    "interval": "30s",
                    "timeout": "10s",
                    "retries": 5,
                    "start_period": "30s",
                },
            },
        },
        "networks": {
            network_name: {"driver": "bridge"},
        },
    }


def render_compose(compose: dict[str, Any]) -> str:
    return yaml.safe_dump(compose, sort_keys=False, default_flow_style=False)


def environment_variables(services: list[str]) -> dict[str, str]:
    """Client-side environment for talking to LocalStack."""
    env = {
        "LOCALSTACK_ENDPOINT": f"http://localhost:{EDGE_PORT}",
        "AWS_DEFAULT_REGION": "us-east-1",
        "AWS_ACCESS_KEY_ID": "test",
        "AWS_SECRET_ACCESS_KEY": "test",
        "SERVICES": ",".join(services),
    }
    for service in services:
        env.update(SERVICE_ENVIRONMENT.get(service.lower(), {}))
    return env


def networking_guide(container_name: str = "localstack") -> dict[str, Any]:
    return {
        "containerToContainer": {
            "description": "When accessing LocalStack from other containers",
            "endpoint": f"http://{container_name}:{EDGE_PORT}",
            "note": "Use the container name as hostname",
        },
        "hostToContainer": {
            "description": "When accessing LocalStack from host machine",
            "endpoint": f"http://localhost:{EDGE_PORT}",
            "note": "Use localhost when running on host",
        },
        "cicd": {
            "description": "CI/CD environment configuration",
            "tips": [
                "Use docker-compose for consistent networking",
                "Wait for health check before running tests",
                "Use container names for inter-service communication",
                f"Set LOCALSTACK_HOST={container_name} in CI environment",
            ],
        },
        "platformSpecific": {
            "windows": {
                "wsl2": "Use localhost:4566, ensure Docker Desktop WSL2 integration is enabled",
                "dockerDesktop": "Use localhost:4566, may need to disable Windows Firewall temporarily",
            },
            "macos": {
                "dockerDesktop": "Use localhost:4566, works out of the box",
                "lima": "May need to configure port forwarding",
            },
            "linux": {
                "native": "Use localhost:4566 or 127.0.0.1:4566",
                "docker": "Use docker0 interface IP for advanced setups",
            },
        },
    }


def troubleshooting_guide(
    container_name: str = "localstack", network_name: str = DEFAULT_NETWORK
) -> dict[str, Any]:
    return {
        "commonIssues": {
            "connectionRefused": {
                "symptoms": ["Connection refused to localhost:4566"],
                "solutions": [
                    "Check if LocalStack container is running: docker ps",
                    f"Verify port 4566 is exposed: docker port {container_name}",
                    "Check for port conflicts: netstat -tulpn | grep 4566",
                    "Restart LocalStack container",
                ],
            },
            "endpointResolution": {
                "symptoms": ["Services not accessible", "Endpoint not found"],
                "solutions": [
                    "Verify SERVICES environment variable includes required services",
                    "Check service health: curl http://localhost:4566/_localstack/health",
                    "Ensure proper AWS SDK endpoint configuration",
                    "Verify region is set correctly (default: us-east-1)",
                ],
            },
            "dockerNetworking": {
                "symptoms": ["Container cannot reach LocalStack", "DNS resolution fails"],
                "solutions": [
                    "Ensure containers are on the same network",
                    "Use container name as hostname (not localhost)",
                    "Check Docker network configuration: docker network ls",
                    "Verify LOCALSTACK_HOST environment variable",
                ],
            },
            "performance": {
                "symptoms": ["Slow startup", "Timeouts", "High memory usage"],
                "solutions": [
                    "Limit enabled services to only what you need",
                    "Increase container memory limits",
                    "Use LAMBDA_EXECUTOR=docker-reuse for faster Lambda execution",
                    "Enable DEBUG=0 for production-like performance",
                ],
            },
        },
        "diagnosticCommands": {
            "containerStatus": f"docker ps -a | grep {container_name}",
            "containerLogs": f"docker logs {container_name}",
            "healthCheck": "curl -s http://localhost:4566/_localstack/health | jq",
            "networkInspection": f"docker network inspect {network_name}",
            "portCheck": f"docker port {container_name} 4566",
            "resourceUsage": f"docker stats {container_name} --no-stream",
        },
        "validationSteps": [
            "Verify Docker is running and accessible",
            "Check LocalStack container is running and healthy",
            "Test basic connectivity to port 4566",
            "Validate service-specific endpoints",
            "Confirm AWS SDK configuration",
            "Test end-to-end application workflow",
        ],
    }


def generate_config(
    container_name: str = "localstack",
    services: Optional[list[str]] = None,
    network_name: str = DEFAULT_NETWORK,
    enable_persistence: bool = True,
) -> dict[str, Any]:
    """Full networking configuration bundle for one LocalStack container."""
    services = list(services or [])
    compose = build_compose(container_name, services, network_name, enable_persistence)
    return {
        "dockerCompose": render_compose(compose),
        "environmentVariables": environment_variables(services),
        "networkingGuide": networking_guide(container_name),
        "troubleshooting": troubleshooting_guide(container_name, network_name),
    }


__all__ = [
    "DEFAULT_NETWORK",
    "DEFAULT_SERVICES",
    "build_compose",
    "environment_variables",
    "generate_config",
    "networking_guide",
    "render_compose",
    "troubleshooting_guide",
]
