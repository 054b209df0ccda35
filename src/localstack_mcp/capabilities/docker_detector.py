# capabilities/docker_detector.py
"""
Docker Environment Detector

Inspects the local machine and a project directory to suggest a LocalStack
setup:
- Docker daemon reachable?
- docker-compose file present (and already mentioning localstack)?
- Existing LocalStack container?
- Default network mode
- AWS services referenced by the project's source files

Docker access goes through the docker SDK (docker.from_env); calls are
blocking, so async callers should run detect_environment in a thread.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Callable, Optional

import docker
from docker.errors import DockerException

from localstack_mcp.config.logging import get_logger

from .network_config import build_compose, render_compose

logger = get_logger(__name__)

COMPOSE_FILES = ["docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml"]
SOURCE_EXTENSIONS = (".js", ".ts", ".py", ".json", ".yml", ".yaml")
MAX_SCAN_DEPTH = 3
FALLBACK_SERVICES = ["s3", "lambda", "dynamodb", "sqs"]


def _boto3(name: str) -> str:
    return rf"boto3\.(?:client|resource)\(\s*['\"]{name}['\"]"


SERVICE_PATTERNS: dict[str, re.Pattern[str]] = {
    "s3": re.compile(rf"aws\.s3|S3Client|@aws-sdk/client-s3|{_boto3('s3')}"),
    "lambda": re.compile(rf"aws\.lambda|LambdaClient|@aws-sdk/client-lambda|{_boto3('lambda')}"),
    "dynamodb": re.compile(
        rf"aws\.dynamodb|DynamoDBClient|@aws-sdk/client-dynamodb|{_boto3('dynamodb')}"
    ),
    "sqs": re.compile(rf"aws\.sqs|SQSClient|@aws-sdk/client-sqs|{_boto3('sqs')}"),
    "sns": re.compile(rf"aws\.sns|SNSClient|@aws-sdk/client-sns|{_boto3('sns')}"),
    "apigateway": re.compile(
        rf"aws\.apigateway|APIGatewayClient|@aws-sdk/client-api-gateway|{_boto3('apigateway')}"
    ),
    "cognito": re.compile(
        rf"aws\.cognito|CognitoClient|@aws-sdk/client-cognito|{_boto3('cognito-idp')}"
    ),
    "stepfunctions": re.compile(
        rf"aws\.stepfunctions|SFNClient|@aws-sdk/client-sfn|{_boto3('stepfunctions')}"
    ),
}

# DockerException covers missing sockets; requests' connection errors are OSErrors
DOCKER_ERRORS = (DockerException, OSError)


def find_source_files(root: Path, max_depth: int = MAX_SCAN_DEPTH) -> list[Path]:
    """Source/config files under root, skipping dot-directories and node_modules.

    Raises:
        OSError: root itself cannot be listed
    """
    files: list[Path] = []

    def walk(directory: Path, depth: int) -> None:
        if depth > max_depth:
            return
        try:
            entries = list(os.scandir(directory))
        except OSError:
            if depth == 0:
                raise
            return
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                if not entry.name.startswith(".") and entry.name != "node_modules":
                    walk(Path(entry.path), depth + 1)
            elif entry.is_file() and entry.name.endswith(SOURCE_EXTENSIONS):
                files.append(Path(entry.path))

    walk(root, 0)
    return files


def detect_aws_services(project_path: Path) -> list[str]:
    """AWS services referenced in the project, in SERVICE_PATTERNS order."""
    try:
        files = find_source_files(project_path)
    except OSError as e:
        logger.debug("Project scan failed, using default services", path=str(project_path), error=str(e))
        return list(FALLBACK_SERVICES)

    found: set[str] = set()
    for file in files:
        try:
            content = file.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue
        for service, pattern in SERVICE_PATTERNS.items():
            if service not in found and pattern.search(content):
                found.add(service)

    return [service for service in SERVICE_PATTERNS if service in found]


class DockerDetector:
    """Detects Docker/LocalStack setup for a project."""

    dockerenv_path = Path("/.dockerenv")

    def __init__(self, client_factory: Optional[Callable[[], Any]] = None):
        """
        Args:
            client_factory: Returns a docker client (default: docker.from_env)
        """
        self._client_factory = client_factory or docker.from_env

    def detect_environment(self, project_path: str | os.PathLike) -> dict[str, Any]:
        project = Path(project_path)
        results: dict[str, Any] = {
            "dockerAvailable": False,
            "dockerComposeFound": False,
            "localstackContainer": None,
            "networkMode": "unknown",
            "suggestedConfig": {},
            "issues": [],
        }

        try:
            client = self._client_factory()
            client.ping()
            results["dockerAvailable"] = True
        except DOCKER_ERRORS as e:
            logger.info("Docker not reachable", error=str(e))
            results["issues"].append("Docker is not running or not accessible")
            return results

        existing_compose = self._find_compose_file(project, results)
        results["localstackContainer"] = self._find_localstack_container(client, results)
        results["networkMode"] = self._detect_network_mode(client)
        results["suggestedConfig"] = self._generate_suggestions(
            project, results["dockerComposeFound"], existing_compose
        )
        return results

    def _find_compose_file(self, project: Path, results: dict[str, Any]) -> Optional[str]:
        """Mark the first compose file found; return its name if it mentions localstack."""
        for name in COMPOSE_FILES:
            path = project / name
            if not path.is_file():
                continue
            results["dockerComposeFound"] = True
            try:
                content = path.read_text(encoding="utf-8", errors="ignore")
            except OSError:
                return None
            return name if "localstack" in content else None
        return None

    def _find_localstack_container(self, client: Any, results: dict[str, Any]) -> Optional[dict]:
        try:
            containers = client.containers.list(all=True, sparse=True)
        except DOCKER_ERRORS as e:
            logger.debug("Container listing failed", error=str(e))
            results["issues"].append("Failed to check existing containers")
            return None

        for container in containers:
            attrs = container.attrs
            names = attrs.get("Names") or []
            image = attrs.get("Image") or ""
            if any("localstack" in name for name in names) or "localstack" in image:
                return {
                    "id": attrs.get("Id"),
                    "state": attrs.get("State"),
                    "status": attrs.get("Status"),
                    "ports": attrs.get("Ports") or [],
                    "names": names,
                }
        return None

    def _detect_network_mode(self, client: Any) -> str:
        try:
            networks = client.networks.list(names=["bridge"])
        except DOCKER_ERRORS:
            return "unknown"
        return "bridge" if any(n.name == "bridge" for n in networks) else "host"

    def _generate_suggestions(
        self, project: Path, compose_found: bool, existing_compose: Optional[str]
    ) -> dict[str, Any]:
        env = {
            "LOCALSTACK_HOST": "localhost",
            "EDGE_PORT": "4566",
            "SERVICES": "s3,lambda,sqs,sns,dynamodb",
        }
        suggestions: dict[str, Any] = {
            "recommendedSetup": "docker-compose",
            "environmentVariables": env,
        }
        if existing_compose:
            suggestions["existingComposeFile"] = existing_compose

        if self.dockerenv_path.exists():
            env["LOCALSTACK_HOST"] = "localstack"
            suggestions["note"] = "Detected container environment - using container networking"

        detected = detect_aws_services(project)
        if detected:
            env["SERVICES"] = ",".join(detected)
            suggestions["detectedServices"] = detected

        if not compose_found:
            compose = build_compose(
                services=env["SERVICES"].split(","),
                enable_persistence=False,
                localstack_host=env["LOCALSTACK_HOST"],
            )
            suggestions["dockerComposeTemplate"] = render_compose(compose)

        return suggestions


__all__ = [
    "COMPOSE_FILES",
    "DockerDetector",
    "SERVICE_PATTERNS",
    "detect_aws_services",
    "find_source_files",
]
