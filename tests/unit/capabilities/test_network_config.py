"""Tests for localstack_mcp.capabilities.network_config."""

from __future__ import annotations

import yaml

from localstack_mcp.capabilities.network_config import (
    DEFAULT_NETWORK,
    build_compose,
    environment_variables,
    generate_config,
    networking_guide,
    troubleshooting_guide,
)


class TestBuildCompose:
    def test_defaults(self):
        compose = build_compose()
        service = compose["services"]["localstack"]

        assert service["image"] == "localstack/localstack:latest"
        assert service["ports"] == ["4566:4566"]
        assert "SERVICES=s3,lambda,sqs,sns,dynamodb" in service["environment"]
        assert service["networks"] == [DEFAULT_NETWORK]
        assert compose["networks"] == {DEFAULT_NETWORK: {"driver": "bridge"}}
        assert service["healthcheck"]["retries"] == 5

    def test_persistence_uses_project_volume(self):
        service = build_compose(enable_persistence=True)["services"]["localstack"]
        assert "PERSISTENCE=1" in service["environment"]
        data_mounts = [v for v in service["volumes"] if v.endswith(":/var/lib/localstack")]
        assert data_mounts == ["./localstack-data:/var/lib/localstack"]

    def test_without_persistence_uses_tmp_volume(self):
        service = build_compose(enable_persistence=False)["services"]["localstack"]
        assert "PERSISTENCE=1" not in service["environment"]
        assert "${TMPDIR:-/tmp}/localstack:/var/lib/localstack" in service["volumes"]

    def test_custom_names(self):
        compose = build_compose("ls-dev", ["s3"], "dev-net", localstack_host="localstack")
        service = compose["services"]["ls-dev"]
        assert service["container_name"] == "ls-dev"
        assert "SERVICES=s3" in service["environment"]
        assert "LOCALSTACK_HOST=localstack" in service["environment"]
        assert "dev-net" in compose["networks"]


class TestEnvironment:
    def test_base_credentials(self):
        env = environment_variables(["s3"])
        assert env["LOCALSTACK_ENDPOINT"] == "http://localhost:4566"
        assert env["AWS_ACCESS_KEY_ID"] == "test"
        assert env["S3_SKIP_SIGNATURE_VALIDATION"] == "true"
        assert "LAMBDA_EXECUTOR" not in env

    def test_service_specific_keys(self):
        env = environment_variables(["Lambda", "dynamodb", "sqs"])
        assert env["LAMBDA_EXECUTOR"] == "docker-reuse"
        assert env["DYNAMODB_SHARE_DB"] == "1"
        assert env["SQS_ENDPOINT_STRATEGY"] == "domain"
        assert env["SERVICES"] == "Lambda,dynamodb,sqs"


class TestGuides:
    def test_networking_guide_uses_container_name(self):
        guide = networking_guide("ls-dev")
        assert guide["containerToContainer"]["endpoint"] == "http://ls-dev:4566"
        assert "Set LOCALSTACK_HOST=ls-dev in CI environment" in guide["cicd"]["tips"]

    def test_troubleshooting_commands(self):
        guide = troubleshooting_guide("ls-dev", "dev-net")
        commands = guide["diagnosticCommands"]
        assert commands["containerLogs"] == "docker logs ls-dev"
        assert commands["networkInspection"] == "docker network inspect dev-net"
        assert set(guide["commonIssues"]) == {
            "connectionRefused",
            "endpointResolution",
            "dockerNetworking",
            "performance",
        }


def test_generate_config_bundle():
    config = generate_config("localstack", ["s3", "sqs"], enable_persistence=True)

    assert set(config) == {"dockerCompose", "environmentVariables", "networkingGuide", "troubleshooting"}
    compose = yaml.safe_load(config["dockerCompose"])
    assert compose["services"]["localstack"]["environment"][0] == "SERVICES=s3,sqs"
    assert config["environmentVariables"]["SERVICES"] == "s3,sqs"
