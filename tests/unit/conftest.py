"""
conftest.py - Shared fixtures for localstack-mcp unit tests

FakeLocalStack answers the subset of the LocalStack edge API the server uses
(S3 REST XML, SQS/SNS query XML, DynamoDB JSON 1.0, Lambda REST JSON and the
/_localstack internal endpoints). It plugs into EmulatorClient through
httpx.MockTransport, so no network or container is involved.

Usage:
    async def test_something(fake_localstack, client_factory):
        fake_localstack.buckets["assets"] = []
        manager = StateManager(client_factory=client_factory)
"""

from __future__ import annotations

import json
from typing import Any, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from localstack_mcp.config.directory import set_conf_dir
from localstack_mcp.config.settings import Settings
from localstack_mcp.emulator.client import EmulatorClient

FAKE_ENDPOINT = "http://localstack.test:4566"
ACCOUNT_ID = "000000000000"

S3_NS = "http://s3.amazonaws.com/doc/2006-03-01/"
SQS_NS = "http://queue.amazonaws.com/doc/2012-11-05/"
SNS_NS = "http://sns.amazonaws.com/doc/2010-03-31/"


class FakeLocalStack:
    """In-memory LocalStack.

    Failure injection:
        unreachable: every request raises httpx.ConnectError
        failing: route keys answered with HTTP 500. Keys are "health",
            "diagnose", "init", "config", "s3", "s3:<bucket>", "s3:create",
            "sqs", "sqs:create", "sns", "dynamodb", "dynamodb:<table>", "lambda"
        raises: route key -> exception raised from the transport instead of
            answering. Also accepts "s3:create:<bucket>" and
            "sqs:create:<queue>"

    Shape overrides:
        s3_page_size: objects per ListObjects page
        table_names: raw ListTables "TableNames" value
        lambda_body: raw JSON body for the function listing
    """

    def __init__(self) -> None:
        self.version = "3.0.2"
        self.services_status: dict[str, str] = {
            "s3": "running",
            "sqs": "running",
            "sns": "available",
            "dynamodb": "running",
            "lambda": "available",
        }
        self.config: dict[str, Any] = {"LAMBDA_EXECUTOR": "docker-reuse"}
        self.buckets: dict[str, list[dict[str, Any]]] = {}
        self.queues: list[str] = []
        self.topics: list[str] = []
        self.tables: dict[str, dict[str, Any]] = {}
        self.functions: list[dict[str, Any]] = []
        self.unreachable = False
        self.failing: set[str] = set()
        self.raises: dict[str, Exception] = {}
        self.s3_page_size = 1000
        self.table_names: Any = None
        self.lambda_body: Any = None
        self.requests: list[httpx.Request] = []

    # -------------------------------------------------------------------------
    # Seeding helpers
    # -------------------------------------------------------------------------

    def add_queue(self, name: str) -> str:
        url = f"http://localhost:4566/{ACCOUNT_ID}/{name}"
        if url not in self.queues:
            self.queues.append(url)
        return url

    def add_table(self, name: str, items: int = 0) -> None:
        self.tables[name] = {
            "TableName": name,
            "TableStatus": "ACTIVE",
            "KeySchema": [{"AttributeName": "id", "KeyType": "HASH"}],
            "AttributeDefinitions": [{"AttributeName": "id", "AttributeType": "S"}],
            "ItemCount": items,
        }

    def add_function(self, name: str, runtime: str = "python3.12") -> None:
        self.functions.append(
            {
                "FunctionName": name,
                "Runtime": runtime,
                "Handler": "app.handler",
                "Description": f"{name} function",
                "Timeout": 30,
                "MemorySize": 128,
            }
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)

        path = request.url.path
        if path.startswith("/_localstack/"):
            return self._internal(path.removeprefix("/_localstack/"))
        if path.startswith("/2015-03-31/functions"):
            return self._lambda(request)
        if request.method == "POST" and path == "/":
            target = request.headers.get("X-Amz-Target")
            if target:
                return self._dynamodb(target.split(".", 1)[1], json.loads(request.content or b"{}"))
            return self._query(parse_qs(request.content.decode()))
        return self._s3(request, path.strip("/"))

    def _error(self, status: int = 500, message: str = "Internal error") -> httpx.Response:
        return httpx.Response(status, text=message)

    def _fault(self, *keys: str) -> Optional[httpx.Response]:
        for key in keys:
            if key in self.raises:
                raise self.raises[key]
            if key in self.failing:
                return self._error()
        return None

    def _internal(self, name: str) -> httpx.Response:
        if name in self.failing:
            return self._error()
        if name == "health":
            return httpx.Response(
                200, json={"services": dict(self.services_status), "version": self.version}
            )
        if name == "diagnose":
            return httpx.Response(200, json={"info": {"version": self.version}})
        if name == "init":
            return httpx.Response(200, json={"completed": {"BOOT": True, "READY": True}})
        if name == "config":
            return httpx.Response(200, json=dict(self.config))
        return self._error(404, "Not Found")

    def _s3(self, request: httpx.Request, bucket: str) -> httpx.Response:
        method = request.method
        if not bucket:
            if "s3" in self.failing:
                return self._error()
            entries = "".join(
                f"<Bucket><Name>{name}</Name><CreationDate>2026-10-01T00:00:00.000Z</CreationDate></Bucket>"
                for name in self.buckets
            )
            return httpx.Response(
                200,
                text=(
                    '<?xml version="1.0" encoding="UTF-8"?>'
                    f'<ListAllMyBucketsResult xmlns="{S3_NS}">'
                    f"<Owner><ID>{ACCOUNT_ID}</ID></Owner><Buckets>{entries}</Buckets>"
                    "</ListAllMyBucketsResult>"
                ),
            )

        if method == "PUT":
            fault = self._fault("s3:create", f"s3:create:{bucket}")
            if fault is not None:
                return fault
            if bucket in self.buckets:
                return self._error(409, "BucketAlreadyOwnedByYou")
            self.buckets[bucket] = []
            return httpx.Response(200)

        fault = self._fault(f"s3:{bucket}")
        if fault is not None:
            return fault
        if bucket not in self.buckets:
            return self._error(404, "NoSuchBucket")
        marker = request.url.params.get("marker")
        remaining = [obj for obj in self.buckets[bucket] if marker is None or obj["key"] > marker]
        page = remaining[: self.s3_page_size]
        truncated = "true" if len(remaining) > len(page) else "false"
        contents = "".join(
            f"<Contents><Key>{obj['key']}</Key><LastModified>2026-10-02T00:00:00.000Z</LastModified>"
            f"<ETag>&quot;{obj.get('etag', 'abc')}&quot;</ETag><Size>{obj['size']}</Size></Contents>"
            for obj in page
        )
        return httpx.Response(
            200,
            text=(
                f'<ListBucketResult xmlns="{S3_NS}"><Name>{bucket}</Name>'
                f"<IsTruncated>{truncated}</IsTruncated>{contents}</ListBucketResult>"
            ),
        )

    def _query(self, form: dict[str, list[str]]) -> httpx.Response:
        action = form.get("Action", [""])[0]
        if action == "ListQueues":
            if "sqs" in self.failing:
                return self._error()
            urls = "".join(f"<QueueUrl>{url}</QueueUrl>" for url in self.queues)
            return httpx.Response(
                200,
                text=(
                    f'<ListQueuesResponse xmlns="{SQS_NS}"><ListQueuesResult>{urls}</ListQueuesResult>'
                    "</ListQueuesResponse>"
                ),
            )
        if action == "CreateQueue":
            name = form["QueueName"][0]
            fault = self._fault("sqs:create", f"sqs:create:{name}")
            if fault is not None:
                return fault
            url = self.add_queue(name)
            return httpx.Response(
                200,
                text=(
                    f'<CreateQueueResponse xmlns="{SQS_NS}"><CreateQueueResult>'
                    f"<QueueUrl>{url}</QueueUrl></CreateQueueResult></CreateQueueResponse>"
                ),
            )
        if action == "ListTopics":
            if "sns" in self.failing:
                return self._error()
            members = "".join(f"<member><TopicArn>{arn}</TopicArn></member>" for arn in self.topics)
            return httpx.Response(
                200,
                text=(
                    f'<ListTopicsResponse xmlns="{SNS_NS}"><ListTopicsResult>'
                    f"<Topics>{members}</Topics></ListTopicsResult></ListTopicsResponse>"
                ),
            )
        return self._error(400, f"Unknown action {action}")

    def _dynamodb(self, operation: str, payload: dict[str, Any]) -> httpx.Response:
        if "dynamodb" in self.failing:
            return self._error()
        if operation == "ListTables":
            names = list(self.tables) if self.table_names is None else self.table_names
            return httpx.Response(200, json={"TableNames": names})
        table_name = payload.get("TableName", "")
        if f"dynamodb:{table_name}" in self.failing:
            return self._error()
        table = self.tables.get(table_name)
        if table is None:
            return self._error(400, "ResourceNotFoundException")
        if operation == "DescribeTable":
            return httpx.Response(200, json={"Table": table})
        if operation == "Scan":
            return httpx.Response(200, json={"Count": table["ItemCount"], "ScannedCount": table["ItemCount"]})
        return self._error(400, f"Unknown operation {operation}")

    def _lambda(self, request: httpx.Request) -> httpx.Response:
        if "lambda" in self.failing:
            return self._error()
        if self.lambda_body is not None:
            return httpx.Response(200, json=self.lambda_body)
        return httpx.Response(200, json={"Functions": list(self.functions)})


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at an empty conf dir so user config never leaks in."""
    monkeypatch.delenv("LOCALSTACK_ENDPOINT", raising=False)
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    set_conf_dir(str(conf_dir))
    Settings().reload()
    yield conf_dir
    set_conf_dir(None)
    Settings().reload()


@pytest.fixture
def fake_localstack() -> FakeLocalStack:
    return FakeLocalStack()


@pytest.fixture
def client_factory(fake_localstack):
    """Zero-argument factory, as StateManager expects."""

    def factory(endpoint: Optional[str] = None) -> EmulatorClient:
        return EmulatorClient(endpoint=endpoint or FAKE_ENDPOINT, transport=fake_localstack.transport())

    return factory


@pytest.fixture
def emulator_client(client_factory) -> EmulatorClient:
    return client_factory()
