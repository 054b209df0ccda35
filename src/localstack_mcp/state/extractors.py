# state/extractors.py
"""
Per-Service Extractors

Each extractor turns LocalStack list/describe responses into a minimal
ServiceState. They are independent of each other and never raise for emulator
problems:

- kind-level listing fails  -> ExtractResult.degraded(<empty state>)
- one item's detail fails   -> item kept with empty detail, name recorded in
                               ExtractResult.degraded_items
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any, Optional

import httpx

from localstack_mcp.config.logging import get_logger
from localstack_mcp.emulator.client import EmulatorClient
from localstack_mcp.emulator.wire import find_all_text, find_text, parse_xml

from .models import (
    BucketObject,
    BucketRecord,
    DynamoDBState,
    ExtractResult,
    FunctionRecord,
    LambdaState,
    S3State,
    SNSState,
    SQSState,
    TableRecord,
)

logger = get_logger(__name__)

# Failures that mean "the emulator could not answer this call" or answered
# with a shape we cannot read. pydantic.ValidationError is a ValueError.
EMULATOR_ERRORS = (
    httpx.HTTPError,
    httpx.InvalidURL,
    ValueError,
    TypeError,
    KeyError,
    AttributeError,
    ET.ParseError,
)

DYNAMODB_CONTENT_TYPE = "application/x-amz-json-1.0"
SQS_API_VERSION = "2012-11-05"
SNS_API_VERSION = "2010-03-31"
LAMBDA_FUNCTIONS_PATH = "/2015-03-31/functions"


def _int(value: Optional[str]) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


async def _dynamodb(client: EmulatorClient, operation: str, payload: dict[str, Any]) -> dict:
    response = await client.call(
        "POST",
        "/",
        headers={
            "X-Amz-Target": f"DynamoDB_20120810.{operation}",
            "Content-Type": DYNAMODB_CONTENT_TYPE,
        },
        body=payload,
        service="dynamodb",
    )
    data = response.json()
    return data if isinstance(data, dict) else {}


# =============================================================================
# S3
# =============================================================================


async def _list_bucket_objects(client: EmulatorClient, bucket: str) -> list[BucketObject]:
    """All object metadata in a bucket, following ListObjects markers."""
    objects: list[BucketObject] = []
    params: dict[str, str] | None = None
    while True:
        response = await client.call("GET", f"/{bucket}", params=params)
        root = parse_xml(response.text)
        page = [
            BucketObject(
                key=find_text(contents, "Key", ""),
                size=_int(find_text(contents, "Size")),
                last_modified=find_text(contents, "LastModified"),
                etag=find_text(contents, "ETag"),
            )
            for contents in root.findall(".//Contents")
        ]
        objects.extend(page)
        if find_text(root, "IsTruncated", "false").lower() != "true" or not page:
            return objects
        # NextMarker is only sent with a delimiter; otherwise resume after the last key
        params = {"marker": find_text(root, "NextMarker") or page[-1].key}


async def extract_s3(client: EmulatorClient, include_detail: bool) -> ExtractResult:
    """Buckets, plus per-object metadata when include_detail is set."""
    try:
        response = await client.call("GET", "/")
        root = parse_xml(response.text)
    except EMULATOR_ERRORS as e:
        logger.warning("S3 bucket listing failed", error=str(e))
        return ExtractResult.degraded(S3State(), str(e))

    state = S3State()
    degraded_items: list[str] = []
    for bucket in root.findall(".//Buckets/Bucket"):
        name = find_text(bucket, "Name")
        if not name:
            continue
        record = BucketRecord(name=name, creation_date=find_text(bucket, "CreationDate"))
        if include_detail:
            try:
                record.objects = await _list_bucket_objects(client, name)
            except EMULATOR_ERRORS as e:
                logger.debug("Object listing failed", bucket=name, error=str(e))
                degraded_items.append(name)
        state.buckets.append(record)

    return ExtractResult(state=state, degraded_items=degraded_items)


# =============================================================================
# DynamoDB
# =============================================================================


async def _list_table_names(client: EmulatorClient) -> list[Any]:
    names: list[Any] = []
    payload: dict[str, Any] = {}
    while True:
        data = await _dynamodb(client, "ListTables", payload)
        page = data.get("TableNames")
        names.extend(page if isinstance(page, list) else [])
        last = data.get("LastEvaluatedTableName")
        if not last:
            return names
        payload = {"ExclusiveStartTableName": last}


async def extract_dynamodb(client: EmulatorClient, include_detail: bool) -> ExtractResult:
    """Tables with their DescribeTable schema; item counts when include_detail is set."""
    try:
        table_names = await _list_table_names(client)
    except EMULATOR_ERRORS as e:
        logger.warning("DynamoDB table listing failed", error=str(e))
        return ExtractResult.degraded(DynamoDBState(), str(e))

    state = DynamoDBState()
    degraded_items: list[str] = []
    for table_name in table_names:
        record: Optional[TableRecord] = None
        try:
            record = TableRecord(table_name=table_name)
            described = await _dynamodb(client, "DescribeTable", {"TableName": table_name})
            table = described.get("Table")
            record.table_schema = table if isinstance(table, dict) else None
            if include_detail:
                scan = await _dynamodb(client, "Scan", {"TableName": table_name, "Select": "COUNT"})
                record.item_count = int(scan.get("Count") or 0)
        except EMULATOR_ERRORS as e:
            logger.debug("Table detail failed", table=str(table_name), error=str(e))
            degraded_items.append(str(table_name))
            if record is None:
                continue
        state.tables.append(record)

    return ExtractResult(state=state, degraded_items=degraded_items)


# =============================================================================
# SQS / SNS
# =============================================================================


async def extract_sqs(client: EmulatorClient, include_detail: bool) -> ExtractResult:
    """Queue URLs verbatim. No per-queue detail is read."""
    try:
        response = await client.call(
            "POST",
            "/",
            form={"Action": "ListQueues", "Version": SQS_API_VERSION},
            service="sqs",
        )
        queues = find_all_text(parse_xml(response.text), ".//QueueUrl")
    except EMULATOR_ERRORS as e:
        logger.warning("SQS queue listing failed", error=str(e))
        return ExtractResult.degraded(SQSState(), str(e))

    return ExtractResult(state=SQSState(queues=queues))


async def extract_sns(client: EmulatorClient, include_detail: bool) -> ExtractResult:
    """Topic ARNs verbatim."""
    try:
        response = await client.call(
            "POST",
            "/",
            form={"Action": "ListTopics", "Version": SNS_API_VERSION},
            service="sns",
        )
        topics = find_all_text(parse_xml(response.text), ".//TopicArn")
    except EMULATOR_ERRORS as e:
        logger.warning("SNS topic listing failed", error=str(e))
        return ExtractResult.degraded(SNSState(), str(e))

    return ExtractResult(state=SNSState(topics=topics))


# =============================================================================
# Lambda
# =============================================================================


async def extract_lambda(client: EmulatorClient, include_detail: bool) -> ExtractResult:
    """Function configuration without deployment packages."""
    functions: list[FunctionRecord] = []
    params: dict[str, str] | None = None
    try:
        while True:
            response = await client.call("GET", LAMBDA_FUNCTIONS_PATH, params=params, service="lambda")
            data = response.json()
            if not isinstance(data, dict):
                data = {}
            for fn in data.get("Functions") or []:
                functions.append(
                    FunctionRecord(
                        function_name=fn["FunctionName"],
                        runtime=fn.get("Runtime"),
                        handler=fn.get("Handler"),
                        description=fn.get("Description"),
                        timeout=fn.get("Timeout"),
                        memory_size=fn.get("MemorySize"),
                    )
                )
            marker = data.get("NextMarker")
            if not marker:
                break
            params = {"Marker": marker}
    except EMULATOR_ERRORS as e:
        logger.warning("Lambda function listing failed", error=str(e))
        return ExtractResult.degraded(LambdaState(), str(e))

    return ExtractResult(state=LambdaState(functions=functions))


__all__ = [
    "EMULATOR_ERRORS",
    "extract_dynamodb",
    "extract_lambda",
    "extract_s3",
    "extract_sns",
    "extract_sqs",
]
