# state/reconstructors.py
"""
Per-Service Reconstructors

Replay a stored ServiceState into create calls against LocalStack.

Only S3 buckets and SQS queues are recreated. DynamoDB tables, SNS topics and
Lambda functions are reported as skipped: found in the snapshot, not
recreated. Any exception from one create call is a skip for that resource
only; the remaining resources are still attempted.

A state mapping that does not match its model raises pydantic.ValidationError;
the orchestrator records that as a service-level import error.
"""

from __future__ import annotations

from typing import Any

from localstack_mcp.config.logging import get_logger
from localstack_mcp.emulator.client import EmulatorClient

from .extractors import SQS_API_VERSION
from .models import DynamoDBState, LambdaState, RestoreResult, S3State, SNSState, SQSState

logger = get_logger(__name__)

NOT_RECREATED = "recreation is not supported for this service"


def queue_name_from_url(queue_url: str) -> str:
    """http://localhost:4566/000000000000/orders -> orders"""
    return queue_url.rstrip("/").rsplit("/", 1)[-1]


async def restore_s3(client: EmulatorClient, raw_state: Any) -> RestoreResult:
    state = S3State.model_validate(raw_state)
    result = RestoreResult()
    for bucket in state.buckets:
        try:
            await client.call("PUT", f"/{bucket.name}")
        except Exception as e:
            logger.debug("Bucket not created", bucket=bucket.name, error=str(e))
            result.record_skip(bucket.name, str(e))
        else:
            result.record_imported()
    return result


async def restore_sqs(client: EmulatorClient, raw_state: Any) -> RestoreResult:
    state = SQSState.model_validate(raw_state)
    result = RestoreResult()
    for queue_url in state.queues:
        queue_name = queue_name_from_url(queue_url)
        try:
            await client.call(
                "POST",
                "/",
                form={
                    "Action": "CreateQueue",
                    "QueueName": queue_name,
                    "Version": SQS_API_VERSION,
                },
                service="sqs",
            )
        except Exception as e:
            logger.debug("Queue not created", queue=queue_name, error=str(e))
            result.record_skip(queue_name, str(e))
        else:
            result.record_imported()
    return result


def _skip_all(names: list[str]) -> RestoreResult:
    result = RestoreResult()
    for name in names:
        result.record_skip(name, NOT_RECREATED)
    return result


async def restore_dynamodb(client: EmulatorClient, raw_state: Any) -> RestoreResult:
    return _skip_all(DynamoDBState.model_validate(raw_state).resource_names())


async def restore_sns(client: EmulatorClient, raw_state: Any) -> RestoreResult:
    return _skip_all(SNSState.model_validate(raw_state).resource_names())


async def restore_lambda(client: EmulatorClient, raw_state: Any) -> RestoreResult:
    # Needs the deployment package, which snapshots never contain
    return _skip_all(LambdaState.model_validate(raw_state).resource_names())


__all__ = [
    "NOT_RECREATED",
    "queue_name_from_url",
    "restore_dynamodb",
    "restore_lambda",
    "restore_s3",
    "restore_sns",
    "restore_sqs",
]
