# state/registry.py
"""
Service Handler Registry

Capability table mapping a service kind to its extractor and reconstructor.
Lookup is case-insensitive; unknown kinds return None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from localstack_mcp.emulator.client import EmulatorClient

from . import extractors, reconstructors
from .models import (
    DynamoDBState,
    ExtractResult,
    LambdaState,
    RestoreResult,
    S3State,
    ServiceState,
    SNSState,
    SQSState,
)

Extractor = Callable[[EmulatorClient, bool], Awaitable[ExtractResult]]
Reconstructor = Callable[[EmulatorClient, Any], Awaitable[RestoreResult]]


@dataclass(frozen=True)
class ServiceHandler:
    kind: str
    state_model: type[ServiceState]
    extract: Extractor
    restore: Reconstructor


SERVICE_HANDLERS: dict[str, ServiceHandler] = {
    handler.kind: handler
    for handler in (
        ServiceHandler("s3", S3State, extractors.extract_s3, reconstructors.restore_s3),
        ServiceHandler(
            "dynamodb", DynamoDBState, extractors.extract_dynamodb, reconstructors.restore_dynamodb
        ),
        ServiceHandler("sqs", SQSState, extractors.extract_sqs, reconstructors.restore_sqs),
        ServiceHandler("sns", SNSState, extractors.extract_sns, reconstructors.restore_sns),
        ServiceHandler(
            "lambda", LambdaState, extractors.extract_lambda, reconstructors.restore_lambda
        ),
    )
}


def get_handler(
    kind: str, handlers: Optional[dict[str, ServiceHandler]] = None
) -> Optional[ServiceHandler]:
    table = SERVICE_HANDLERS if handlers is None else handlers
    return table.get(kind.strip().lower())


def supported_services() -> list[str]:
    return list(SERVICE_HANDLERS)


__all__ = [
    "Extractor",
    "Reconstructor",
    "SERVICE_HANDLERS",
    "ServiceHandler",
    "get_handler",
    "supported_services",
]
