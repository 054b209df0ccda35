"""
localstack_mcp.state - LocalStack snapshot export/import

Modules:
    models: Snapshot document, per-service states, result shapes
    codec: YAML read/write
    extractors: LocalStack -> ServiceState, one per service kind
    reconstructors: ServiceState -> LocalStack create calls
    registry: service kind -> (extractor, reconstructor)
    manager: StateManager orchestration
"""

from .manager import StateManager
from .models import FORMAT_VERSION, ExportSummary, ImportSummary, Snapshot
from .registry import SERVICE_HANDLERS, get_handler, supported_services

__all__ = [
    "FORMAT_VERSION",
    "SERVICE_HANDLERS",
    "ExportSummary",
    "ImportSummary",
    "Snapshot",
    "StateManager",
    "get_handler",
    "supported_services",
]
