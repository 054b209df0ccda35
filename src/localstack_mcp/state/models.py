# state/models.py
"""
Snapshot Data Model

Pydantic models for the snapshot document and the per-service states, plus the
result shapes the extractors and reconstructors report.

On disk every field is camelCase (formatVersion, capturedAt, resourceCount...).
Each ServiceState derives resourceCount from its item list, so a stored count
can never disagree with the list it describes.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

FORMAT_VERSION = "1.0"


class SnapshotModel(BaseModel):
    """Base model: camelCase aliases, construction by field name allowed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Service States
# =============================================================================


class ServiceState(SnapshotModel):
    """Common shape of every service state."""

    items_field: ClassVar[str] = ""

    @abstractmethod
    def resource_names(self) -> List[str]:
        """Natural names of the stored resources, in list order."""

    @computed_field(alias="resourceCount")  # type: ignore[prop-decorator]
    @property
    def resource_count(self) -> int:
        return len(getattr(self, self.items_field))

    @classmethod
    def count_raw(cls, raw: Any) -> int:
        """Count items in a not-yet-validated state mapping."""
        if not isinstance(raw, dict):
            return 0
        items = raw.get(to_camel(cls.items_field), raw.get(cls.items_field))
        return len(items) if isinstance(items, list) else 0


class BucketObject(SnapshotModel):
    """Object metadata only; the payload is never captured."""

    key: str
    size: int = 0
    last_modified: Optional[str] = None
    etag: Optional[str] = None


class BucketRecord(SnapshotModel):
    name: str
    creation_date: Optional[str] = None
    objects: List[BucketObject] = Field(default_factory=list)


class S3State(ServiceState):
    items_field: ClassVar[str] = "buckets"

    buckets: List[BucketRecord] = Field(default_factory=list)

    def resource_names(self) -> List[str]:
        return [bucket.name for bucket in self.buckets]


class TableRecord(SnapshotModel):
    table_name: str
    table_schema: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    item_count: int = 0


class DynamoDBState(ServiceState):
    items_field: ClassVar[str] = "tables"

    tables: List[TableRecord] = Field(default_factory=list)

    def resource_names(self) -> List[str]:
        return [table.table_name for table in self.tables]


class SQSState(ServiceState):
    items_field: ClassVar[str] = "queues"

    queues: List[str] = Field(default_factory=list)

    def resource_names(self) -> List[str]:
        return list(self.queues)


class SNSState(ServiceState):
    items_field: ClassVar[str] = "topics"

    topics: List[str] = Field(default_factory=list)

    def resource_names(self) -> List[str]:
        return list(self.topics)


class FunctionRecord(SnapshotModel):
    """Function configuration; the deployment package is never captured."""

    function_name: str
    runtime: Optional[str] = None
    handler: Optional[str] = None
    description: Optional[str] = None
    timeout: Optional[int] = None
    memory_size: Optional[int] = None


class LambdaState(ServiceState):
    items_field: ClassVar[str] = "functions"

    functions: List[FunctionRecord] = Field(default_factory=list)

    def resource_names(self) -> List[str]:
        return [fn.function_name for fn in self.functions]


# =============================================================================
# Snapshot Document
# =============================================================================


class SnapshotSummary(SnapshotModel):
    total_resource_count: int = 0
    exported_services: List[str] = Field(default_factory=list)
    emulator_version: str = "unknown"


class Snapshot(SnapshotModel):
    """Top-level snapshot document.

    services holds each kind's state as a plain mapping; reconstructors
    validate it against their own ServiceState model.
    """

    format_version: str = FORMAT_VERSION
    captured_at: Optional[str] = None
    services: dict[str, Any] = Field(default_factory=dict)
    summary: SnapshotSummary = Field(default_factory=SnapshotSummary)

    @field_validator("format_version", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> str:
        # An unquoted 1.0 in hand-edited YAML loads as a float
        return str(value)


# =============================================================================
# Operation Results
# =============================================================================


class ExtractStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"


@dataclass
class ExtractResult:
    """Outcome of one extractor.

    status is DEGRADED when the kind-level listing failed (state is empty).
    degraded_items names resources whose optional detail could not be read.
    """

    state: ServiceState
    status: ExtractStatus = ExtractStatus.OK
    error: Optional[str] = None
    degraded_items: List[str] = field(default_factory=list)

    @classmethod
    def degraded(cls, state: ServiceState, error: str) -> "ExtractResult":
        return cls(state=state, status=ExtractStatus.DEGRADED, error=error)


@dataclass
class ResourceSkip:
    resource: str
    reason: str


@dataclass
class RestoreResult:
    """Outcome of one reconstructor."""

    imported: int = 0
    skipped: int = 0
    skips: List[ResourceSkip] = field(default_factory=list)

    def record_imported(self) -> None:
        self.imported += 1

    def record_skip(self, resource: str, reason: str) -> None:
        self.skipped += 1
        self.skips.append(ResourceSkip(resource=resource, reason=reason))


# =============================================================================
# Summaries
# =============================================================================


class ExportSummary(SnapshotModel):
    export_path: str
    services_exported: int
    total_resources: int
    file_size: int
    services: dict[str, int] = Field(default_factory=dict)
    degraded: dict[str, str] = Field(default_factory=dict)
    recommendations: List[str] = Field(default_factory=list)


class ImportSummary(SnapshotModel):
    version: str
    original_timestamp: Optional[str] = None
    services_found: List[str] = Field(default_factory=list)
    total_resources: int = 0
    imported_resources: int = 0
    skipped_resources: int = 0
    errors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


__all__ = [
    "FORMAT_VERSION",
    "BucketObject",
    "BucketRecord",
    "DynamoDBState",
    "ExportSummary",
    "ExtractResult",
    "ExtractStatus",
    "FunctionRecord",
    "ImportSummary",
    "LambdaState",
    "ResourceSkip",
    "RestoreResult",
    "S3State",
    "SNSState",
    "SQSState",
    "ServiceState",
    "Snapshot",
    "SnapshotSummary",
    "TableRecord",
]
