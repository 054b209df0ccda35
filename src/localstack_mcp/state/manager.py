# state/manager.py
"""
State Manager - Snapshot Export/Import Orchestration

Export:
    validate connectivity -> extract each requested kind in order
    -> total the produced counts -> write YAML -> ExportSummary

Import:
    read + parse file -> validate connectivity -> restore each stored kind
    in document order -> ImportSummary

Both are single-pass and non-transactional. Fatal failures (emulator
unreachable, unreadable file) raise; everything below that degrades into
counts, skips and error strings in the summary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, Optional

from localstack_mcp.config.logging import get_logger
from localstack_mcp.config.settings import get_setting
from localstack_mcp.emulator.client import EmulatorClient

from .codec import default_snapshot_path, read_snapshot, write_snapshot
from .models import (
    FORMAT_VERSION,
    ExportSummary,
    ExtractResult,
    ExtractStatus,
    ImportSummary,
    ServiceState,
    Snapshot,
    SnapshotSummary,
)
from .registry import ServiceHandler, get_handler

logger = get_logger(__name__)


EXPORT_TROUBLESHOOTING = [
    "Ensure LocalStack is running and accessible",
    "Check that specified services are enabled",
    "Verify sufficient disk space for export file",
    "Ensure write permissions for output directory",
]

IMPORT_TROUBLESHOOTING = [
    "Verify state file exists and is readable",
    "Ensure LocalStack is running and healthy",
    "Check that target services are enabled",
    "Clear existing resources if conflicts occur",
]


def export_recommendations(total_resources: int, large_threshold: int) -> list[str]:
    recommendations = []
    if total_resources == 0:
        recommendations.append(
            "No resources found - ensure LocalStack services are running and populated"
        )
    if total_resources > large_threshold:
        recommendations.append(
            "Large state export - consider splitting by service for better performance"
        )
    recommendations.append("Share this file with team members to replicate the environment")
    recommendations.append("Store in version control to track environment changes")
    return recommendations


def import_recommendations(summary: ImportSummary) -> list[str]:
    recommendations = []
    if summary.errors:
        recommendations.append(
            "Some resources failed to import - check LocalStack logs for details"
        )
    if summary.skipped_resources > 0:
        recommendations.append(
            "Some resources were skipped - they may already exist or require manual creation"
        )
    if summary.version != FORMAT_VERSION:
        recommendations.append(
            "State file version mismatch - some features may not work correctly"
        )
    recommendations.append("Verify imported resources match your expectations")
    recommendations.append("Test application functionality after import")
    return recommendations


class StateManager:
    """
    Snapshot orchestrator.

    Usage:
        manager = StateManager()
        summary = await manager.export_state(["s3", "sqs"])
        result = await manager.import_state(summary.export_path)
    """

    def __init__(
        self,
        client_factory: Callable[[], EmulatorClient] = EmulatorClient,
        handlers: Optional[dict[str, ServiceHandler]] = None,
    ):
        """Initialize the manager.

        Args:
            client_factory: Builds a fresh EmulatorClient per operation
            handlers: Kind -> handler table (default: SERVICE_HANDLERS)
        """
        self._client_factory = client_factory
        self._handlers = handlers

    async def export_state(
        self,
        services: Iterable[str],
        output_path: Optional[str] = None,
        include_detail: bool = True,
    ) -> ExportSummary:
        """Export the requested service kinds to a snapshot file.

        A kind whose extractor fails outright, or raises, is left out of the
        file and named in ExportSummary.degraded with its error.

        Raises:
            EmulatorUnavailableError: LocalStack did not answer the health check
            SnapshotFileError: The snapshot could not be written
        """
        states: dict[str, ServiceState] = {}
        degraded: dict[str, str] = {}

        async with self._client_factory() as client:
            await client.validate_connectivity()
            emulator_version = await client.get_version()

            for requested in services:
                handler = get_handler(requested, self._handlers)
                if handler is None:
                    logger.debug("No extractor for service, skipping", service=requested)
                    continue
                if handler.kind in states or handler.kind in degraded:
                    continue

                try:
                    result = await handler.extract(client, include_detail)
                except Exception as e:
                    logger.warning("Extractor failed", service=handler.kind, error=str(e))
                    result = ExtractResult.degraded(handler.state_model(), str(e))
                if result.status is ExtractStatus.DEGRADED:
                    degraded[handler.kind] = result.error or "listing failed"
                    continue
                if result.degraded_items:
                    logger.info(
                        "Partial detail for service",
                        service=handler.kind,
                        items=result.degraded_items,
                    )
                states[handler.kind] = result.state

        captured_at = datetime.now(timezone.utc)
        total = sum(state.resource_count for state in states.values())
        snapshot = Snapshot(
            format_version=FORMAT_VERSION,
            captured_at=captured_at.isoformat(),
            services={kind: state.to_document() for kind, state in states.items()},
            summary=SnapshotSummary(
                total_resource_count=total,
                exported_services=list(states),
                emulator_version=emulator_version,
            ),
        )

        path = Path(output_path) if output_path else default_snapshot_path(captured_at)
        file_size = write_snapshot(snapshot, path)
        logger.info("State exported", path=str(path), services=len(states), resources=total)

        threshold = int(get_setting("state.large_export_threshold", 100))
        return ExportSummary(
            export_path=str(path),
            services_exported=len(states),
            total_resources=total,
            file_size=file_size,
            services={kind: state.resource_count for kind, state in states.items()},
            degraded=degraded,
            recommendations=export_recommendations(total, threshold),
        )

    async def import_state(self, state_path: str) -> ImportSummary:
        """Replay a snapshot file against LocalStack.

        Raises:
            SnapshotFileError: The file is unreadable or unparseable
            EmulatorUnavailableError: LocalStack did not answer the health check
        """
        snapshot = read_snapshot(Path(state_path))

        summary = ImportSummary(
            version=snapshot.format_version,
            original_timestamp=snapshot.captured_at,
            services_found=list(snapshot.services),
        )

        async with self._client_factory() as client:
            await client.validate_connectivity()

            for kind, raw_state in snapshot.services.items():
                handler = get_handler(str(kind), self._handlers)
                if handler is None:
                    logger.debug("No reconstructor for service, skipping", service=kind)
                    continue

                summary.total_resources += handler.state_model.count_raw(raw_state)
                try:
                    result = await handler.restore(client, raw_state)
                except Exception as e:
                    logger.warning("Service import failed", service=kind, error=str(e))
                    summary.errors.append(f"Failed to import {kind}: {e}")
                    continue

                summary.imported_resources += result.imported
                summary.skipped_resources += result.skipped

        summary.recommendations = import_recommendations(summary)
        logger.info(
            "State imported",
            path=state_path,
            imported=summary.imported_resources,
            skipped=summary.skipped_resources,
            errors=len(summary.errors),
        )
        return summary


__all__ = [
    "EXPORT_TROUBLESHOOTING",
    "IMPORT_TROUBLESHOOTING",
    "StateManager",
    "export_recommendations",
    "import_recommendations",
]
