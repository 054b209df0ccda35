# state/codec.py
"""
Snapshot Codec

YAML serialization of Snapshot documents. YAML keeps exports human-diffable
and friendly to version control.

Reading validates parseability only: the body must be YAML whose top level is
a mapping with a `services` mapping. Anything else is a SnapshotFileError.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import yaml
from pydantic import ValidationError

from localstack_mcp.errors import ErrorCode, SnapshotFileError

from .models import Snapshot


def dump_snapshot(snapshot: Snapshot) -> str:
    return yaml.safe_dump(
        snapshot.to_document(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def load_snapshot(text: str, source: str = "<string>") -> Snapshot:
    """Parse snapshot text.

    Raises:
        SnapshotFileError: Body is not YAML or not a snapshot-shaped mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SnapshotFileError(
            f"State file is not valid YAML: {e}", source, ErrorCode.SNAPSHOT_PARSE_ERROR
        ) from e

    if not isinstance(data, dict) or not isinstance(data.get("services"), dict):
        raise SnapshotFileError(
            "State file has no services section", source, ErrorCode.SNAPSHOT_PARSE_ERROR
        )

    try:
        return Snapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotFileError(
            f"State file is malformed: {e.error_count()} invalid field(s)",
            source,
            ErrorCode.SNAPSHOT_PARSE_ERROR,
        ) from e


def read_snapshot(path: Path) -> Snapshot:
    """Read and parse a snapshot file. The file is never modified."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SnapshotFileError(f"Cannot read state file: {e}", str(path)) from e
    return load_snapshot(text, source=str(path))


def write_snapshot(snapshot: Snapshot, path: Path) -> int:
    """Write a snapshot, creating parent directories. Returns the file size."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_snapshot(snapshot), encoding="utf-8")
        return path.stat().st_size
    except OSError as e:
        raise SnapshotFileError(
            f"Cannot write state file: {e}", str(path), ErrorCode.SNAPSHOT_WRITE_ERROR
        ) from e


def default_snapshot_path(captured_at: datetime) -> Path:
    """localstack-state-<timestamp>.yml in the working directory."""
    stamp = captured_at.isoformat(timespec="milliseconds").replace(":", "-").replace(".", "-")
    stamp = stamp.replace("+00-00", "Z")
    return Path(f"localstack-state-{stamp}.yml")


__all__ = [
    "default_snapshot_path",
    "dump_snapshot",
    "load_snapshot",
    "read_snapshot",
    "write_snapshot",
]
