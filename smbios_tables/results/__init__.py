"""Row schema, snapshots and change detection for decoded SMBIOS tables."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from smbios_tables.discovery.entry_decoder import DecodedEntry

SNAPSHOT_VERSION = "1.0"

# Output columns, in order, with their column types
TABLE_COLUMNS: List[Tuple[str, str]] = [
    ("number", "INTEGER"),
    ("type", "INTEGER"),
    ("description", "TEXT"),
    ("handle", "BIGINT"),
    ("header_size", "INTEGER"),
    ("size", "INTEGER"),
    ("md5", "TEXT"),
]

# Row fields that identify a changed structure
CHANGE_FIELDS = ("type", "size", "md5")


class SnapshotError(ValueError):
    """Raised when a saved snapshot cannot be loaded."""


class ResultSet:
    """Decoded entries of one table read."""

    def __init__(self, entries: Sequence[DecodedEntry]):
        self.entries = list(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def rows(self) -> List[Dict[str, Any]]:
        """Return the entries as output rows."""
        return [entry.to_row() for entry in self.entries]

    def save(self, output_path: str) -> Path:
        """
        Save the rows as a JSON snapshot.

        Args:
            output_path: Destination file.

        Returns:
            Path written.
        """
        path = Path(output_path)
        output = {
            "version": SNAPSHOT_VERSION,
            "generated": self._iso_timestamp(),
            "entries": self.rows(),
        }

        with open(path, "w") as f:
            json.dump(output, f, indent=2)

        return path

    @staticmethod
    def load(snapshot_path: str) -> List[Dict[str, Any]]:
        """
        Load rows from a snapshot written by save().

        Raises:
            SnapshotError: the file is missing, not JSON, or not a snapshot.
        """
        try:
            with open(snapshot_path, "r") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Could not load snapshot {snapshot_path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("entries"), list):
            raise SnapshotError(f"{snapshot_path} is not an SMBIOS table snapshot")

        rows = data["entries"]
        for row in rows:
            if not isinstance(row, dict) or not isinstance(row.get("handle"), int) or "md5" not in row:
                raise SnapshotError(f"{snapshot_path} contains an invalid entry: {row!r}")
        return rows

    def _iso_timestamp(self) -> str:
        """Get ISO 8601 timestamp."""
        return datetime.now(timezone.utc).isoformat()


def compare_results(
    baseline: Sequence[Dict[str, Any]],
    current: Sequence[Dict[str, Any]],
) -> Dict[str, List[Dict[str, Any]]]:
    """Compare two sets of rows by structure handle.

    Returns:
        Dictionary with "added" and "removed" rows, and "changed" pairs of
        {"handle", "baseline", "current"}.
    """
    baseline_by_handle = {row["handle"]: row for row in baseline}
    current_by_handle = {row["handle"]: row for row in current}

    added = [row for row in current if row["handle"] not in baseline_by_handle]
    removed = [row for row in baseline if row["handle"] not in current_by_handle]

    changed = []
    for row in current:
        old = baseline_by_handle.get(row["handle"])
        if old is None:
            continue
        if any(old.get(field) != row.get(field) for field in CHANGE_FIELDS):
            changed.append({"handle": row["handle"], "baseline": old, "current": row})

    return {"added": added, "removed": removed, "changed": changed}
