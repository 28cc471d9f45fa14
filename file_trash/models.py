import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

# RFC3339 timestamps written by other tools may carry nanoseconds
_FRACTION = re.compile(r"(\.\d{6})\d+")


@dataclass(frozen=True)
class Record:
    """Metadata of one trashed file, as persisted in the inventory."""
    name: str
    id: str
    group_id: str
    source_path: str  # where the file was moved from
    archive_path: str  # where it lives inside the trash
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "group_id": self.group_id,
            "from": self.source_path,
            "to": self.archive_path,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        """Build a record from its inventory entry; unknown keys are ignored.

        Raises KeyError/ValueError/TypeError on malformed entries.
        """
        return cls(
            name=str(data["name"]),
            id=str(data["id"]),
            group_id=str(data.get("group_id", "")),
            source_path=str(data["from"]),
            archive_path=str(data["to"]),
            timestamp=parse_timestamp(data["timestamp"]),
        )


def parse_timestamp(value: str) -> datetime:
    ts = datetime.fromisoformat(_FRACTION.sub(r"\1", value))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts
