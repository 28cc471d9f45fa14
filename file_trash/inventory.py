"""JSON inventory of trashed files.

The inventory is a single JSON document:

    {"path": "<inventory file>", "files": [{"name", "id", "group_id",
     "from", "to", "timestamp"}, ...]}

Every mutation rewrites the whole document through a temporary file that is
renamed over the old one, so a failed write never leaves a truncated file.
Concurrent invocations sharing one inventory can still lose updates.
"""
from pathlib import Path
import json
import logging
import os
import tempfile
from typing import Iterable, Iterator, List, Optional

from .errors import InventoryIOError
from .models import Record

_LOG = logging.getLogger(__name__)


class Inventory:
    def __init__(self, path: Path):
        self.path = Path(path)
        self.records: List[Record] = []
        self.load_error: Optional[Exception] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def open(self) -> "Inventory":
        """Load records from disk.

        A missing or unreadable file leaves the inventory empty; the problem
        is logged and kept on `load_error` but never raised.
        """
        _LOG.debug("opening inventory %s", self.path)
        self.records = []
        self.load_error = None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return self
        except (OSError, ValueError) as e:
            _LOG.warning("could not read inventory %s, starting empty: %s", self.path, e)
            self.load_error = e
            return self
        if not isinstance(data, dict) or not isinstance(data.get("files") or [], list):
            self.load_error = ValueError("unexpected inventory layout")
            _LOG.warning("inventory %s has an unexpected layout, starting empty", self.path)
            return self
        for entry in data.get("files") or []:
            try:
                self.records.append(Record.from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                _LOG.warning("skipping malformed inventory entry %r: %s", entry, e)
        return self

    def get(self, record_id: str) -> Optional[Record]:
        for rec in self.records:
            if rec.id == record_id:
                return rec
        return None

    def save(self, new_records: Iterable[Record]) -> None:
        """Append `new_records` and rewrite the file."""
        _LOG.debug("saving inventory")
        self._write(self.records + list(new_records))

    def update(self, records: Iterable[Record]) -> None:
        """Replace the whole inventory with `records`."""
        _LOG.debug("updating inventory")
        self._write(list(records))

    def delete(self, record_id: str) -> None:
        remaining = [r for r in self.records if r.id != record_id]
        if len(remaining) == len(self.records):
            _LOG.debug("%s not in inventory, nothing to delete", record_id)
            return
        _LOG.debug("deleting %s from inventory", record_id)
        self.update(remaining)

    def _write(self, records: List[Record]) -> None:
        doc = {"path": str(self.path), "files": [r.to_dict() for r in records]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".inventory-", suffix=".tmp")
        except OSError as e:
            raise InventoryIOError(f"cannot write inventory {self.path}: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, indent=2)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise InventoryIOError(f"cannot write inventory {self.path}: {e}") from e
        self.records = records
