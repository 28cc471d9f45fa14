"""Restore a trashed file chosen by a selector."""
from pathlib import Path
import logging
import os
from typing import Callable, List, Optional, Sequence

from .errors import EmptyInventoryError, InventoryIOError, MoveError, SelectionCancelledError
from .inventory import Inventory
from .models import Record
from .utils import safe_move

_LOG = logging.getLogger(__name__)

Selector = Callable[[Sequence[Record]], Optional[int]]


def newest_first(records) -> List[Record]:
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def restore_destination(rec: Record) -> Path:
    """Return where `rec` should be restored without overwriting anything.

    An occupied original path gets the record id appended to the name.
    """
    dest = rec.source_path
    if os.path.lexists(dest):
        dest = f"{dest}.{rec.id}"
        if os.path.lexists(dest):
            raise MoveError(f"{rec.source_path}: both original path and {dest} already exist")
    return Path(dest)


def choose(inventory: Inventory, selector: Selector) -> Record:
    records = newest_first(inventory.records)
    if not records:
        raise EmptyInventoryError("no deleted files found")
    idx = selector(records)
    if idx is None:
        raise SelectionCancelledError("no file selected")
    if not 0 <= idx < len(records):
        raise SelectionCancelledError(f"selection {idx} out of range")
    return records[idx]


def restore(inventory: Inventory, selector: Selector, forget_on_failure: bool = True) -> Path:
    """Restore one record picked by `selector` and drop it from the inventory.

    The record is forgotten after a failed move as well unless
    `forget_on_failure` is False, in which case it stays for another try.
    Returns the path the file was restored to.
    """
    rec = choose(inventory, selector)
    try:
        dest = restore_destination(rec)
        _LOG.debug("restoring %r -> %r", rec.archive_path, str(dest))
        safe_move(Path(rec.archive_path), dest)
    except MoveError:
        if forget_on_failure:
            try:
                inventory.delete(rec.id)
            except InventoryIOError as e:
                _LOG.warning("could not drop %s from inventory: %s", rec.id, e)
        raise
    inventory.delete(rec.id)
    _LOG.info("restored %s to %s", rec.name, dest)
    return dest
