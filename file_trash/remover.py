"""Move files into the trash and record them in the inventory."""
from pathlib import Path
import concurrent.futures
import logging
import os
from typing import Dict, List, Optional, Sequence, Tuple

from .archive import build_record
from .errors import ArgumentError, InventoryIOError, NotFoundError, RemoveError
from .ids import new_id
from .inventory import Inventory
from .models import Record
from .utils import safe_move

_LOG = logging.getLogger(__name__)


def _trash_one(arg: str, group_id: str, trash_root: Path) -> Record:
    if not os.path.lexists(arg):
        raise NotFoundError(f"{arg}: no such file or directory")
    rec = build_record(group_id, arg, trash_root)
    _LOG.debug("moving %r -> %r", rec.source_path, rec.archive_path)
    safe_move(Path(rec.source_path), Path(rec.archive_path))
    return rec


def remove(paths: Sequence[str], inventory: Inventory, trash_root: Path, force: bool = False) -> List[Record]:
    """Trash every path in `paths` as one group.

    Each path is moved by its own worker. Once all workers are done the
    records of the successful moves are saved to `inventory` in a single
    write, whatever happened to the others, including an interrupt while
    waiting. Failed paths raise RemoveError afterwards unless `force` is
    set, in which case they are only logged.

    Returns the records of the trashed files, in input order.
    """
    paths = [os.fspath(p) for p in paths]
    if not paths:
        raise ArgumentError("too few arguments")

    group_id = new_id()
    # one slot per input position, read only after the pool has joined
    slots: List[Optional[Record]] = [None] * len(paths)
    failures: List[Tuple[int, Exception]] = []
    futures: Dict[concurrent.futures.Future, int] = {}

    try:
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(paths)) as ex:
            for i, p in enumerate(paths):
                futures[ex.submit(_trash_one, p, group_id, Path(trash_root))] = i
    finally:
        # workers already started keep moving files; record whatever they did
        concurrent.futures.wait(futures)
        for fut, i in futures.items():
            if fut.cancelled():
                continue
            exc = fut.exception()
            if exc is None:
                slots[i] = fut.result()
            else:
                _LOG.debug("failed to trash %s: %s", paths[i], exc)
                failures.append((i, exc))

        records = [r for r in slots if r is not None]
        failed = [(paths[i], e) for i, e in sorted(failures, key=lambda item: item[0])]
        try:
            inventory.save(records)
        except InventoryIOError as e:
            if not failed:
                raise
            not_trashed = "\n".join(str(exc) for _, exc in failed)
            raise InventoryIOError(f"{e}\nalso not trashed:\n{not_trashed}", failed) from e
    _LOG.info("trashed %d of %d path(s) into group %s", len(records), len(paths), group_id)

    if failed:
        if force:
            for p, e in failed:
                _LOG.warning("ignoring failure for %s: %s", p, e)
        else:
            raise RemoveError(failed, records)
    return records
