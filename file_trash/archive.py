"""Archive path derivation for trashed files.

Trashed files are laid out as

    <trash_root>/<YYYY>/<MM>/<DD>/<group_id>/<name>.<id>

so the tree can be inspected or cleaned up without the inventory.
Nothing here touches the filesystem.
"""
from pathlib import Path
import logging
import os
from datetime import datetime
from typing import Callable, Optional

from .errors import PathResolutionError
from .ids import new_id
from .models import Record

_LOG = logging.getLogger(__name__)


def archive_path_for(trash_root: Path, group_id: str, name: str, record_id: str, when: datetime) -> Path:
    return (
        Path(trash_root)
        / f"{when.year:04d}"
        / f"{when.month:02d}"
        / f"{when.day:02d}"
        / group_id
        / f"{name}.{record_id}"
    )


def build_record(
    group_id: str,
    source: str,
    trash_root: Path,
    now: Optional[datetime] = None,
    id_factory: Callable[[], str] = new_id,
) -> Record:
    """Return the record describing where `source` goes inside the trash.

    `source` is made absolute without resolving symlinks, so trashing a
    link moves the link itself.
    """
    try:
        source_path = os.path.abspath(os.fspath(source))
    except OSError as e:
        raise PathResolutionError(f"{source}: cannot resolve absolute path: {e}") from e
    if now is None:
        now = datetime.now().astimezone()
    record_id = id_factory()
    name = Path(source_path).name
    record = Record(
        name=name,
        id=record_id,
        group_id=group_id,
        source_path=source_path,
        archive_path=str(archive_path_for(trash_root, group_id, name, record_id, now)),
        timestamp=now,
    )
    _LOG.debug("generating file metadata: %s", record.to_dict())
    return record
