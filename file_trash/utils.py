"""Utility helpers"""
from pathlib import Path
from datetime import datetime
import os
from typing import Optional

from .errors import MoveError


def safe_move(src: Path, dst: Path) -> Path:
    """Rename `src` to `dst`, creating the parent directories of `dst`.

    Directory creation tolerates siblings creating the same tree at the
    same time. Only a plain rename is attempted, so moves across devices
    fail with MoveError rather than falling back to a copy.
    """
    src, dst = Path(src), Path(dst)
    try:
        dst.parent.mkdir(parents=True, exist_ok=True)
        os.rename(src, dst)
    except OSError as e:
        raise MoveError(f"{src} -> {dst}: {e.strerror or e}") from e
    return dst


def display(text: str) -> str:
    """Make a path printable: undecodable file name bytes become \\xNN escapes."""
    try:
        raw = os.fsencode(text)
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "backslashreplace")
    return raw.decode("utf-8", "backslashreplace")


def human_size(n: int) -> str:
    """Size of a trashed entry for the restore details, e.g. "12 B" or "3.4 MB"."""
    if n < 1024:
        return f"{n} B"
    size = float(n)
    for unit in ("KB", "MB", "GB", "TB"):
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f} {unit}"


_SPANS = (
    (365 * 24 * 3600, "year"),
    (30 * 24 * 3600, "month"),
    (7 * 24 * 3600, "week"),
    (24 * 3600, "day"),
    (3600, "hour"),
    (60, "minute"),
    (1, "second"),
)


def human_time(when: datetime, now: Optional[datetime] = None) -> str:
    """Describe `when` relative to `now`, e.g. "3 minutes ago"."""
    if now is None:
        now = datetime.now(when.tzinfo)
    delta = (now - when).total_seconds()
    suffix = "ago" if delta >= 0 else "from now"
    delta = abs(delta)
    if delta < 1:
        return "now"
    for seconds, unit in _SPANS:
        if delta >= seconds:
            count = int(delta // seconds)
            plural = "" if count == 1 else "s"
            return f"{count} {unit}{plural} {suffix}"
    return "now"
