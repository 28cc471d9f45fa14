"""Short content previews of trashed files for the restore prompt.

Images are described through Pillow and audio files through their mutagen
tags; other binaries are only flagged as such.
"""
from pathlib import Path
import logging
import mimetypes
import shutil
import stat
from typing import List, Optional

import mutagen
from PIL import Image

_LOG = logging.getLogger(__name__)

_SNIFF_BYTES = 8192

# application/* types that are readable text
_TEXT_APPLICATION = {
    "json", "xml", "javascript", "x-sh", "x-csh", "x-python", "x-perl", "x-tcl",
    "x-tex", "x-latex", "x-yaml", "yaml", "toml", "sql", "x-httpd-php", "rtf",
}


def _describe_image(path: Path) -> Optional[str]:
    try:
        with Image.open(path) as img:
            return f"(image {img.width}x{img.height} {img.format})"
    except (OSError, ValueError) as e:
        _LOG.debug("not a readable image %s: %s", path, e)
        return None


def _describe_audio(path: Path) -> Optional[str]:
    try:
        af = mutagen.File(str(path), easy=True)
    except mutagen.MutagenError as e:
        _LOG.debug("not a readable audio file %s: %s", path, e)
        return None
    if af is None:
        return None
    tags = getattr(af, "tags", None) or {}
    parts = []
    for k in ("artist", "title"):
        v = tags.get(k)
        if v:
            parts.append(v[0] if isinstance(v, (list, tuple)) else v)
    if not parts:
        return "(audio file)"
    return f"(audio {' - '.join(parts)})"


def _is_text_mime(mime: str) -> bool:
    major, _, minor = mime.partition("/")
    if major == "text":
        return True
    if major != "application":
        return False
    return minor in _TEXT_APPLICATION or minor.endswith(("+json", "+xml"))


def is_binary(path: Path) -> bool:
    with path.open("rb") as f:
        block = f.read(_SNIFF_BYTES)
    if b"\x00" in block:
        return True
    try:
        block.decode("utf-8")
    except UnicodeDecodeError as e:
        # a multibyte sequence cut by the sniff window is still text
        return len(block) < _SNIFF_BYTES or e.start < len(block) - 3
    return False


def _wrap(line: str, width: int) -> str:
    line = line.replace("\t", "  ")
    if width < 10 or len(line) < width - 10:
        return line
    return line[: width - 10] + "..."


def _format(lines: List[str], max_lines: int, width: int) -> str:
    if not lines:
        return "(no content)"
    out = []
    for i, line in enumerate(lines):
        if i >= max_lines:
            out.append("  ...")
            break
        out.append(f"  {_wrap(line, width)}")
    return "\n".join(out)


def head(path, max_lines: int = 5, width: Optional[int] = None, name: Optional[str] = None) -> str:
    """Return the first `max_lines` lines of `path`, or a one-line summary.

    Trashed files carry an id suffix, so the file type is guessed from
    `name` (the original base name) when given.
    """
    path = Path(path)
    if width is None:
        width = shutil.get_terminal_size().columns
    try:
        st = path.lstat()
    except OSError:
        return "(not found)"
    if stat.S_ISDIR(st.st_mode):
        try:
            entries = sorted(path.iterdir())
            lines = [f"{stat.filemode(p.lstat().st_mode)}\t{p.name}" for p in entries]
        except OSError as e:
            return f"(directory, unreadable: {e.strerror or e})"
        return "(directory)\n" + _format(lines, max_lines, width) if lines else "(directory)"
    if stat.S_ISLNK(st.st_mode):
        return f"(symlink to {path.readlink()})"

    mime, _ = mimetypes.guess_type(name or path.name)
    if mime and mime.startswith("image/"):
        desc = _describe_image(path)
        if desc:
            return desc
    if mime and mime.startswith("audio/"):
        desc = _describe_audio(path)
        if desc:
            return desc
    if mime and not _is_text_mime(mime):
        return "(binary file)"
    try:
        if is_binary(path):
            return "(binary file)"
        lines = []
        with path.open("r", encoding="utf-8", errors="replace") as f:
            for line in f:
                lines.append(line.rstrip("\r\n"))
                if len(lines) > max_lines:
                    break
    except OSError as e:
        return f"(unreadable: {e.strerror or e})"
    return _format(lines, max_lines, width)
