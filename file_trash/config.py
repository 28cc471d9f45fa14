"""Runtime settings, read from the environment with explicit overrides."""
from dataclasses import dataclass
from pathlib import Path
import logging
import os
from typing import Mapping, Optional

TRASH_DIR_ENV = "FILE_TRASH_DIR"
LOG_LEVEL_ENV = "FILE_TRASH_LOG"
DEFAULT_TRASH_DIR = Path.home() / ".file_trash"
INVENTORY_FILE = "inventory.json"


@dataclass(frozen=True)
class Settings:
    trash_root: Path
    inventory_path: Path
    log_level: int = logging.WARNING


def _level(name: Optional[str]) -> int:
    if not name:
        return logging.WARNING
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def load_settings(trash_dir: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    if trash_dir:
        root = Path(trash_dir)
    elif env.get(TRASH_DIR_ENV):
        root = Path(env[TRASH_DIR_ENV])
    else:
        root = DEFAULT_TRASH_DIR
    root = root.expanduser().absolute()
    return Settings(
        trash_root=root,
        inventory_path=root / INVENTORY_FILE,
        log_level=_level(env.get(LOG_LEVEL_ENV)),
    )
