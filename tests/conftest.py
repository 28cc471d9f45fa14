from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from file_trash.inventory import Inventory  # noqa: E402


@pytest.fixture
def trash_root(tmp_path):
    return tmp_path / "trash"


@pytest.fixture
def inventory(trash_root):
    return Inventory(trash_root / "inventory.json").open()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


class ScriptedSelector:
    """Headless selector: picks the record with the given name."""

    def __init__(self, name=None):
        self.name = name
        self.seen = None

    def __call__(self, records):
        self.seen = list(records)
        if self.name is None:
            return None
        for i, rec in enumerate(records):
            if rec.name == self.name:
                return i
        return None


@pytest.fixture
def pick():
    return ScriptedSelector
