from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from file_trash.errors import InventoryIOError
from file_trash.inventory import Inventory
from file_trash.models import Record

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_record(n, when=T0):
    return Record(
        name=f"f{n}.txt",
        id=f"ID{n}",
        group_id="G",
        source_path=f"/home/u/f{n}.txt",
        archive_path=f"/home/u/.file_trash/2024/05/01/G/f{n}.txt.ID{n}",
        timestamp=when + timedelta(minutes=n),
    )


def test_open_missing_file_is_empty(tmp_path):
    inv = Inventory(tmp_path / "inventory.json").open()
    assert len(inv) == 0
    assert inv.load_error is None


def test_open_corrupt_file_is_empty(tmp_path):
    path = tmp_path / "inventory.json"
    path.write_text("{not json", encoding="utf-8")
    inv = Inventory(path).open()
    assert inv.records == []
    assert inv.load_error is not None


def test_save_appends_and_persists(tmp_path):
    path = tmp_path / "sub" / "inventory.json"
    inv = Inventory(path)
    inv.save([make_record(1)])
    inv.save([make_record(2), make_record(3)])
    assert [r.id for r in inv] == ["ID1", "ID2", "ID3"]

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["path"] == str(path)
    assert data["files"][0]["from"] == "/home/u/f1.txt"
    assert data["files"][0]["to"].endswith("f1.txt.ID1")

    again = Inventory(path).open()
    assert again.records == inv.records


def test_update_replaces_everything(tmp_path):
    inv = Inventory(tmp_path / "inventory.json")
    inv.save([make_record(1), make_record(2)])
    inv.update([make_record(3)])
    assert [r.id for r in Inventory(inv.path).open()] == ["ID3"]


def test_delete_by_id(tmp_path):
    inv = Inventory(tmp_path / "inventory.json")
    inv.save([make_record(1), make_record(2)])
    inv.delete("ID1")
    assert [r.id for r in Inventory(inv.path).open()] == ["ID2"]
    assert inv.get("ID1") is None
    assert inv.get("ID2") is not None


def test_delete_unknown_id_is_noop(tmp_path):
    inv = Inventory(tmp_path / "inventory.json")
    inv.delete("nope")
    assert not inv.path.exists()


def test_decode_ignores_unknown_fields_and_foreign_timestamps(tmp_path):
    path = tmp_path / "inventory.json"
    doc = {
        "path": str(path),
        "future": {"x": 1},
        "files": [
            {
                "name": "file.go",
                "id": "bp8m0r0ps4m1ca4a0rq0",
                "group_id": "bp8m0r0ps4m1ca4a0rpg",
                "from": "/src/file.go",
                "to": "/trash/2020/01/16/bp8m0r0ps4m1ca4a0rpg/file.go.bp8m0r0ps4m1ca4a0rq0",
                "timestamp": "2020-01-16T23:14:20.123456789+09:00",
                "checksum": "ignored",
            },
            {
                "name": "utc.txt",
                "id": "B",
                "group_id": "G",
                "from": "/src/utc.txt",
                "to": "/trash/utc.txt.B",
                "timestamp": "2020-01-17T01:00:00Z",
            },
            {"name": "broken"},
        ],
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    inv = Inventory(path).open()
    assert [r.name for r in inv] == ["file.go", "utc.txt"]
    assert inv.records[0].timestamp == datetime(2020, 1, 16, 14, 14, 20, 123456, tzinfo=timezone.utc)
    assert inv.records[1].timestamp.tzinfo is not None


def test_failed_write_keeps_previous_file(tmp_path, monkeypatch):
    inv = Inventory(tmp_path / "inventory.json")
    inv.save([make_record(1)])
    before = inv.path.read_bytes()

    def explode(*args, **kwargs):
        raise TypeError("cannot encode")

    monkeypatch.setattr(json, "dump", explode)
    with pytest.raises(InventoryIOError):
        inv.save([make_record(2)])

    assert inv.path.read_bytes() == before
    assert [r.id for r in inv] == ["ID1"]
    assert [p.name for p in tmp_path.iterdir()] == ["inventory.json"]


def test_unwritable_location(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory")
    inv = Inventory(blocker / "inventory.json")
    with pytest.raises(InventoryIOError):
        inv.save([make_record(1)])
    assert inv.records == []
