from pathlib import Path

from bodbridge.persistence.filesystem import ZoneFileStorage


def test_zone_file_storage_writes_and_reads(tmp_path: Path) -> None:
    storage = ZoneFileStorage(tmp_path / "cache" / ".kai_bod_zonefile")

    assert storage.mtime() is None

    storage.write_text('{"JJ0103": {"id": 7}}')

    assert storage.mtime() is not None
    assert storage.read_text() == '{"JJ0103": {"id": 7}}'
    assert [path.name for path in storage.path.parent.iterdir()] == [".kai_bod_zonefile"]


def test_zone_file_storage_replaces_and_deletes(tmp_path: Path) -> None:
    storage = ZoneFileStorage(tmp_path / "zonefile")
    storage.write_text("old")
    storage.write_text("new")

    assert storage.read_text() == "new"

    storage.delete()
    storage.delete()
    assert not storage.path.exists()
    assert storage.mtime() is None
