import io
import logging
import re

from storage.file_storage import FileStorage


def test_save_cover_naming_and_url(tmp_path):
    storage = FileStorage(tmp_path / "uploads", "/uploads")
    name = storage.save_cover(io.BytesIO(b"abc"), "My Photo.JPG")

    assert re.fullmatch(r"coverImage-\d{13}-[0-9a-f]{6}\.jpg", name)
    assert (storage.uploads_root / name).read_bytes() == b"abc"
    assert storage.public_url(name) == f"/uploads/{name}"


def test_names_do_not_collide(tmp_path):
    storage = FileStorage(tmp_path)
    names = {storage.save_cover(io.BytesIO(b"x"), "a.png") for _ in range(20)}
    assert len(names) == 20


def test_resolve_url_stays_inside_root(tmp_path):
    storage = FileStorage(tmp_path / "uploads", "uploads/")
    assert storage.resolve_url("/uploads/a.png") == (tmp_path / "uploads" / "a.png").resolve()
    assert storage.resolve_url("/uploads/../database.json") is None
    assert storage.resolve_url("/media/a.png") is None
    assert storage.resolve_url("") is None


def test_discard_url_ignores_missing_files(tmp_path, caplog):
    storage = FileStorage(tmp_path)
    with caplog.at_level(logging.INFO, logger="storage.file_storage"):
        storage.discard_url("/uploads/never-existed.png")
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_discard_url_removes_file(tmp_path):
    storage = FileStorage(tmp_path)
    name = storage.save_cover(io.BytesIO(b"x"), "a.png")
    storage.discard_url(storage.public_url(name))
    assert not (tmp_path / name).exists()


def test_discard_logs_instead_of_raising(tmp_path, caplog):
    storage = FileStorage(tmp_path)
    (tmp_path / "adir").mkdir()
    with caplog.at_level(logging.ERROR, logger="storage.file_storage"):
        storage.discard("adir")
    assert any("Error deleting upload" in r.getMessage() for r in caplog.records)


def test_discard_url_reports_missing_file_when_asked(tmp_path, caplog):
    storage = FileStorage(tmp_path)
    with caplog.at_level(logging.ERROR, logger="storage.file_storage"):
        storage.discard_url("/uploads/never-existed.png", missing_ok=False)
    assert any("Failed to delete cover image" in r.getMessage() for r in caplog.records)
