"""
Cover upload, replacement and cleanup through the HTTP API.
"""
import logging

from conftest import png_bytes, register


def _upload(client, book_id, user_id, name="cover.png", data=None, content_type="image/png"):
    payload = png_bytes() if data is None else data
    return client.post(
        f"/api/books/{book_id}/cover",
        files={"coverImage": (name, payload, content_type)},
        headers={"x-user-id": user_id} if user_id else {},
    )


def _stored_files(uploads_dir):
    return sorted(p.name for p in uploads_dir.iterdir())


def test_upload_sets_cover_and_serves_file(client, owner, book, uploads_dir):
    data = png_bytes("blue")
    resp = _upload(client, book["id"], owner["id"], data=data)
    assert resp.status_code == 200
    url = resp.json()["coverImageUrl"]
    assert url.startswith("/uploads/coverImage-")
    assert url.endswith(".png")

    assert _stored_files(uploads_dir) == [url.rsplit("/", 1)[1]]
    served = client.get(url)
    assert served.status_code == 200
    assert served.content == data

    assert client.get(f"/api/books/{book['id']}").json()["coverImageUrl"] == url


def test_extension_comes_from_image_when_filename_has_none(client, owner, book):
    resp = _upload(client, book["id"], owner["id"], name="blob")
    assert resp.status_code == 200
    assert resp.json()["coverImageUrl"].endswith(".png")


def test_new_cover_replaces_old_file(client, owner, book, uploads_dir):
    first = _upload(client, book["id"], owner["id"]).json()["coverImageUrl"]
    second = _upload(client, book["id"], owner["id"], data=png_bytes("green")).json()["coverImageUrl"]
    assert first != second
    assert _stored_files(uploads_dir) == [second.rsplit("/", 1)[1]]


def test_old_cover_already_missing_is_fine(client, owner, book, uploads_dir):
    first = _upload(client, book["id"], owner["id"]).json()["coverImageUrl"]
    (uploads_dir / first.rsplit("/", 1)[1]).unlink()
    assert _upload(client, book["id"], owner["id"]).status_code == 200


def test_non_image_is_rejected_and_nothing_kept(client, owner, book, uploads_dir):
    resp = _upload(client, book["id"], owner["id"], name="notes.txt", data=b"hello", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Not an image! Please upload only images."}
    assert _stored_files(uploads_dir) == []
    assert client.get(f"/api/books/{book['id']}").json()["coverImageUrl"] is None


def test_image_content_type_with_garbage_bytes_is_rejected(client, owner, book, uploads_dir):
    resp = _upload(client, book["id"], owner["id"], name="fake.png", data=b"definitely not a png")
    assert resp.status_code == 400
    assert _stored_files(uploads_dir) == []


def test_missing_file_is_400(client, owner, book):
    resp = client.post(f"/api/books/{book['id']}/cover", headers={"x-user-id": owner["id"]})
    assert resp.status_code == 400
    assert resp.json()["message"] == "No image file uploaded or invalid file type."


def test_rejected_upload_is_cleaned_up(client, book, uploads_dir):
    stranger = register(client, email="z@x.com").json()
    assert _upload(client, book["id"], stranger["id"]).status_code == 403
    assert _upload(client, book["id"], None).status_code == 403
    assert _upload(client, "nope", stranger["id"]).status_code == 404
    assert _stored_files(uploads_dir) == []


def test_failure_while_saving_cleans_up_new_file(app, client, owner, book, uploads_dir, monkeypatch):
    from fastapi.testclient import TestClient
    from services import listings

    def broken_assign(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(listings, "assign_cover", broken_assign)
    resp = TestClient(app, raise_server_exceptions=False).post(
        f"/api/books/{book['id']}/cover",
        files={"coverImage": ("c.png", png_bytes(), "image/png")},
        headers={"x-user-id": owner["id"]},
    )
    assert resp.status_code == 500
    assert _stored_files(uploads_dir) == []


def test_delete_book_removes_cover_file(client, owner, book, uploads_dir):
    _upload(client, book["id"], owner["id"])
    resp = client.delete(f"/api/books/{book['id']}", headers={"x-user-id": owner["id"]})
    assert resp.status_code == 204
    assert _stored_files(uploads_dir) == []


def test_cover_removal_failure_does_not_change_delete_response(client, owner, book, store, uploads_dir):
    # A directory cannot be unlinked, so the advisory delete fails.
    (uploads_dir / "stuck").mkdir()
    store.books[book["id"]].cover_image_url = "/uploads/stuck"

    resp = client.delete(f"/api/books/{book['id']}", headers={"x-user-id": owner["id"]})
    assert resp.status_code == 204
    assert (uploads_dir / "stuck").is_dir()
    assert client.get("/api/books").json() == []


def test_delete_logs_cover_that_is_already_gone(client, owner, book, uploads_dir, caplog):
    url = _upload(client, book["id"], owner["id"]).json()["coverImageUrl"]
    (uploads_dir / url.rsplit("/", 1)[1]).unlink()

    with caplog.at_level(logging.ERROR, logger="storage.file_storage"):
        resp = client.delete(f"/api/books/{book['id']}", headers={"x-user-id": owner["id"]})

    assert resp.status_code == 204
    assert any("Failed to delete cover image" in r.getMessage() for r in caplog.records)
