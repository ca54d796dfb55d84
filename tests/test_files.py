import io

import pytest

from studyflow.core.errors import UploadRejectedError
from studyflow.services.file_storage import (
    ALLOWED_MIME_TYPES,
    LocalFileStorage,
    check_mime_type,
    get_file_storage,
)


def _upload(client, headers, content=b"0123456789", name="notes.txt", mime="text/plain", data=None):
    return client.post(
        "/api/files/upload",
        files={"file": (name, content, mime)},
        data=data or {},
        headers=headers,
    )


# ---------- storage backend ----------

def test_generated_names_keep_extension_only(tmp_path):
    storage = LocalFileStorage(tmp_path)
    a = storage.generate_name("Lecture Notes.PDF")
    b = storage.generate_name("Lecture Notes.PDF")
    assert a.endswith(".pdf")
    assert "Lecture" not in a
    assert a != b
    assert "." not in storage.generate_name("README")


def test_save_respects_size_limit(tmp_path):
    storage = LocalFileStorage(tmp_path)
    stored = storage.save(io.BytesIO(b"abc"), "a.txt", max_bytes=3)
    assert stored.size == 3
    assert storage.exists(stored.filename)

    with pytest.raises(UploadRejectedError):
        storage.save(io.BytesIO(b"abcd"), "b.txt", max_bytes=3)
    assert len(list(tmp_path.iterdir())) == 1


def test_delete_tolerates_missing_file(tmp_path):
    storage = LocalFileStorage(tmp_path)
    assert storage.delete("123-456.txt") is False


def test_path_for_refuses_traversal(tmp_path):
    storage = LocalFileStorage(tmp_path)
    with pytest.raises(ValueError):
        storage.path_for("../etc/passwd")


def test_mime_allow_list():
    assert "application/zip" not in ALLOWED_MIME_TYPES
    assert check_mime_type("text/plain; charset=utf-8") == "text/plain"
    with pytest.raises(UploadRejectedError):
        check_mime_type("application/zip")
    with pytest.raises(UploadRejectedError):
        check_mime_type(None)


def test_default_ceiling_is_50mb():
    from studyflow.core.config import Settings
    assert Settings().MAX_UPLOAD_BYTES == 50 * 1024 * 1024


def test_storage_root_comes_from_settings(tmp_path):
    from studyflow.core.config import Settings
    storage = get_file_storage(Settings(UPLOAD_DIR=str(tmp_path / "a")))
    assert storage.root == tmp_path / "a"
    assert get_file_storage(Settings(UPLOAD_DIR=str(tmp_path / "a"))) is storage
    assert get_file_storage(Settings(UPLOAD_DIR=str(tmp_path / "b"))).root == tmp_path / "b"


# ---------- endpoints ----------

def test_upload_and_download_roundtrip(client, alice, file_storage):
    r = _upload(client, alice)
    assert r.status_code == 201
    meta = r.json()
    assert meta["size"] == 10
    assert meta["mimeType"] == "text/plain"
    assert meta["originalName"] == "notes.txt"
    assert meta["filename"] != "notes.txt"
    assert file_storage.exists(meta["filename"])

    r = client.get(f"/api/files/{meta['id']}/download", headers=alice)
    assert r.status_code == 200
    assert r.content == b"0123456789"
    assert r.headers["content-disposition"] == 'attachment; filename="notes.txt"'
    assert r.headers["content-type"].startswith("text/plain")


def test_rejected_type_creates_nothing(client, alice, file_storage):
    r = _upload(client, alice, name="archive.zip", mime="application/zip")
    assert r.status_code == 400
    assert r.json() == {"message": "File type not allowed"}
    assert client.get("/api/files", headers=alice).json() == []
    assert not file_storage.root.exists() or list(file_storage.root.iterdir()) == []


def test_oversized_upload_rejected(client, alice, test_settings, file_storage):
    big = b"x" * (test_settings.MAX_UPLOAD_BYTES + 1)
    r = _upload(client, alice, content=big)
    assert r.status_code == 400
    assert r.json() == {"message": "File too large"}
    assert client.get("/api/files", headers=alice).json() == []
    assert list(file_storage.root.iterdir()) == []


def test_missing_file_field(client, alice):
    r = client.post("/api/files/upload", data={"taskId": "1"}, headers=alice)
    assert r.status_code == 400


def test_upload_with_task_reference(client, alice, bob):
    task_id = client.post("/api/tasks", json={"title": "Thesis"}, headers=alice).json()["id"]

    r = _upload(client, alice, data={"taskId": str(task_id)})
    assert r.status_code == 201
    assert r.json()["taskId"] == task_id

    assert _upload(client, bob, data={"taskId": str(task_id)}).status_code == 403
    assert _upload(client, alice, data={"taskId": "abc"}).status_code == 400


def test_list_scoped(client, alice, bob):
    _upload(client, alice, name="a.txt")
    _upload(client, alice, name="b.txt")
    _upload(client, bob, name="c.txt")
    names = [f["originalName"] for f in client.get("/api/files", headers=alice).json()]
    assert names == ["b.txt", "a.txt"]


def test_other_user_cannot_download_or_delete(client, alice, bob):
    file_id = _upload(client, alice).json()["id"]
    assert client.get(f"/api/files/{file_id}/download", headers=bob).status_code == 403
    assert client.delete(f"/api/files/{file_id}", headers=bob).status_code == 403
    assert client.get("/api/files/9999/download", headers=alice).status_code == 404


def test_download_when_disk_copy_missing(client, alice, file_storage):
    meta = _upload(client, alice).json()
    file_storage.path_for(meta["filename"]).unlink()
    r = client.get(f"/api/files/{meta['id']}/download", headers=alice)
    assert r.status_code == 404
    assert r.json() == {"message": "File not found on disk"}


def test_delete_removes_disk_copy_and_row(client, alice, file_storage):
    meta = _upload(client, alice).json()
    r = client.delete(f"/api/files/{meta['id']}", headers=alice)
    assert r.status_code == 204
    assert not file_storage.exists(meta["filename"])
    assert client.get("/api/files", headers=alice).json() == []


def test_delete_when_disk_copy_already_gone(client, alice, file_storage):
    meta = _upload(client, alice).json()
    file_storage.path_for(meta["filename"]).unlink()
    assert client.delete(f"/api/files/{meta['id']}", headers=alice).status_code == 204
    assert client.get("/api/files", headers=alice).json() == []


def test_task_delete_detaches_files(client, alice):
    task_id = client.post("/api/tasks", json={"title": "Thesis"}, headers=alice).json()["id"]
    _upload(client, alice, data={"taskId": str(task_id)})
    client.delete(f"/api/tasks/{task_id}", headers=alice)
    [f] = client.get("/api/files", headers=alice).json()
    assert f["taskId"] is None
