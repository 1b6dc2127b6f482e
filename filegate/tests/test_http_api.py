from __future__ import annotations

import io
from urllib.parse import quote

import pytest
from flask.testing import FlaskClient

from conftest import LIFETIME


@pytest.fixture()
def client(app) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def alice(app, container):
    return container.register_user_use_case.execute("alice", "s3cret")


def _login(client: FlaskClient, login: str = "alice", password: str = "s3cret") -> str:
    response = client.post("/login", json={"login": login, "password": password})
    assert response.status_code == 200
    return response.get_json()["token"]


def test_login_with_json(client, alice):
    response = client.post("/login", json={"login": "alice", "password": "s3cret"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["token"].count(".") == 2
    assert body["expires_at"] == "2026-01-01 13:00:00"


def test_login_with_form_fields(client, alice):
    response = client.post("/login", data={"login": "alice", "password": "s3cret"})

    assert response.status_code == 200
    assert "token" in response.get_json()


def test_login_missing_fields_is_validation_error(client):
    response = client.post("/login", json={"login": "alice"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "validation_error"


def test_login_failures_are_indistinguishable(client, alice):
    wrong_password = client.post("/login", json={"login": "alice", "password": "nope"})
    unknown_user = client.post("/login", json={"login": "mallory", "password": "s3cret"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json() == {
        "error": "invalid_credentials"
    }


def test_storage_requires_token(client):
    response = client.get("/storage/")

    assert response.status_code == 401
    assert response.get_json()["error"] == "token_missing"


def test_storage_rejects_unknown_token(client):
    response = client.get("/storage/", headers={"auth": "not-a-token"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "session_not_found"


def test_bearer_header_is_accepted(client, alice):
    token = _login(client)

    response = client.get("/storage", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.get_json() == {"result": ""}


def test_token_expires_after_lifetime(client, alice, clock):
    token = _login(client)

    clock.advance(LIFETIME - 1)
    assert client.get("/storage/", headers={"auth": token}).status_code == 200

    clock.advance(1)
    response = client.get("/storage/", headers={"auth": token})
    assert response.status_code == 401
    assert response.get_json()["error"] == "session_expired"


def test_make_directory_and_list(client, alice):
    headers = {"auth": _login(client)}

    assert client.post("/storage/docs", headers=headers).get_json() == {"result": "ok"}
    assert client.post("/storage/archive", headers=headers).status_code == 200

    response = client.get("/storage/", headers=headers)
    assert response.get_json() == {"result": "archive docs"}


def test_repeated_directory_creation_conflicts(client, alice):
    headers = {"auth": _login(client)}
    client.post("/storage/docs", headers=headers)

    response = client.post("/storage/docs", headers=headers)

    assert response.status_code == 409
    assert response.get_json() == {"error": "directory_exists", "context": {"path": "/docs"}}


def test_upload_then_download(client, alice):
    headers = {"auth": _login(client)}

    upload = client.post(
        "/storage/docs",
        headers=headers,
        data={"file": (io.BytesIO(b"hello world"), "note.txt")},
        content_type="multipart/form-data",
    )
    assert upload.status_code == 200

    again = client.post(
        "/storage/docs",
        headers=headers,
        data={"file": (io.BytesIO(b"{}"), "data.json")},
        content_type="multipart/form-data",
    )
    assert again.status_code == 200

    response = client.get("/storage/docs/note.txt", headers=headers)
    assert response.status_code == 200
    assert response.data == b"hello world"
    assert response.headers["Content-Type"].startswith("text/plain")
    assert response.headers["Content-Disposition"] == "attachment; filename=note.txt"
    assert response.headers["Content-Length"] == "11"

    listing = client.get("/storage/docs", headers=headers)
    assert listing.get_json() == {"result": "data.json note.txt"}


def test_traversal_is_forbidden(client, alice):
    headers = {"auth": _login(client)}

    response = client.get("/storage/../../etc/passwd", headers=headers)

    assert response.status_code == 403
    assert response.get_json() == {"error": "path_outside_sandbox"}


def test_delete_root_is_refused(client, alice):
    headers = {"auth": _login(client)}

    response = client.delete("/storage/", headers=headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "root_deletion_forbidden"


def test_delete_file(client, alice, storage_root):
    headers = {"auth": _login(client)}
    client.post(
        "/storage/docs",
        headers=headers,
        data={"file": (io.BytesIO(b"x"), "gone.txt")},
        content_type="multipart/form-data",
    )

    response = client.delete("/storage/docs/gone.txt", headers=headers)

    assert response.status_code == 200
    assert not (storage_root / str(alice.id) / "docs" / "gone.txt").exists()


def test_missing_path_hides_storage_root(client, alice, storage_root):
    headers = {"auth": _login(client)}

    response = client.get("/storage/missing/file.bin", headers=headers)

    assert response.status_code == 404
    body = response.get_data(as_text=True)
    assert str(storage_root) not in body
    assert response.get_json()["context"]["path"] == "/missing/file.bin"


def test_logout_revokes_token(client, alice):
    token = _login(client)

    assert client.post("/logout", headers={"auth": token}).get_json() == {"result": "ok"}

    response = client.get("/storage/", headers={"auth": token})
    assert response.status_code == 401
    assert response.get_json()["error"] == "session_not_found"


def test_unknown_route_is_json(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.get_json() == {"error": "not_found"}


def test_security_headers_present(client):
    response = client.get("/nowhere")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_request_id_is_echoed(client):
    response = client.get("/nowhere", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_non_ascii_download_uses_encoded_filename(client, alice, storage_root):
    headers = {"auth": _login(client)}
    client.get("/storage/", headers=headers)
    (storage_root / str(alice.id) / "файл.txt").write_bytes(b"privet")

    response = client.get(f"/storage/{quote('файл.txt')}", headers=headers)

    assert response.status_code == 200
    assert response.data == b"privet"
    disposition = response.headers["Content-Disposition"]
    assert disposition.startswith("attachment;")
    assert f"filename*=UTF-8''{quote('файл.txt')}" in disposition
    disposition.encode("latin-1")


def test_unrelated_login_sweeps_expired_session(client, alice, container, clock):
    old_token = _login(client)
    container.register_user_use_case.execute("bob", "hunter2")

    clock.advance(LIFETIME + 1)
    _login(client, "bob", "hunter2")

    assert container.session_repository.find_by_token(old_token) is None
    response = client.get("/storage/", headers={"auth": old_token})
    assert response.status_code == 401
    assert response.get_json()["error"] == "session_not_found"


def test_non_empty_root_cannot_be_deleted(client, alice, storage_root):
    headers = {"auth": _login(client)}
    client.post(
        "/storage/docs",
        headers=headers,
        data={"file": (io.BytesIO(b"keep"), "keep.txt")},
        content_type="multipart/form-data",
    )

    for path in ("/storage/", "/storage/..", "/storage/docs/.."):
        response = client.delete(path, headers=headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "root_deletion_forbidden"
    assert (storage_root / str(alice.id) / "docs" / "keep.txt").read_bytes() == b"keep"
