"""
Name: HTTP API Tests

Responsibilities:
  - Exercise the FastAPI app end to end (in-memory adapters)
  - Validate status codes, problem+json bodies and headers
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from sharespace.api.main import create_app
from sharespace.application.usecases.files import DownloadSharedFileUseCase
from sharespace.container import (
    get_blob_store,
    get_download_shared_file_use_case,
    get_file_repository,
)
from sharespace.crosscutting.config import get_settings

pytestmark = pytest.mark.unit

_PASSWORD = "password-123"


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


def _signup(client: TestClient, email: str) -> dict:
    res = client.post(
        "/api/auth/register",
        json={"email": email, "name": email.split("@")[0], "password": _PASSWORD},
    )
    assert res.status_code == 201, res.text
    login = client.post("/api/auth/login", json={"email": email, "password": _PASSWORD})
    assert login.status_code == 200, login.text
    body = login.json()
    return {
        "id": body["user"]["id"],
        "headers": {"Authorization": f"Bearer {body['access_token']}"},
    }


def _create_workspace(client: TestClient, owner: dict, **extra) -> dict:
    res = client.post(
        "/api/workspaces",
        json={"name": "Team", "description": "Shared docs", **extra},
        headers=owner["headers"],
    )
    assert res.status_code == 201, res.text
    return res.json()


def _upload(client: TestClient, user: dict, workspace_id: str, name="notes.txt"):
    return client.post(
        f"/api/files/workspace/{workspace_id}",
        files={"file": (name, b"hello", "text/plain")},
        data={"folder": "docs"},
        headers=user["headers"],
    )


class TestAuth:
    def test_register_login_me(self, client):
        user = _signup(client, "ana@example.com")

        res = client.get("/api/auth/me", headers=user["headers"])

        assert res.status_code == 200
        assert res.json()["email"] == "ana@example.com"

    def test_duplicate_register_is_conflict(self, client):
        _signup(client, "ana@example.com")
        res = client.post(
            "/api/auth/register",
            json={"email": "ANA@example.com", "name": "Ana", "password": _PASSWORD},
        )
        assert res.status_code == 409

    def test_wrong_password_is_401(self, client):
        _signup(client, "ana@example.com")
        res = client.post(
            "/api/auth/login", json={"email": "ana@example.com", "password": "nope-nope"}
        )
        assert res.status_code == 401

    def test_login_sets_cookie_usable_for_auth(self, client):
        _signup(client, "ana@example.com")
        # TestClient persiste la cookie httpOnly del login
        res = client.get("/api/auth/me")
        assert res.status_code == 200

    def test_update_profile(self, client):
        user = _signup(client, "ana@example.com")

        res = client.put(
            "/api/auth/me",
            json={"name": "Ana María", "email": "Ana.M@Example.com"},
            headers=user["headers"],
        )

        assert res.status_code == 200
        assert res.json()["email"] == "ana.m@example.com"
        me = client.get("/api/auth/me", headers=user["headers"]).json()
        assert (me["name"], me["email"]) == ("Ana María", "ana.m@example.com")
        login = client.post(
            "/api/auth/login", json={"email": "ana.m@example.com", "password": _PASSWORD}
        )
        assert login.status_code == 200

    def test_update_profile_email_in_use_is_conflict(self, client):
        _signup(client, "bob@example.com")
        ana = _signup(client, "ana@example.com")

        res = client.put(
            "/api/auth/me",
            json={"name": "Ana", "email": "bob@example.com"},
            headers=ana["headers"],
        )

        assert res.status_code == 409
        assert res.json()["code"] == "CONFLICT"
        me = client.get("/api/auth/me", headers=ana["headers"]).json()
        assert me["email"] == "ana@example.com"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "   ", "email": "ana@example.com"},
            {"name": "Ana", "email": "not-an-email"},
            {"name": "Ana", "email": "ana@localhost"},
            {"name": "Ana"},
        ],
    )
    def test_update_profile_validation(self, client, payload):
        user = _signup(client, "ana@example.com")

        res = client.put("/api/auth/me", json=payload, headers=user["headers"])

        assert res.status_code == 422
        assert res.json()["code"] == "VALIDATION_ERROR"

    def test_update_profile_requires_auth(self):
        res = TestClient(create_app()).put(
            "/api/auth/me", json={"name": "Ana", "email": "ana@example.com"}
        )
        assert res.status_code == 401

    def test_missing_token_is_problem_json(self):
        res = TestClient(create_app()).get("/api/workspaces")

        assert res.status_code == 401
        assert res.headers["content-type"].startswith("application/problem+json")
        assert res.json()["code"] == "UNAUTHORIZED"

    def test_garbage_token_is_401_even_on_optional_routes(self, client):
        res = client.get(
            "/api/files/share/anything/info",
            headers={"Authorization": "Bearer nope"},
        )
        # share info no exige usuario: el token no se lee
        assert res.status_code == 404

        owner = _signup(client, "o@example.com")
        ws = _create_workspace(client, owner)
        res = TestClient(client.app).get(
            f"/api/workspaces/{ws['id']}", headers={"Authorization": "Bearer nope"}
        )
        assert res.status_code == 401


class TestWorkspacesApi:
    def test_create_join_and_list_members(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)
        assert ws["role"] == "owner"
        assert ws["member_count"] == 1

        guest = _signup(client, "guest@example.com")
        joined = client.post(
            f"/api/workspaces/join/{ws['access_code']}", headers=guest["headers"]
        )
        assert joined.status_code == 200
        assert joined.json()["role"] == "viewer"

        members = client.get(
            f"/api/workspaces/{ws['id']}/members", headers=owner["headers"]
        ).json()["members"]
        assert [m["email"] for m in members] == ["owner@example.com", "guest@example.com"]

    def test_join_with_unknown_code_is_404(self, client):
        user = _signup(client, "u@example.com")
        res = client.post("/api/workspaces/join/nonexistent", headers=user["headers"])
        assert res.status_code == 404

    def test_private_workspace_forbidden_for_stranger(self, client):
        owner = _signup(client, "owner@example.com")
        stranger = _signup(client, "stranger@example.com")
        ws = _create_workspace(client, owner)

        res = client.get(f"/api/workspaces/{ws['id']}", headers=stranger["headers"])

        assert res.status_code == 403

    def test_public_workspace_hides_access_code_from_anonymous(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner, is_public=True)

        res = TestClient(client.app).get(f"/api/workspaces/{ws['id']}")

        assert res.status_code == 200
        assert res.json()["access_code"] is None
        assert res.json()["role"] is None

    def test_invite_and_transfer_ownership(self, client):
        owner = _signup(client, "owner@example.com")
        editor = _signup(client, "editor@example.com")
        ws = _create_workspace(client, owner)

        invited = client.post(
            f"/api/workspaces/{ws['id']}/invite",
            json={"email": "editor@example.com"},
            headers=owner["headers"],
        )
        assert invited.status_code == 201

        res = client.put(
            f"/api/workspaces/{ws['id']}/members/{editor['id']}",
            json={"role": "owner"},
            headers=owner["headers"],
        )
        assert res.status_code == 200
        assert res.json()["role"] == "owner"

        detail = client.get(f"/api/workspaces/{ws['id']}", headers=owner["headers"])
        assert detail.json()["owner_id"] == editor["id"]
        assert detail.json()["role"] == "editor"

    def test_invalid_role_is_422(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)

        res = client.put(
            f"/api/workspaces/{ws['id']}/members/{owner['id']}",
            json={"role": "admin"},
            headers=owner["headers"],
        )

        assert res.status_code == 422
        assert res.json()["code"] == "VALIDATION_ERROR"

    def test_member_leaves_with_204(self, client):
        owner = _signup(client, "owner@example.com")
        guest = _signup(client, "guest@example.com")
        ws = _create_workspace(client, owner)
        client.post(f"/api/workspaces/join/{ws['access_code']}", headers=guest["headers"])

        res = client.delete(
            f"/api/workspaces/{ws['id']}/members/{guest['id']}",
            headers=guest["headers"],
        )

        assert res.status_code == 204

    def test_delete_workspace_removes_files(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)
        file_id = _upload(client, owner, ws["id"]).json()["id"]

        res = client.delete(f"/api/workspaces/{ws['id']}", headers=owner["headers"])

        assert res.status_code == 200
        assert res.json()["files_removed"] == 1
        assert client.get(f"/api/files/{file_id}", headers=owner["headers"]).status_code == 404


class TestFilesApi:
    def test_anonymous_upload_share_download_and_info(self, client):
        res = client.post(
            "/api/files/anonymous",
            files={"file": ("report.pdf", b"%PDF-1.4", "application/pdf")},
        )
        assert res.status_code == 201, res.text
        body = res.json()
        assert body["workspace_id"] is None
        assert body["expires_at"] is not None
        assert body["share_url"].endswith(f"/api/files/share/{body['share_id']}")

        download = client.get(f"/api/files/share/{body['share_id']}")
        assert download.status_code == 200
        assert download.content == b"%PDF-1.4"
        assert download.headers["content-disposition"].startswith("attachment")
        assert "report.pdf" in download.headers["content-disposition"]

        info = client.get(f"/api/files/share/{body['share_id']}/info")
        assert info.json()["name"] == "report.pdf"
        assert info.json()["size"] == 8

    def test_expired_share_is_410(self, app, client):
        body = client.post(
            "/api/files/anonymous", files={"file": ("a.txt", b"x", "text/plain")}
        ).json()

        later = datetime.now(timezone.utc) + timedelta(hours=25)
        app.dependency_overrides[get_download_shared_file_use_case] = (
            lambda: DownloadSharedFileUseCase(
                get_file_repository(), get_blob_store(), clock=lambda: later
            )
        )

        res = client.get(f"/api/files/share/{body['share_id']}")

        assert res.status_code == 410
        assert res.json()["code"] == "EXPIRED_RESOURCE"

    def test_workspace_upload_versions_and_list(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)

        first = _upload(client, owner, ws["id"])
        second = _upload(client, owner, ws["id"])

        assert first.status_code == 201
        assert second.json()["versioned"] is True
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["version_count"] == 1

        listed = client.get(
            f"/api/files/workspace/{ws['id']}",
            params={"folder": "/docs"},
            headers=owner["headers"],
        ).json()["files"]
        assert [f["name"] for f in listed] == ["notes.txt"]

    def test_upload_to_workspace_requires_auth(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)

        res = TestClient(client.app).post(
            f"/api/files/workspace/{ws['id']}",
            files={"file": ("a.txt", b"x", "text/plain")},
        )

        assert res.status_code == 401

    def test_soft_delete_restore_and_purge(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)
        file_id = _upload(client, owner, ws["id"]).json()["id"]

        deleted = client.delete(f"/api/files/{file_id}", headers=owner["headers"])
        assert deleted.status_code == 200
        assert deleted.json()["state"] == "soft_deleted"

        trash = client.get(
            f"/api/files/workspace/{ws['id']}/deleted", headers=owner["headers"]
        ).json()["files"]
        assert [f["id"] for f in trash] == [file_id]
        assert client.get(f"/api/files/{file_id}", headers=owner["headers"]).status_code == 404

        restored = client.put(f"/api/files/{file_id}/restore", headers=owner["headers"])
        assert restored.json()["state"] == "active"

        purged = client.delete(f"/api/files/{file_id}/permanent", headers=owner["headers"])
        assert purged.status_code == 200
        assert purged.json() == {"file_id": file_id, "purged": True, "storage_cleaned": True}

    def test_viewer_cannot_purge(self, client):
        owner = _signup(client, "owner@example.com")
        viewer = _signup(client, "viewer@example.com")
        ws = _create_workspace(client, owner)
        client.post(f"/api/workspaces/join/{ws['access_code']}", headers=viewer["headers"])
        file_id = _upload(client, owner, ws["id"]).json()["id"]

        res = client.delete(f"/api/files/{file_id}/permanent", headers=viewer["headers"])

        assert res.status_code == 403
        assert res.json()["code"] == "FORBIDDEN"

    def test_rename_and_share_link(self, client):
        owner = _signup(client, "owner@example.com")
        ws = _create_workspace(client, owner)
        file_id = _upload(client, owner, ws["id"]).json()["id"]

        renamed = client.put(
            f"/api/files/{file_id}",
            json={"name": "final.txt", "folder": "/archive"},
            headers=owner["headers"],
        )
        assert renamed.status_code == 200
        assert renamed.json()["folder"] == "/archive"

        share = client.get(f"/api/files/{file_id}/share", headers=owner["headers"]).json()
        res = client.get(f"/api/files/share/{share['share_id']}")
        assert res.status_code == 200
        assert "final.txt" in res.headers["content-disposition"]

    def test_upload_over_limit_is_413(self, client, monkeypatch):
        monkeypatch.setenv("MAX_UPLOAD_BYTES", "4")
        get_settings.cache_clear()

        res = client.post(
            "/api/files/anonymous",
            files={"file": ("big.bin", b"12345", "application/octet-stream")},
        )

        assert res.status_code == 413
        assert res.json()["code"] == "PAYLOAD_TOO_LARGE"


class TestPlumbing:
    def test_healthz_and_request_id(self, client):
        res = client.get("/healthz", headers={"X-Request-Id": "req-123"})

        assert res.status_code == 200
        assert res.json()["ok"] is True
        assert res.json()["storage"] == "memory"
        assert res.headers["X-Request-Id"] == "req-123"

    def test_unknown_file_id_is_404_problem(self, client):
        res = client.get("/api/files/00000000-0000-0000-0000-000000000000")

        assert res.status_code == 404
        assert res.headers["content-type"].startswith("application/problem+json")
