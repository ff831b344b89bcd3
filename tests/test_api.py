"""
HTTP surface: envelopes, status codes and bearer-token handling, with the
services wired to in-memory stores
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core.errors import UpstreamError
from app.core.security import ALGORITHM
from conftest import TEST_SECRET


def _register(client, email="jo@x.com", password="p", name="Jo"):
    return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})


def _auth_headers(client, email="jo@x.com"):
    token = _register(client, email=email).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_health(client):
    body = client.get("/api/health").json()
    assert body["status"] == "success"
    assert body["message"] == "AI Job Accessibility API is running"
    assert "timestamp" in body and "environment" in body


class TestAuthRoutes:
    def test_register_and_login(self, client):
        r = _register(client, email="Jo@X.com")
        assert r.status_code == 200
        body = r.json()
        assert body["status"] == "success"
        assert body["user"]["email"] == "jo@x.com"
        assert body["token"]

        r = client.post("/api/auth/login", json={"email": "jo@x.com", "password": "p"})
        assert r.status_code == 200
        assert r.json()["user"]["id"] == body["user"]["id"]

    def test_register_conflict(self, client):
        _register(client)
        r = _register(client, email="JO@x.com")
        assert r.status_code == 400
        assert r.json()["status"] == "error"
        assert r.json()["message"] == "User already exists"

    def test_register_missing_fields(self, client):
        r = client.post("/api/auth/register", json={"email": "a@b.c"})
        assert r.status_code == 400
        assert r.json()["message"] == "Name, email, and password are required"

    def test_login_bad_credentials(self, client):
        _register(client)
        r = client.post("/api/auth/login", json={"email": "jo@x.com", "password": "wrong"})
        assert r.status_code == 400
        assert r.json() == {"status": "error", "message": "Invalid credentials"}

    def test_me_returns_profile_without_password(self, client):
        headers = _auth_headers(client)
        for path in ("/api/auth/me", "/api/auth/verify"):
            r = client.get(path, headers=headers)
            assert r.status_code == 200
            data = r.json()["data"]
            assert data["email"] == "jo@x.com"
            assert "password" not in data

    def test_me_without_token(self, client):
        r = client.get("/api/auth/me")
        assert r.status_code == 401
        assert r.json()["message"] == "Access denied. No token provided."

    def test_me_with_expired_token(self, client):
        past = datetime.now(timezone.utc) - timedelta(days=1)
        token = jwt.encode({"id": "64b000000000000000000001", "exp": int(past.timestamp())},
                           TEST_SECRET, algorithm=ALGORITHM)
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["message"] == "Token expired. Please login again."

    def test_me_with_foreign_signature(self, client):
        future = datetime.now(timezone.utc) + timedelta(days=1)
        token = jwt.encode({"id": "x", "exp": int(future.timestamp())},
                           "some-other-secret-that-is-long-enough", algorithm=ALGORITHM)
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 401
        assert r.json()["message"] == "Invalid token signature"

    def test_me_with_garbage_token(self, client):
        r = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        assert r.status_code == 401
        assert r.json()["message"] == "Invalid token format."

    def test_me_for_vanished_user(self, client, token_service):
        token = token_service.issue("64b000000000000000000009")
        r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert r.status_code == 404
        assert r.json()["message"] == "User not found"


class TestResumeRoutes:
    def test_requires_token(self, client):
        assert client.get("/api/resume").status_code == 401
        assert client.post("/api/resume", json={}).status_code == 401

    def test_crud_lifecycle(self, client):
        headers = _auth_headers(client)

        r = client.post("/api/resume", json={"personalInfo": {"fullName": "Jo"}, "template": "modern"},
                        headers=headers)
        assert r.status_code == 201
        created = r.json()["data"]
        resume_id = created["id"]
        assert created["personalInfo"]["fullName"] == "Jo"

        r = client.get("/api/resume", headers=headers)
        assert [x["id"] for x in r.json()["data"]] == [resume_id]

        r = client.put(f"/api/resume/{resume_id}", json={"template": "x"}, headers=headers)
        assert r.status_code == 200
        assert r.json()["data"]["template"] == "x"
        assert r.json()["data"]["personalInfo"]["fullName"] == "Jo"

        r = client.delete(f"/api/resume/{resume_id}", headers=headers)
        assert r.json() == {"status": "success", "message": "Resume deleted successfully"}

        r = client.get(f"/api/resume/{resume_id}", headers=headers)
        assert r.status_code == 404
        assert r.json()["message"] == "Resume not found"
        assert client.get("/api/resume", headers=headers).json()["data"] == []

    def test_other_users_resume_is_not_found(self, client):
        owner = _auth_headers(client, email="owner@x.com")
        other = _auth_headers(client, email="other@x.com")
        resume_id = client.post("/api/resume", json={"template": "modern"}, headers=owner).json()["data"]["id"]

        assert client.get(f"/api/resume/{resume_id}", headers=other).status_code == 404
        assert client.delete(f"/api/resume/{resume_id}", headers=other).status_code == 404

    def test_generate(self, client, generator):
        headers = _auth_headers(client)
        r = client.post("/api/resume/generate", json={"prompt": "Jane, backend engineer"}, headers=headers)

        assert r.status_code == 201
        body = r.json()
        assert body["message"] == "AI-generated resume created successfully"
        assert body["data"]["aiGenerated"] is True
        assert body["data"]["aiPrompt"] == "Jane, backend engineer"
        assert body["data"]["template"] == "modern"
        assert body["data"]["skills"]["technical"] == ["Python", "MongoDB"]

    def test_generate_upstream_failure_exposes_detail_outside_production(self, client, generator):
        generator.generate.side_effect = UpstreamError(
            "Failed to generate AI resume", detail="Gemini API error: boom (code: 500)", status_code=500)
        headers = _auth_headers(client)

        r = client.post("/api/resume/generate", json={"prompt": "x"}, headers=headers)

        assert r.status_code == 500
        assert r.json()["message"] == "Failed to generate AI resume"
        assert r.json()["error"] == "Gemini API error: boom (code: 500)"

    def test_upload_returns_placeholder(self, client):
        r = client.post("/api/resume/upload", files={"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")})
        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "Resume uploaded successfully"
        assert body["data"]["personalInfo"]["summary"] == "File uploaded: cv.pdf"

    def test_upload_without_file(self, client):
        r = client.post("/api/resume/upload")
        assert r.status_code == 400
        assert r.json()["message"] == "No file uploaded"

    def test_invalid_body_is_400_envelope(self, client):
        headers = _auth_headers(client)
        r = client.post("/api/resume", json={"experience": "not a list"}, headers=headers)
        assert r.status_code == 400
        assert r.json()["status"] == "error"


class TestTaxonomyRoutes:
    def test_autocomplete_passes_query(self, client, taxonomy_proxy):
        r = client.get("/api/skills/autocomplete", params={"begins_with": "py"})

        assert r.status_code == 200
        assert r.json() == {"status": "success", "data": [{"uuid": "s1", "name": "python"}]}
        path, params = taxonomy_proxy.forward.call_args.args
        assert path == "/skills/autocomplete"
        assert dict(params) == {"begins_with": "py"}

    @pytest.mark.parametrize("url,path", [
        ("/api/skills", "/skills"),
        ("/api/skills/abc", "/skills/abc"),
        ("/api/jobs", "/jobs"),
        ("/api/jobs/autocomplete", "/jobs/autocomplete"),
        ("/api/jobs/42", "/jobs/42"),
    ])
    def test_routes_forward_to_matching_path(self, client, taxonomy_proxy, url, path):
        assert client.get(url).status_code == 200
        assert taxonomy_proxy.forward.call_args.args[0] == path

    def test_upstream_failure_is_502(self, client, taxonomy_proxy):
        taxonomy_proxy.forward.side_effect = UpstreamError(
            "Skills API request failed", detail="503 Server Error", status_code=502)
        r = client.get("/api/jobs")
        assert r.status_code == 502
        assert r.json()["status"] == "error"
        assert r.json()["message"] == "Skills API request failed"
