"""GitHub REST client — request shapes and error mapping via httpx.MockTransport."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import base64
import json

import httpx
import pytest

from mvp_validator.services.github_client import (
    GitHubAPIError,
    GitHubClient,
    exchange_oauth_code,
)

API = "https://api.github.test"


def _client(handler):
    return GitHubClient("gho_test", base_url=API, transport=httpx.MockTransport(handler))


def _repo_json(name="tutor-scheduler"):
    return {
        "name": name,
        "full_name": f"octocat/{name}",
        "html_url": f"https://github.com/octocat/{name}",
        "private": False,
    }


class TestCreateRepository:
    def test_request_shape_and_result(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json=_repo_json())

        repo = asyncio.run(
            _client(handler).create_repository(name="tutor-scheduler", description="Tutors", private=True)
        )

        assert repo.full_name == "octocat/tutor-scheduler"
        assert repo.html_url == "https://github.com/octocat/tutor-scheduler"
        assert seen["method"] == "POST"
        assert seen["path"] == "/user/repos"
        assert seen["auth"] == "Bearer gho_test"
        assert seen["body"] == {
            "name": "tutor-scheduler",
            "description": "Tutors",
            "private": True,
            "auto_init": True,
            "license_template": "mit",
        }

    def test_github_message_surfaced_verbatim(self):
        def handler(request):
            return httpx.Response(
                422,
                json={
                    "message": "Repository creation failed.",
                    "errors": [{"resource": "Repository", "message": "name already exists on this account"}],
                },
            )

        with pytest.raises(GitHubAPIError) as exc_info:
            asyncio.run(_client(handler).create_repository(name="dup", description="d"))
        assert exc_info.value.message == "Repository creation failed."
        assert exc_info.value.status_code == 422

    def test_non_json_error_uses_fallback_message(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        with pytest.raises(GitHubAPIError) as exc_info:
            asyncio.run(_client(handler).create_repository(name="x", description="d"))
        assert exc_info.value.message == "Failed to create repository"

    def test_transport_error_wrapped(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GitHubAPIError):
            asyncio.run(_client(handler).create_repository(name="x", description="d"))


class TestPutFile:
    def test_content_is_base64_encoded(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"content": {"path": "docs/project-brief.md"}})

        asyncio.run(
            _client(handler).put_file(
                full_name="octocat/tutor-scheduler",
                path="docs/project-brief.md",
                content="# Brief\n",
                message="Add docs/project-brief.md",
            )
        )

        assert seen["method"] == "PUT"
        assert seen["path"] == "/repos/octocat/tutor-scheduler/contents/docs/project-brief.md"
        assert seen["body"]["message"] == "Add docs/project-brief.md"
        assert base64.b64decode(seen["body"]["content"]).decode("utf-8") == "# Brief\n"

    def test_update_sends_existing_sha(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"content": {"path": "README.md"}})

        asyncio.run(
            _client(handler).put_file(
                full_name="octocat/tutor-scheduler",
                path="README.md",
                content="# Tutor scheduler\n",
                message="Add README.md",
                sha="abc123",
            )
        )
        assert seen["body"]["sha"] == "abc123"

    def test_new_file_sends_no_sha(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={})

        asyncio.run(
            _client(handler).put_file(full_name="o/r", path=".gitignore", content="x", message="Add .gitignore")
        )
        assert "sha" not in seen["body"]

    def test_rejected_file_raises(self):
        def handler(request):
            return httpx.Response(409, json={"message": "README.md already exists"})

        with pytest.raises(GitHubAPIError, match="README.md already exists"):
            asyncio.run(
                _client(handler).put_file(full_name="o/r", path="README.md", content="x", message="Add README.md")
            )


class TestGetFileSha:
    def test_existing_file(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/repos/octocat/tutor-scheduler/contents/README.md"
            return httpx.Response(200, json={"path": "README.md", "sha": "abc123"})

        sha = asyncio.run(_client(handler).get_file_sha(full_name="octocat/tutor-scheduler", path="README.md"))
        assert sha == "abc123"

    def test_missing_file(self):
        def handler(request):
            return httpx.Response(404, json={"message": "Not Found"})

        assert asyncio.run(_client(handler).get_file_sha(full_name="o/r", path="docs/project-brief.md")) is None

    def test_error_raises(self):
        def handler(request):
            return httpx.Response(403, json={"message": "Resource not accessible by integration"})

        with pytest.raises(GitHubAPIError, match="Resource not accessible"):
            asyncio.run(_client(handler).get_file_sha(full_name="o/r", path="README.md"))


class TestOtherCalls:
    def test_get_authenticated_user(self):
        def handler(request):
            assert request.url.path == "/user"
            return httpx.Response(200, json={"login": "octocat", "id": 1})

        user = asyncio.run(_client(handler).get_authenticated_user())
        assert user.login == "octocat"

    def test_delete_repository(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            return httpx.Response(204)

        asyncio.run(_client(handler).delete_repository("octocat/tutor-scheduler"))
        assert seen == {"method": "DELETE", "path": "/repos/octocat/tutor-scheduler"}

    def test_token_required(self):
        with pytest.raises(ValueError):
            GitHubClient("")


class TestOAuthExchange:
    def test_exchange_returns_token(self):
        def handler(request):
            assert json.loads(request.content)["code"] == "abc"
            return httpx.Response(200, json={"access_token": "gho_new", "token_type": "bearer"})

        token = asyncio.run(exchange_oauth_code("abc", transport=httpx.MockTransport(handler)))
        assert token == "gho_new"

    def test_exchange_error_payload(self):
        def handler(request):
            return httpx.Response(200, json={"error": "bad_verification_code"})

        with pytest.raises(GitHubAPIError, match="Failed to get access token"):
            asyncio.run(exchange_oauth_code("expired", transport=httpx.MockTransport(handler)))
