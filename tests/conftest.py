"""Pytest configuration and fixtures for ghupload tests."""

from __future__ import annotations

import itertools
import json
import tempfile
import threading
from pathlib import Path
from typing import Generator

import httpx
import pytest

from ghupload.core import config as config_module
from ghupload.core.client import ContentClient
from ghupload.core.config import UploadSettings

OWNER = "octo"
REPO = "assets"

ENV_VARS = (
    config_module.ENV_TOKEN,
    config_module.ENV_OWNER,
    config_module.ENV_REPO,
    config_module.ENV_BRANCH,
    config_module.ENV_TARGET_DIR,
    config_module.ENV_CONCURRENCY,
    config_module.ENV_TIMEOUT,
    config_module.ENV_API_URL,
    config_module.ENV_PROFILE,
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[Path, None, None]:
    """Keep tests away from the user's environment, config file and ./.env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.yaml")
    yield workdir


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: blog

profiles:
  blog:
    owner: octo
    repo: blog-assets
    branch: gh-pages
    target_dir: posts/img
    concurrency: 5
    timeout: 15

  docs:
    owner: octo
    repo: docs
"""


@pytest.fixture
def settings() -> UploadSettings:
    """Settings for the fake repository."""
    return UploadSettings(
        token="test-token",
        owner=OWNER,
        repo=REPO,
        branch="main",
        target_dir="images",
        concurrency=2,
    )


# =============================================================================
# Fake contents API
# =============================================================================


class FakeContentStore:
    """In-memory stand-in for the repository contents API.

    Follows the API's version rules: updates need the current sha, creates
    must not send one.
    """

    def __init__(self, owner: str = OWNER, repo: str = REPO) -> None:
        self.owner = owner
        self.repo = repo
        self.prefix = f"/repos/{owner}/{repo}/contents/"
        self.files: dict[str, str] = {}
        self.bodies: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.lookup_status: dict[str, int] = {}
        self.write_status: dict[str, int] = {}
        self.repo_info: dict = {
            "full_name": f"{owner}/{repo}",
            "default_branch": "main",
            "private": False,
            "permissions": {"push": True},
        }
        self._shas = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def add_file(self, path: str, sha: str) -> None:
        self.files[path] = sha

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def _download_url(self, path: str, branch: str) -> str:
        return f"https://raw.githubusercontent.com/{self.owner}/{self.repo}/{branch}/{path}"

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
            url_path = request.url.path

            if url_path == f"/repos/{self.owner}/{self.repo}":
                return httpx.Response(200, json=self.repo_info)

            if not url_path.startswith(self.prefix):
                return httpx.Response(404, json={"message": "Not Found"})
            path = url_path[len(self.prefix):]

            if request.method == "GET":
                return self._get(path)
            if request.method == "PUT":
                return self._put(path, json.loads(request.content))
            return httpx.Response(405, json={"message": "Method Not Allowed"})

    def _get(self, path: str) -> httpx.Response:
        if path in self.lookup_status:
            status = self.lookup_status[path]
            return httpx.Response(status, json={"message": f"lookup failed with {status}"})
        if path in self.files:
            return httpx.Response(200, json={"type": "file", "path": path, "sha": self.files[path]})
        children = [p for p in self.files if p.startswith(f"{path}/")]
        if children:
            return httpx.Response(
                200, json=[{"type": "file", "path": p, "sha": self.files[p]} for p in children]
            )
        return httpx.Response(404, json={"message": "Not Found"})

    def _put(self, path: str, body: dict) -> httpx.Response:
        if path in self.write_status:
            status = self.write_status[path]
            return httpx.Response(status, json={"message": f"write failed with {status}"})

        current = self.files.get(path)
        if current is not None and "sha" not in body:
            return httpx.Response(422, json={"message": "Invalid request.\n\n\"sha\" wasn't supplied."})
        if current is not None and body["sha"] != current:
            return httpx.Response(409, json={"message": f"{path} does not match {body['sha']}"})
        if current is None and "sha" in body:
            return httpx.Response(422, json={"message": "sha given for a new file"})

        new_sha = f"sha-{next(self._shas)}"
        self.files[path] = new_sha
        self.bodies[path] = body
        return httpx.Response(
            200 if current else 201,
            json={
                "content": {
                    "name": path.rsplit("/", 1)[-1],
                    "path": path,
                    "sha": new_sha,
                    "download_url": self._download_url(path, body["branch"]),
                    "html_url": f"https://github.com/{self.owner}/{self.repo}/blob/{body['branch']}/{path}",
                },
                "commit": {"sha": f"commit-{new_sha}", "message": body["message"]},
            },
        )


@pytest.fixture
def store() -> FakeContentStore:
    """Empty fake repository."""
    return FakeContentStore()


@pytest.fixture
def client(store: FakeContentStore, settings: UploadSettings) -> Generator[ContentClient, None, None]:
    """ContentClient wired to the fake repository."""
    with ContentClient.from_settings(settings, transport=store.transport) as c:
        yield c


@pytest.fixture
def image_dir(temp_dir: Path) -> Path:
    """Directory with two images and a non-image file."""
    images = temp_dir / "images"
    images.mkdir()
    (images / "a.png").write_bytes(b"\x89PNG fake a")
    (images / "b.jpg").write_bytes(b"\xff\xd8 fake b")
    (images / "notes.txt").write_text("not an image")
    return images
