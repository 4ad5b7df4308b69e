"""HTTP client for the GitHub repository contents API.

Provides the three remote operations used by uploads: version lookup,
create-or-update write, and container bootstrap. Every call is a single
attempt; status codes are translated into the ghupload exception hierarchy.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from ghupload.core.config import DEFAULT_API_URL, DEFAULT_TIMEOUT, UploadSettings
from ghupload.core.exceptions import (
    AuthenticationError,
    ContainerSetupError,
    ContentStoreError,
    NetworkError,
    PermissionDeniedError,
    ServerUnreachableError,
    VersionConflictError,
)
from ghupload.core.validation import validate_api_url
from ghupload.models.content import RemoteObjectRef, WriteRequest, WriteResult

# =============================================================================
# Constants
# =============================================================================

API_VERSION = "2022-11-28"
ACCEPT_HEADER = "application/vnd.github+json"
CONTAINER_PLACEHOLDER = ".gitkeep"


def _error_message(resp: httpx.Response) -> str:
    """Extract the store's error message from a response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = resp.text.strip()
    return text[:200] if text else f"HTTP {resp.status_code}"


# =============================================================================
# ContentClient
# =============================================================================


@dataclass
class ContentClient:
    """HTTP client for a single repository's contents endpoint."""

    token: str = field(repr=False)
    owner: str
    repo: str
    api_url: str = DEFAULT_API_URL
    timeout: int = DEFAULT_TIMEOUT
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _client: httpx.Client | None = field(init=False, default=None, repr=False)
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.api_url = validate_api_url(self.api_url)

    @classmethod
    def from_settings(
        cls,
        settings: UploadSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> ContentClient:
        """Create a client for the repository named in ``settings``."""
        return cls(
            token=settings.token,
            owner=settings.owner,
            repo=settings.repo,
            api_url=settings.api_url,
            timeout=settings.timeout,
            transport=transport,
        )

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create the shared HTTP client."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.api_url,
                    timeout=self.timeout,
                    headers={
                        "Authorization": f"Bearer {self.token}",
                        "Accept": ACCEPT_HEADER,
                        "X-GitHub-Api-Version": API_VERSION,
                    },
                    follow_redirects=True,
                    transport=self.transport,
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> ContentClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # HTTP
    # =========================================================================

    def contents_path(self, path: str) -> str:
        """Build the API path for a repository file or directory."""
        return f"/repos/{self.owner}/{self.repo}/contents/{quote(path.strip('/'))}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any | None = None,
    ) -> httpx.Response:
        """Execute one HTTP request.

        Authentication failures raise; every other status is returned to
        the caller for classification.

        Raises:
            AuthenticationError: On 401.
            PermissionDeniedError: On 403.
            ServerUnreachableError: If the connection cannot be established.
            NetworkError: On timeouts and other transport failures.
        """
        client = self._get_client()
        try:
            resp = client.request(method, path, params=params, json=json)
        except httpx.ConnectError as e:
            raise ServerUnreachableError(self.api_url) from e
        except httpx.TimeoutException as e:
            raise NetworkError(self.api_url, f"Timeout after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise NetworkError(self.api_url, str(e)) from e

        if resp.status_code == 401:
            raise AuthenticationError(self.api_url, _error_message(resp))
        if resp.status_code == 403:
            raise PermissionDeniedError(f"{self.owner}/{self.repo}", method.lower())
        return resp

    # =========================================================================
    # Contents Operations
    # =========================================================================

    def lookup(self, path: str, branch: str) -> RemoteObjectRef:
        """Look up the current revision of a file.

        Args:
            path: Repository-relative file path.
            branch: Branch to read from.

        Returns:
            Reference with the blob sha, or an empty reference on 404.

        Raises:
            ContentStoreError: On any status other than 200/404, or a 200
                that does not describe a single file.
        """
        resp = self._request("GET", self.contents_path(path), params={"ref": branch})

        if resp.status_code == 404:
            return RemoteObjectRef(path=path)
        if resp.status_code != 200:
            raise ContentStoreError(
                f"Lookup failed: {_error_message(resp)}",
                status_code=resp.status_code,
                path=path,
            )

        body = resp.json()
        sha = body.get("sha") if isinstance(body, dict) else None
        if not sha:
            raise ContentStoreError(
                "Lookup returned no version token (path is not a file)",
                status_code=resp.status_code,
                path=path,
            )
        return RemoteObjectRef(path=path, sha=sha)

    def write(self, request: WriteRequest) -> WriteResult:
        """Create or update a file.

        Args:
            request: Write request; carries a sha only for updates.

        Returns:
            WriteResult with the store's download URL.

        Raises:
            VersionConflictError: If the sha is stale or missing for an
                existing file.
            ContentStoreError: On any other non-2xx response.
        """
        resp = self._request("PUT", self.contents_path(request.path), json=request.to_payload())

        if resp.status_code == 409 or (resp.status_code == 422 and "sha" in _error_message(resp)):
            raise VersionConflictError(request.path, resp.status_code, _error_message(resp))
        if not resp.is_success:
            raise ContentStoreError(
                f"Write failed: {_error_message(resp)}",
                status_code=resp.status_code,
                path=request.path,
            )

        body = resp.json()
        content = (body.get("content") or {}) if isinstance(body, dict) else {}
        primary_url = content.get("download_url") or content.get("html_url")
        if not primary_url:
            raise ContentStoreError(
                "Write response has no content URL",
                status_code=resp.status_code,
                path=request.path,
            )
        return WriteResult(
            path=request.path,
            primary_url=primary_url,
            sha=content.get("sha"),
            created=resp.status_code == 201,
        )

    def ensure_container(self, path: str, branch: str, message: str | None = None) -> bool:
        """Make sure a directory exists, creating a placeholder file if not.

        Args:
            path: Repository-relative directory path.
            branch: Target branch.
            message: Commit message for the placeholder.

        Returns:
            True if the container was created, False if it already existed.

        Raises:
            ContainerSetupError: If the directory state cannot be determined,
                the path is not a directory, or the placeholder cannot be
                written.
        """
        resp = self._request("GET", self.contents_path(path), params={"ref": branch})
        if resp.is_success:
            try:
                body = resp.json()
            except ValueError:
                body = None
            # A directory answers with a listing; anything else is a file or symlink
            if isinstance(body, list):
                return False
            raise ContainerSetupError(path, "not a directory", resp.status_code)
        if resp.status_code != 404:
            raise ContainerSetupError(path, _error_message(resp), resp.status_code)

        placeholder = WriteRequest(
            path=f"{path.strip('/')}/{CONTAINER_PLACEHOLDER}",
            message=message or f"Create {path} directory",
            content="",
            branch=branch,
        )
        try:
            self.write(placeholder)
        except ContentStoreError as e:
            raise ContainerSetupError(path, e.message, e.status_code) from e
        return True

    def ping(self) -> dict[str, Any]:
        """Check repository access and report basic metadata.

        Raises:
            ContentStoreError: If the repository cannot be read.
        """
        start = time.time()
        resp = self._request("GET", f"/repos/{self.owner}/{self.repo}")
        latency = int((time.time() - start) * 1000)
        if not resp.is_success:
            raise ContentStoreError(
                f"Repository check failed: {_error_message(resp)}",
                status_code=resp.status_code,
                path=f"{self.owner}/{self.repo}",
            )

        body = resp.json()
        permissions = body.get("permissions") or {}
        return {
            "repository": body.get("full_name", f"{self.owner}/{self.repo}"),
            "api_url": self.api_url,
            "default_branch": body.get("default_branch", ""),
            "private": body.get("private", False),
            "can_push": permissions.get("push", False),
            "latency_ms": latency,
        }
