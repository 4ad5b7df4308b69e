"""Input validation helpers for ghupload.

Each validator returns the normalized value or raises a ValidationError subclass.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from ghupload.core.exceptions import (
    InvalidConcurrencyError,
    InvalidIdentifierError,
    InvalidURLError,
    PathValidationError,
    ValidationError,
)

# =============================================================================
# Patterns
# =============================================================================

# GitHub user/org names: alphanumerics and single hyphens, max 39 chars
OWNER_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9])){0,38}$")
REPO_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,100}$")
BRANCH_FORBIDDEN = re.compile(r"(\.\.|[\s~^:?*\[\\]|@\{|//)")


# =============================================================================
# URLs
# =============================================================================


def validate_api_url(url: str) -> str:
    """Validate and normalize an http(s) base URL.

    Args:
        url: URL to validate.

    Returns:
        URL without surrounding whitespace or trailing slashes.

    Raises:
        InvalidURLError: If the URL is empty, has no host, or is not http(s).
    """
    if not url or not isinstance(url, str):
        raise InvalidURLError(str(url), "URL is required")

    url = url.strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "must start with http:// or https://")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")
    return url


# =============================================================================
# Repository Identifiers
# =============================================================================


def validate_owner(owner: str) -> str:
    """Validate a repository owner (user or organization)."""
    owner = (owner or "").strip()
    if not owner:
        raise InvalidIdentifierError("owner", owner, "owner is required")
    if not OWNER_PATTERN.match(owner):
        raise InvalidIdentifierError("owner", owner, "invalid characters")
    return owner


def validate_repo_name(repo: str) -> str:
    """Validate a repository name."""
    repo = (repo or "").strip()
    if not repo:
        raise InvalidIdentifierError("repo", repo, "repository name is required")
    if repo in (".", "..") or not REPO_PATTERN.match(repo):
        raise InvalidIdentifierError("repo", repo, "invalid characters")
    return repo


def validate_branch(branch: str) -> str:
    """Validate a branch name against git ref rules that matter here."""
    branch = (branch or "").strip()
    if not branch:
        raise InvalidIdentifierError("branch", branch, "branch is required")
    if BRANCH_FORBIDDEN.search(branch):
        raise InvalidIdentifierError("branch", branch, "invalid ref characters")
    if branch.startswith(("/", "-")) or branch.endswith(("/", ".", ".lock")):
        raise InvalidIdentifierError("branch", branch, "invalid ref name")
    return branch


def validate_target_dir(target_dir: str) -> str:
    """Validate and normalize the remote container path.

    Leading and trailing slashes are stripped; empty segments and
    relative segments are rejected.

    Returns:
        Normalized path such as ``assets/images``.
    """
    if target_dir is None:
        raise PathValidationError("", "target directory is required")
    normalized = target_dir.strip().strip("/")
    if not normalized:
        raise PathValidationError(target_dir, "target directory is required")
    for segment in normalized.split("/"):
        if segment in ("", ".", ".."):
            raise PathValidationError(target_dir, "empty or relative path segment")
    return normalized


# =============================================================================
# Numbers
# =============================================================================


def validate_concurrency(value: Any) -> int:
    """Validate a concurrency limit.

    Raises:
        InvalidConcurrencyError: If value is not an integer >= 1.
    """
    if isinstance(value, bool):
        raise InvalidConcurrencyError(value)
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise InvalidConcurrencyError(value)
    if limit != value and not isinstance(value, str):
        raise InvalidConcurrencyError(value)
    if limit < 1:
        raise InvalidConcurrencyError(value)
    return limit


def validate_timeout(value: Any) -> int:
    """Validate an HTTP timeout in seconds."""
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid timeout: {value}", field="timeout", value=value)
    if timeout <= 0:
        raise ValidationError(
            f"Invalid timeout: {value} (must be positive)", field="timeout", value=value
        )
    return timeout


# =============================================================================
# Paths
# =============================================================================


def validate_source_dir(path: Path | str) -> Path:
    """Validate that a local source directory exists.

    Raises:
        PathValidationError: If the path is missing or not a directory.
    """
    source = Path(path).expanduser()
    if not source.exists():
        raise PathValidationError(str(path), "directory does not exist")
    if not source.is_dir():
        raise PathValidationError(str(path), "not a directory")
    return source
