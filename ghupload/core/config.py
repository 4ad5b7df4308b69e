"""Configuration management for ghupload.

Supports YAML profiles, ``.env`` files, and environment variable overrides.
All sources are resolved once into an immutable ``UploadSettings``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from ghupload.core.exceptions import (
    ConfigurationError,
    MissingTokenError,
    ProfileNotFoundError,
)
from ghupload.core.validation import (
    validate_api_url,
    validate_branch,
    validate_concurrency,
    validate_owner,
    validate_repo_name,
    validate_target_dir,
    validate_timeout,
)

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "ghupload"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
DEFAULT_ENV_FILE = Path(".env")

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_CDN_BASE = "https://cdn.jsdelivr.net/gh"
DEFAULT_BRANCH = "main"
DEFAULT_TARGET_DIR = "images"
DEFAULT_CONCURRENCY = 3
DEFAULT_TIMEOUT = 30
DEFAULT_COMMIT_MESSAGE = "Upload {name} via GitHub API"

# Environment variable names
ENV_TOKEN = "GITHUB_TOKEN"
ENV_OWNER = "REPO_OWNER"
ENV_REPO = "REPO_NAME"
ENV_BRANCH = "BRANCH"
ENV_TARGET_DIR = "TARGET_DIR"
ENV_CONCURRENCY = "CONCURRENCY"
ENV_TIMEOUT = "GHUPLOAD_TIMEOUT"
ENV_API_URL = "GITHUB_API_URL"
ENV_PROFILE = "GHUPLOAD_PROFILE"


# =============================================================================
# Profile
# =============================================================================


@dataclass
class Profile:
    """Configuration profile for one target repository."""

    owner: str = ""
    repo: str = ""
    branch: str = DEFAULT_BRANCH
    target_dir: str = DEFAULT_TARGET_DIR
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: int = DEFAULT_TIMEOUT
    api_url: str = DEFAULT_API_URL
    cdn_base: str = DEFAULT_CDN_BASE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "owner": self.owner,
            "repo": self.repo,
            "branch": self.branch,
            "target_dir": self.target_dir,
            "concurrency": self.concurrency,
            "timeout": self.timeout,
            "api_url": self.api_url,
            "cdn_base": self.cdn_base,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            owner=data.get("owner", ""),
            repo=data.get("repo", ""),
            branch=data.get("branch", DEFAULT_BRANCH),
            target_dir=data.get("target_dir", DEFAULT_TARGET_DIR),
            concurrency=data.get("concurrency", DEFAULT_CONCURRENCY),
            timeout=data.get("timeout", DEFAULT_TIMEOUT),
            api_url=data.get("api_url", DEFAULT_API_URL),
            cdn_base=data.get("cdn_base", DEFAULT_CDN_BASE),
        )

    def with_env_overrides(self) -> "Profile":
        """Return a copy with environment variables applied on top."""
        overrides: dict[str, Any] = {}
        if owner := os.getenv(ENV_OWNER):
            overrides["owner"] = owner
        if repo := os.getenv(ENV_REPO):
            overrides["repo"] = repo
        if branch := os.getenv(ENV_BRANCH):
            overrides["branch"] = branch
        if target_dir := os.getenv(ENV_TARGET_DIR):
            overrides["target_dir"] = target_dir
        if concurrency := os.getenv(ENV_CONCURRENCY):
            overrides["concurrency"] = concurrency
        if timeout := os.getenv(ENV_TIMEOUT):
            overrides["timeout"] = timeout
        if api_url := os.getenv(ENV_API_URL):
            overrides["api_url"] = api_url
        return replace(self, **overrides)


# =============================================================================
# Upload Settings
# =============================================================================


@dataclass(frozen=True)
class UploadSettings:
    """Resolved, validated settings for one upload run.

    Constructed once and passed into the client, service and tasks.
    """

    token: str = field(repr=False)
    owner: str
    repo: str
    branch: str = DEFAULT_BRANCH
    target_dir: str = DEFAULT_TARGET_DIR
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: int = DEFAULT_TIMEOUT
    api_url: str = DEFAULT_API_URL
    cdn_base: str = DEFAULT_CDN_BASE
    commit_message: str = DEFAULT_COMMIT_MESSAGE

    def __post_init__(self) -> None:
        """Validate and normalize all fields."""
        object.__setattr__(self, "owner", validate_owner(self.owner))
        object.__setattr__(self, "repo", validate_repo_name(self.repo))
        object.__setattr__(self, "branch", validate_branch(self.branch))
        object.__setattr__(self, "target_dir", validate_target_dir(self.target_dir))
        object.__setattr__(self, "concurrency", validate_concurrency(self.concurrency))
        object.__setattr__(self, "timeout", validate_timeout(self.timeout))
        object.__setattr__(self, "api_url", validate_api_url(self.api_url))
        object.__setattr__(self, "cdn_base", validate_api_url(self.cdn_base))
        if "{name}" not in self.commit_message:
            raise ConfigurationError(
                "Commit message must contain a {name} placeholder",
                field="commit_message",
                value=self.commit_message,
            )

    @property
    def repository(self) -> str:
        """Return ``owner/repo``."""
        return f"{self.owner}/{self.repo}"

    def message_for(self, name: str) -> str:
        """Render the commit message for a file name."""
        return self.commit_message.replace("{name}", name)

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        token: Optional[str],
        *,
        require_token: bool = True,
        **overrides: Any,
    ) -> "UploadSettings":
        """Build settings from a profile plus explicit overrides.

        Args:
            profile: Profile with environment overrides already applied.
            token: API token.
            require_token: If False, a missing token becomes an empty string.
            **overrides: Non-None values take precedence over the profile.

        Returns:
            Validated settings.

        Raises:
            MissingTokenError: If no token is available and one is required.
            ValidationError: If any field is invalid.
        """
        if not token and require_token:
            raise MissingTokenError(ENV_TOKEN)

        values = profile.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(token=token or "", **values)


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Application configuration."""

    default_profile: str = "default"
    output_format: str = "table"
    profiles: dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file.

        Args:
            config_path: Optional path to config file.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

                config.default_profile = data.get("default_profile", "default")
                config.output_format = data.get("output_format", "table")

                for name, pdata in (data.get("profiles") or {}).items():
                    config.profiles[name] = Profile.from_dict(pdata or {})
            except (OSError, yaml.YAMLError, AttributeError) as e:
                raise ConfigurationError(f"Failed to load config: {e}")

        if profile := os.getenv(ENV_PROFILE):
            config.default_profile = profile

        return config

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save config to file (tokens are never written).

        Args:
            config_path: Optional path to config file.
        """
        path = config_path or CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "default_profile": self.default_profile,
            "output_format": self.output_format,
            "profiles": {name: p.to_dict() for name, p in self.profiles.items()},
        }

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def get_profile(self, name: Optional[str] = None) -> Profile:
        """Get profile by name or default.

        Args:
            name: Profile name. If None, uses default_profile.

        Returns:
            Profile configuration.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        name = name or self.default_profile
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        return self.profiles[name]

    def resolve_profile(self, name: Optional[str] = None) -> Profile:
        """Get the named profile with environment overrides applied.

        An unnamed lookup falls back to an empty profile, so a run driven
        purely by environment variables needs no config file.
        """
        if name is None and self.default_profile not in self.profiles:
            profile = Profile()
        else:
            profile = self.get_profile(name)
        return profile.with_env_overrides()

    def has_profile(self, name: str) -> bool:
        """Check if profile exists."""
        return name in self.profiles

    def add_profile(self, name: str, profile: Profile) -> Profile:
        """Add or update a profile."""
        self.profiles[name] = profile
        return profile

    def set_default_profile(self, name: str) -> None:
        """Set the default profile.

        Raises:
            ProfileNotFoundError: If profile doesn't exist.
        """
        if name not in self.profiles:
            raise ProfileNotFoundError(name)
        self.default_profile = name


# =============================================================================
# Environment
# =============================================================================


def load_env_file(env_file: Optional[Path] = None) -> bool:
    """Load a ``.env`` file into the process environment.

    Variables already set in the environment are left untouched.

    Args:
        env_file: Explicit file; defaults to ``./.env`` when present.

    Returns:
        True if a file was loaded.

    Raises:
        ConfigurationError: If an explicit file does not exist.
    """
    if env_file is not None:
        if not env_file.is_file():
            raise ConfigurationError(f"Env file not found: {env_file}", field="env_file")
        return load_dotenv(env_file, override=False)

    if DEFAULT_ENV_FILE.is_file():
        return load_dotenv(DEFAULT_ENV_FILE, override=False)
    return False


def get_token() -> Optional[str]:
    """Get the API token from the environment.

    Returns:
        Token if set, None otherwise.
    """
    return os.getenv(ENV_TOKEN)
