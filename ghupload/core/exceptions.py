"""Exception hierarchy for ghupload.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import Any


class GhUploadError(Exception):
    """Base exception for all ghupload errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(GhUploadError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


class MissingTokenError(ConfigurationError):
    """No API token available."""

    def __init__(self, env_var: str):
        super().__init__(f"No API token found; set {env_var}", field=env_var)
        self.env_var = env_var


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(GhUploadError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidURLError(ValidationError):
    """Invalid URL format."""

    def __init__(self, url: str, reason: str = ""):
        msg = f"Invalid URL: {url}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field="url", value=url)
        self.url = url
        self.reason = reason


class InvalidConcurrencyError(ValidationError):
    """Concurrency limit is not a positive integer."""

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid concurrency: {value} (must be >= 1)",
            field="concurrency",
            value=value,
        )


class InvalidIdentifierError(ValidationError):
    """Invalid repository identifier (owner, repo, branch)."""

    def __init__(self, identifier_type: str, value: str, reason: str = ""):
        msg = f"Invalid {identifier_type}: {value}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field=identifier_type, value=value)
        self.identifier_type = identifier_type
        self.reason = reason


class PathValidationError(ValidationError):
    """Path validation failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid path: {path} - {reason}", field="path", value=path)
        self.path = path
        self.reason = reason


# =============================================================================
# Connection Errors
# =============================================================================


class ConnectionError(GhUploadError):
    """Base class for connection-related errors."""

    def __init__(self, message: str, url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(message, details)
        self.url = url


class NetworkError(ConnectionError):
    """Network-level error (DNS, TCP, TLS, timeouts)."""

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error connecting to {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, url)
        self.cause = cause


class ServerUnreachableError(ConnectionError):
    """Server is not reachable."""

    def __init__(self, url: str):
        super().__init__(f"Server unreachable: {url}", url)


# =============================================================================
# Authentication Errors
# =============================================================================


class AuthenticationError(GhUploadError):
    """Authentication failed."""

    def __init__(self, url: str | None = None, reason: str = ""):
        msg = "Authentication failed"
        if url:
            msg = f"{msg} for {url}"
        if reason:
            msg = f"{msg}: {reason}"
        details = {"url": url} if url else {}
        super().__init__(msg, details)
        self.url = url
        self.reason = reason


class PermissionDeniedError(AuthenticationError):
    """Token lacks permission for the requested operation."""

    def __init__(self, resource: str, operation: str = "access"):
        super().__init__(reason=f"Permission denied to {operation} {resource}")
        self.resource = resource
        self.operation = operation


# =============================================================================
# Content Store Errors
# =============================================================================


class ContentStoreError(GhUploadError):
    """The content store answered with an unexpected status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        path: str | None = None,
    ):
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if path:
            details["path"] = path
        super().__init__(message, details)
        self.status_code = status_code
        self.path = path


class VersionConflictError(ContentStoreError):
    """Write rejected because the version token is stale or missing."""

    def __init__(self, path: str, status_code: int, reason: str = ""):
        msg = f"Version conflict writing {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg, status_code=status_code, path=path)
        self.reason = reason


class ContainerSetupError(ContentStoreError):
    """Target container could not be verified or created."""

    def __init__(self, path: str, reason: str, status_code: int | None = None):
        super().__init__(
            f"Cannot prepare container {path}: {reason}",
            status_code=status_code,
            path=path,
        )
        self.reason = reason


# =============================================================================
# Operation Errors
# =============================================================================


class OperationError(GhUploadError):
    """Error during an operation."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        full_details = {"operation": operation}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.operation = operation


class BatchOperationError(OperationError):
    """Error in batch operation with partial success."""

    def __init__(
        self,
        operation: str,
        succeeded: int,
        failed: int,
        errors: list[str],
    ):
        super().__init__(
            operation,
            f"Batch {operation} partially failed: {succeeded} succeeded, {failed} failed",
            {"succeeded": succeeded, "failed": failed},
        )
        self.succeeded = succeeded
        self.failed = failed
        self.errors = errors
