"""Core modules for ghupload."""

from ghupload.core.client import ContentClient
from ghupload.core.config import CONFIG_DIR, CONFIG_FILE, Config, Profile, UploadSettings
from ghupload.core.exceptions import (
    AuthenticationError,
    BatchOperationError,
    ConfigurationError,
    ConnectionError,
    ContainerSetupError,
    ContentStoreError,
    GhUploadError,
    InvalidConcurrencyError,
    MissingTokenError,
    NetworkError,
    ValidationError,
    VersionConflictError,
)
from ghupload.core.logging import LogContext, log_context, setup_logging
from ghupload.core.output import (
    OutputFormat,
    console,
    print_error,
    print_json,
    print_output,
    print_success,
    print_table,
    print_warning,
)
from ghupload.core.validation import (
    validate_api_url,
    validate_branch,
    validate_concurrency,
    validate_owner,
    validate_repo_name,
    validate_source_dir,
    validate_target_dir,
    validate_timeout,
)

__all__ = [
    # Exceptions
    "GhUploadError",
    "AuthenticationError",
    "BatchOperationError",
    "ConfigurationError",
    "ConnectionError",
    "ContainerSetupError",
    "ContentStoreError",
    "InvalidConcurrencyError",
    "MissingTokenError",
    "NetworkError",
    "ValidationError",
    "VersionConflictError",
    # Validation
    "validate_api_url",
    "validate_branch",
    "validate_concurrency",
    "validate_owner",
    "validate_repo_name",
    "validate_source_dir",
    "validate_target_dir",
    "validate_timeout",
    # Config
    "Config",
    "Profile",
    "UploadSettings",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "ContentClient",
    # Output
    "OutputFormat",
    "print_output",
    "print_table",
    "print_json",
    "print_error",
    "print_warning",
    "print_success",
    "console",
    # Logging
    "setup_logging",
    "log_context",
    "LogContext",
]
