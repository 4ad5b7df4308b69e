"""Common CLI utilities, decorators, and helpers."""

from __future__ import annotations

import sys
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import click

from ghupload.core.config import Config, UploadSettings, get_token, load_env_file
from ghupload.core.exceptions import (
    AuthenticationError,
    ConnectionError,
    GhUploadError,
    PermissionDeniedError,
)
from ghupload.core.logging import setup_logging
from ghupload.core.output import OutputFormat, print_error

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCode:
    """Standard exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 2
    NETWORK_ERROR = 3
    PERMISSION_ERROR = 4


# =============================================================================
# Context Object
# =============================================================================


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[Config] = None
        self.profile_name: Optional[str] = None
        self.output_format: OutputFormat = OutputFormat.TABLE
        self.quiet: bool = False
        self.verbose: bool = False

    def get_settings(self, *, require_token: bool = True, **overrides: Any) -> UploadSettings:
        """Resolve run settings from config, environment, and CLI overrides.

        Args:
            require_token: If False, a missing token is tolerated (dry runs).
            **overrides: CLI values; None means "not given".

        Returns:
            Immutable, validated settings.

        Raises:
            ConfigurationError: If the profile or token is missing.
            ValidationError: If a value is invalid.
        """
        if self.config is None:
            self.config = Config.load()

        profile = self.config.resolve_profile(self.profile_name)
        return UploadSettings.from_profile(
            profile, get_token(), require_token=require_token, **overrides
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


# =============================================================================
# Global Options
# =============================================================================


def global_options(f: F) -> F:
    """Add global options to a command."""

    @click.option(
        "--profile",
        "-p",
        envvar="GHUPLOAD_PROFILE",
        help="Config profile to use",
    )
    @click.option(
        "--env-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Load variables from this .env file (default: ./.env if present)",
    )
    @click.option(
        "--output",
        "-o",
        "output_format",
        type=click.Choice(["json", "table"]),
        default="table",
        help="Output format",
    )
    @click.option(
        "--quiet",
        "-q",
        is_flag=True,
        help="Minimal output (URLs only)",
    )
    @click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose output",
    )
    @pass_context
    @wraps(f)
    def wrapper(
        ctx: Context,
        profile: Optional[str],
        env_file: Optional[Path],
        output_format: str,
        quiet: bool,
        verbose: bool,
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Populate context from global options and invoke the command."""
        ctx.profile_name = profile
        ctx.output_format = OutputFormat.from_string(output_format)
        ctx.quiet = quiet
        ctx.verbose = verbose

        setup_logging(quiet=quiet, verbose=verbose)

        try:
            load_env_file(env_file)
            ctx.config = Config.load()
        except GhUploadError as e:
            print_error(str(e))
            sys.exit(ExitCode.GENERAL_ERROR)

        return f(ctx, *args, **kwargs)

    return wrapper  # type: ignore


# =============================================================================
# Error Handling
# =============================================================================


def exit_code_for(error: GhUploadError) -> int:
    """Map an exception to a process exit code."""
    if isinstance(error, PermissionDeniedError):
        return ExitCode.PERMISSION_ERROR
    if isinstance(error, AuthenticationError):
        return ExitCode.AUTH_ERROR
    if isinstance(error, ConnectionError):
        return ExitCode.NETWORK_ERROR
    return ExitCode.GENERAL_ERROR


def handle_errors(f: F) -> F:
    """Handle common errors and convert to CLI exits."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Capture errors and exit with consistent messaging."""
        try:
            return f(*args, **kwargs)
        except GhUploadError as e:
            print_error(str(e))
            sys.exit(exit_code_for(e))
        except click.ClickException:
            raise
        except Exception as e:
            print_error(f"Unexpected error: {e}")
            sys.exit(ExitCode.GENERAL_ERROR)

    return wrapper  # type: ignore
