"""Main CLI entry point for ghupload."""

from __future__ import annotations

import click

from ghupload import __version__
from ghupload.cli.common import Context, global_options, handle_errors
from ghupload.cli.config_cmd import config
from ghupload.cli.upload import upload
from ghupload.core.client import ContentClient
from ghupload.core.output import OutputFormat, print_output, print_success

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="ghupload")
def cli() -> None:
    """ghupload - Upload image batches to a GitHub repository.

    Files are written through the contents API with bounded concurrency,
    and a JSON report of download and CDN links is saved.

    Get started:

      ghupload config init       # Create a profile

      export GITHUB_TOKEN=...    # Or put it in .env

      ghupload upload ./images   # Upload
    """
    pass


cli.add_command(config)
cli.add_command(upload)


# =============================================================================
# Top-Level Commands
# =============================================================================


@cli.command("check")
@global_options
@handle_errors
def check(ctx: Context) -> None:
    """Check the token and repository access."""
    settings = ctx.get_settings()

    with ContentClient.from_settings(settings) as client:
        result = client.ping()

    if ctx.output_format == OutputFormat.JSON:
        print_output(result, format=OutputFormat.JSON)
        return

    print_success(f"Repository reachable: {result['repository']}")
    print_output(
        {
            "default_branch": result["default_branch"],
            "target_branch": settings.branch,
            "private": result["private"],
            "can_push": result["can_push"],
            "latency": f"{result['latency_ms']}ms",
        },
        format=OutputFormat.TABLE,
    )


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
