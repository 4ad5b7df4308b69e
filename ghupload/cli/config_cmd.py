"""Config commands for ghupload."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ghupload.cli.common import ExitCode
from ghupload.core.config import (
    CONFIG_FILE,
    DEFAULT_BRANCH,
    DEFAULT_CONCURRENCY,
    DEFAULT_TARGET_DIR,
    Config,
    Profile,
)
from ghupload.core.exceptions import GhUploadError
from ghupload.core.output import OutputFormat, print_error, print_key_value, print_output, print_success
from ghupload.core.validation import (
    validate_branch,
    validate_concurrency,
    validate_owner,
    validate_repo_name,
    validate_target_dir,
)

config_file_option = click.option(
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)


@click.group()
def config() -> None:
    """Manage ghupload configuration."""
    pass


@config.command("init")
@click.option("--owner", prompt="Repository owner", help="Repository owner")
@click.option("--repo", prompt="Repository name", help="Repository name")
@click.option("--branch", default=DEFAULT_BRANCH, show_default=True, help="Target branch")
@click.option("--target-dir", default=DEFAULT_TARGET_DIR, show_default=True, help="Remote directory")
@click.option(
    "--concurrency", type=int, default=DEFAULT_CONCURRENCY, show_default=True, help="Parallel uploads"
)
@click.option("--profile", default="default", help="Profile name")
@click.option("--force", is_flag=True, help="Overwrite an existing profile")
@config_file_option
def config_init(
    owner: str,
    repo: str,
    branch: str,
    target_dir: str,
    concurrency: int,
    profile: str,
    force: bool,
    config_file: Optional[Path],
) -> None:
    """Create or extend the configuration file with a profile.

    The API token is never stored; set GITHUB_TOKEN in the environment
    or in a .env file.

    Example:
        ghupload config init --owner me --repo assets
    """
    path = config_file or CONFIG_FILE
    try:
        new_profile = Profile(
            owner=validate_owner(owner),
            repo=validate_repo_name(repo),
            branch=validate_branch(branch),
            target_dir=validate_target_dir(target_dir),
            concurrency=validate_concurrency(concurrency),
        )
        cfg = Config.load(path)
    except GhUploadError as e:
        print_error(str(e))
        raise SystemExit(ExitCode.GENERAL_ERROR)

    if cfg.has_profile(profile) and not force:
        print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
        raise SystemExit(ExitCode.GENERAL_ERROR)

    cfg.add_profile(profile, new_profile)

    # Set as default if it's the first profile
    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save(path)

    print_success(f"Configuration saved to {path}")
    print_key_value({"profile": profile, **new_profile.to_dict()})


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
@config_file_option
def config_show(output: str, config_file: Optional[Path]) -> None:
    """Show current configuration."""
    path = config_file or CONFIG_FILE
    try:
        cfg = Config.load(path)
    except GhUploadError as e:
        print_error(str(e))
        raise SystemExit(ExitCode.GENERAL_ERROR)

    if not cfg.profiles:
        print_error("No configuration found. Run 'ghupload config init' first.")
        raise SystemExit(ExitCode.GENERAL_ERROR)

    data = {
        "config_file": str(path),
        "default_profile": cfg.default_profile,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")
    click.echo()
    for name, prof in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(
            {
                "repository": f"{prof.owner}/{prof.repo}",
                "branch": prof.branch,
                "target_dir": prof.target_dir,
                "concurrency": prof.concurrency,
                "timeout": f"{prof.timeout}s",
            }
        )
        click.echo()


@config.command("use-context")
@click.argument("profile")
@config_file_option
def config_use_context(profile: str, config_file: Optional[Path]) -> None:
    """Set the default profile."""
    path = config_file or CONFIG_FILE
    try:
        cfg = Config.load(path)
        cfg.set_default_profile(profile)
    except GhUploadError as e:
        print_error(str(e))
        raise SystemExit(ExitCode.GENERAL_ERROR)

    cfg.save(path)
    print_success(f"Default profile set to '{profile}'")
