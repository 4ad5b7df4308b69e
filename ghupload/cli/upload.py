"""Upload commands for ghupload."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ghupload.cli.common import Context, global_options, handle_errors
from ghupload.core.client import ContentClient
from ghupload.core.output import (
    OutputFormat,
    console,
    create_progress,
    print_counts,
    print_info,
    print_json,
    print_output,
    print_success,
    print_warning,
)
from ghupload.core.validation import validate_source_dir
from ghupload.models.progress import BatchReport, OperationPhase, UploadProgress
from ghupload.services.reports import DEFAULT_PREVIEW_COUNT, DEFAULT_RESULTS_FILE, write_report
from ghupload.services.uploads import UploadService
from ghupload.uploaders.common import build_mirror_url, collect_upload_items

DEFAULT_SOURCE_DIR = "./images"


def _print_report(ctx: Context, report: BatchReport, results_file: Path, preview: int) -> None:
    """Render the batch summary."""
    if ctx.output_format == OutputFormat.JSON:
        print_json(
            {
                "total": report.total,
                "succeeded": report.succeeded,
                "failed": report.failed,
                "duration": round(report.duration, 2),
                "results_file": str(results_file),
                "links": report.to_records(),
                "failures": [
                    {"name": f.name, "stage": f.stage.value, "reason": f.reason}
                    for f in report.failures
                ],
            }
        )
        return

    if ctx.quiet:
        print_output(report.to_records(), quiet=True, id_field="cdn")
        return

    console.print()
    console.print("[bold]===== Upload results =====[/bold]")
    print_counts(report.succeeded, report.failed)
    print_success(f"Results saved to {results_file}")

    for failure in report.failures:
        print_warning(f"{failure.name}: {failure.reason}")

    sample = report.preview(preview)
    if sample:
        print_output(
            [link.model_dump() for link in sample],
            columns=["name", "cdn"],
            column_labels={"name": "File", "cdn": "CDN URL"},
            title="Sample links",
        )


@click.command("upload")
@click.argument(
    "source_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_SOURCE_DIR,
)
@click.option("--owner", default=None, help="Repository owner [env: REPO_OWNER]")
@click.option("--repo", default=None, help="Repository name [env: REPO_NAME]")
@click.option("--branch", "-b", default=None, help="Target branch [env: BRANCH]")
@click.option("--target-dir", "-t", default=None, help="Remote directory [env: TARGET_DIR]")
@click.option(
    "--concurrency",
    "-j",
    type=int,
    default=None,
    help="Max parallel uploads [env: CONCURRENCY]",
)
@click.option("--timeout", type=int, default=None, help="HTTP timeout in seconds")
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="File extension to include (repeatable; default: jpg, jpeg, png, gif)",
)
@click.option(
    "--message",
    "commit_message",
    default=None,
    help="Commit message template; {name} is replaced by the file name",
)
@click.option(
    "--results-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_RESULTS_FILE,
    show_default=True,
    help="Where to write the JSON link report",
)
@click.option(
    "--preview",
    type=click.IntRange(min=0),
    default=DEFAULT_PREVIEW_COUNT,
    show_default=True,
    help="Number of sample links to print",
)
@click.option("--dry-run", is_flag=True, help="List planned uploads without contacting the API")
@global_options
@handle_errors
def upload(
    ctx: Context,
    source_dir: Path,
    owner: Optional[str],
    repo: Optional[str],
    branch: Optional[str],
    target_dir: Optional[str],
    concurrency: Optional[int],
    timeout: Optional[int],
    extensions: tuple[str, ...],
    commit_message: Optional[str],
    results_file: Path,
    preview: int,
    dry_run: bool,
) -> None:
    """Upload images from SOURCE_DIR to a GitHub repository.

    Files are written to <target-dir>/<file name> on the branch, created or
    updated in place. A JSON report with download and CDN links is written
    at the end; per-file failures are reported but do not fail the run.

    Example:
        ghupload upload ./images --owner me --repo assets -j 4
    """
    source = validate_source_dir(source_dir)
    items = collect_upload_items(source, extensions=extensions or None)
    if not items:
        print_info(f"No image files found in {source}")
        return

    settings = ctx.get_settings(
        require_token=not dry_run,
        owner=owner,
        repo=repo,
        branch=branch,
        target_dir=target_dir,
        concurrency=concurrency,
        timeout=timeout,
        commit_message=commit_message,
    )

    if dry_run:
        click.echo("[DRY-RUN] Preview mode - no changes will be made", err=True)
        rows = []
        for item in items:
            target = item.target_path(settings.target_dir)
            rows.append(
                {
                    "name": item.name,
                    "target": target,
                    "cdn": build_mirror_url(
                        settings.cdn_base, settings.owner, settings.repo, settings.branch, target
                    ),
                }
            )
        print_output(
            rows,
            format=ctx.output_format,
            columns=["name", "target", "cdn"],
            column_labels={"name": "File", "target": "Remote Path", "cdn": "CDN URL"},
            quiet=ctx.quiet,
        )
        return

    if not ctx.quiet and ctx.output_format == OutputFormat.TABLE:
        print_info(
            f"Uploading {len(items)} files to {settings.repository}@{settings.branch}"
            f" (concurrency: {settings.concurrency})"
        )

    with ContentClient.from_settings(settings) as client:
        service = UploadService(client, settings)

        if ctx.quiet or ctx.output_format == OutputFormat.JSON:
            report = service.upload_batch(items)
        else:
            with create_progress() as progress:
                task_id = progress.add_task("Uploading", total=len(items))

                def on_progress(update: UploadProgress) -> None:
                    if update.phase == OperationPhase.PREPARING:
                        progress.update(task_id, description=update.message)
                    elif update.phase == OperationPhase.UPLOADING:
                        progress.update(
                            task_id,
                            completed=update.current,
                            description=f"Uploaded {update.name}",
                        )

                report = service.upload_batch(items, progress_callback=on_progress)

    write_report(report, results_file)
    _print_report(ctx, report, results_file, preview)
