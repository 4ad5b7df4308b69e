"""Upload service: runs a batch of files against the content store.

Provides UploadService, which performs the one-time container check,
schedules one UploadTask per item under the configured concurrency cap,
and aggregates the outcomes into a BatchReport.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Optional

from ghupload.core.client import ContentClient
from ghupload.core.config import UploadSettings
from ghupload.core.logging import log_context
from ghupload.models.content import UploadItem
from ghupload.models.progress import (
    BatchReport,
    FailureStage,
    OperationPhase,
    UploadFailure,
    UploadOutcome,
    UploadProgress,
)
from ghupload.services.reports import summarize
from ghupload.uploaders.common import ensure_unique_names
from ghupload.uploaders.scheduler import BoundedScheduler
from ghupload.uploaders.task import UploadTask

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[UploadProgress], None]


class UploadService:
    """Service for batch uploads to one repository."""

    def __init__(self, client: ContentClient, settings: UploadSettings) -> None:
        """Initialize service.

        Args:
            client: Content client for the target repository.
            settings: Resolved run settings.
        """
        self.client = client
        self.settings = settings

    def prepare_container(self) -> bool:
        """Ensure the target directory exists on the branch.

        Returns:
            True if the directory had to be created.

        Raises:
            ContainerSetupError: If the directory cannot be verified or created.
        """
        created = self.client.ensure_container(
            self.settings.target_dir,
            self.settings.branch,
            message=f"Create {self.settings.target_dir} directory",
        )
        if created:
            logger.info("Created container %s", self.settings.target_dir)
        return created

    def build_tasks(self, items: Sequence[UploadItem]) -> list[UploadTask]:
        """Create one task per item, in order."""
        return [UploadTask(item, self.client, self.settings) for item in items]

    def upload_batch(
        self,
        items: Sequence[UploadItem],
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BatchReport:
        """Upload all items and aggregate the outcomes.

        Per-file failures are recorded in the report; only setup errors
        raise.

        Args:
            items: Items to upload; names must be unique.
            progress_callback: Optional callback for progress updates.

        Returns:
            BatchReport in submission order.

        Raises:
            ValidationError: If item names repeat.
            ContainerSetupError: If the target directory is unusable.
            AuthenticationError: If the token is rejected during setup.
        """
        start = time.time()

        def report(progress: UploadProgress) -> None:
            """Invoke the progress callback if provided."""
            if progress_callback:
                progress_callback(progress)

        if not items:
            report(UploadProgress(phase=OperationPhase.COMPLETE, message="Nothing to upload"))
            return summarize([], duration=0.0)

        ensure_unique_names(items)
        total = len(items)

        with log_context(
            "upload batch",
            logger,
            repository=self.settings.repository,
            branch=self.settings.branch,
            files=total,
            concurrency=self.settings.concurrency,
        ):
            report(
                UploadProgress(
                    phase=OperationPhase.PREPARING,
                    total=total,
                    message=f"Checking {self.settings.target_dir}/ on {self.settings.branch}",
                )
            )
            self.prepare_container()

            tasks = self.build_tasks(items)
            completed = 0

            def on_complete(index: int, outcome: UploadOutcome) -> None:
                nonlocal completed
                completed += 1
                report(
                    UploadProgress(
                        phase=OperationPhase.UPLOADING,
                        current=completed,
                        total=total,
                        name=outcome.name,
                        success=outcome.success,
                        message=f"Uploaded {completed}/{total}",
                    )
                )

            def on_error(index: int, error: BaseException) -> UploadOutcome:
                # UploadTask.run does not raise; this guards the pool itself
                return UploadFailure(
                    name=items[index].name,
                    reason=f"unexpected error: {error}",
                    stage=FailureStage.WRITE,
                )

            scheduler: BoundedScheduler[UploadOutcome] = BoundedScheduler(
                self.settings.concurrency
            )
            outcomes = scheduler.run(tasks, on_error=on_error, on_complete=on_complete)

        batch = summarize(outcomes, duration=time.time() - start)
        if batch.failed:
            logger.warning("Upload completed with %s failures", batch.failed)

        report(
            UploadProgress(
                phase=OperationPhase.COMPLETE if not batch.failed else OperationPhase.ERROR,
                current=total,
                total=total,
                success=not batch.failed,
                message=batch.summary_line(),
            )
        )
        return batch
