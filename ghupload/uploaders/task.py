"""Per-file upload task.

A task walks ``PENDING -> VERSION_CHECKED -> SUBMITTED -> SUCCEEDED|FAILED``
and always ends with an outcome; it never raises to its caller.
"""

from __future__ import annotations

import logging

from ghupload.core.client import ContentClient
from ghupload.core.config import UploadSettings
from ghupload.core.exceptions import ContentStoreError, GhUploadError
from ghupload.models.content import RemoteObjectRef, UploadItem, WriteRequest
from ghupload.models.progress import (
    FailureStage,
    TaskState,
    UploadFailure,
    UploadOutcome,
    UploadSuccess,
)
from ghupload.uploaders.common import build_mirror_url

logger = logging.getLogger(__name__)

LOOKUP_FAILURE_PREFIX = "existence-check error"


def _status_of(error: Exception) -> int | None:
    if isinstance(error, ContentStoreError):
        return error.status_code
    return None


class UploadTask:
    """Upload one item to the content store."""

    def __init__(self, item: UploadItem, client: ContentClient, settings: UploadSettings) -> None:
        self.item = item
        self.client = client
        self.settings = settings
        self.state = TaskState.PENDING
        self.target_path = item.target_path(settings.target_dir)
        self.ref: RemoteObjectRef | None = None
        self.request: WriteRequest | None = None

    def __call__(self) -> UploadOutcome:
        return self.run()

    def _fail(
        self,
        reason: str,
        stage: FailureStage,
        status_code: int | None = None,
    ) -> UploadFailure:
        self.state = TaskState.FAILED
        logger.warning("%s failed at %s: %s", self.item.name, stage.value, reason)
        return UploadFailure(
            name=self.item.name,
            reason=reason,
            stage=stage,
            status_code=status_code,
        )

    def run(self) -> UploadOutcome:
        """Run the task to a terminal state.

        Returns:
            UploadSuccess or UploadFailure.
        """
        # No write without knowing the current version
        try:
            self.ref = self.client.lookup(self.target_path, self.settings.branch)
        except Exception as e:
            return self._fail(f"{LOOKUP_FAILURE_PREFIX}: {e}", FailureStage.LOOKUP, _status_of(e))
        self.state = TaskState.VERSION_CHECKED

        try:
            data = self.item.read_bytes()
        except OSError as e:
            return self._fail(f"cannot read {self.item.path}: {e}", FailureStage.READ)

        self.request = WriteRequest.for_item(
            path=self.target_path,
            data=data,
            message=self.settings.message_for(self.item.name),
            branch=self.settings.branch,
            ref=self.ref,
        )
        self.state = TaskState.SUBMITTED

        try:
            result = self.client.write(self.request)
        except GhUploadError as e:
            return self._fail(str(e), FailureStage.WRITE, _status_of(e))
        except Exception as e:
            return self._fail(f"unexpected error: {e}", FailureStage.WRITE)

        self.state = TaskState.SUCCEEDED
        logger.info(
            "%s %s -> %s",
            "Created" if result.created else "Updated",
            self.item.name,
            result.primary_url,
        )
        return UploadSuccess(
            name=self.item.name,
            primary_url=result.primary_url,
            mirror_url=build_mirror_url(
                self.settings.cdn_base,
                self.settings.owner,
                self.settings.repo,
                self.settings.branch,
                self.target_path,
            ),
            target_path=self.target_path,
            created=result.created,
        )
