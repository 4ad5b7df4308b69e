"""Progress and outcome models for upload batches.

Provides dataclasses for per-file outcomes, progress updates and the
aggregated batch report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .content import ContentLink


class OperationPhase(Enum):
    """Operation phases for progress tracking."""

    PREPARING = "preparing"
    UPLOADING = "uploading"
    COMPLETE = "complete"
    ERROR = "error"


class TaskState(Enum):
    """Lifecycle of a single upload task."""

    PENDING = "pending"
    VERSION_CHECKED = "version_checked"
    SUBMITTED = "submitted"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.SUCCEEDED, TaskState.FAILED)


class FailureStage(Enum):
    """Step at which an upload task failed."""

    READ = "read"
    LOOKUP = "lookup"
    WRITE = "write"


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True)
class UploadSuccess:
    """File written to the store."""

    name: str
    primary_url: str
    mirror_url: str
    target_path: str = ""
    created: bool = True

    success = True

    def to_link(self) -> ContentLink:
        """Project to the persisted record shape."""
        return ContentLink(name=self.name, github=self.primary_url, cdn=self.mirror_url)


@dataclass(frozen=True)
class UploadFailure:
    """File that could not be written."""

    name: str
    reason: str
    stage: FailureStage = FailureStage.WRITE
    status_code: Optional[int] = None

    success = False


UploadOutcome = Union[UploadSuccess, UploadFailure]


# =============================================================================
# Progress
# =============================================================================


@dataclass
class UploadProgress:
    """Progress information for upload callbacks."""

    phase: OperationPhase
    current: int = 0
    total: int = 0
    message: str = ""
    name: str = ""
    success: bool = True

    @property
    def percent(self) -> float:
        """Calculate completion percentage."""
        if self.total == 0:
            return 0.0
        return (self.current / self.total) * 100


# =============================================================================
# Report
# =============================================================================


@dataclass
class BatchReport:
    """Aggregated result of an upload batch."""

    total: int
    succeeded: int
    links: List[ContentLink] = field(default_factory=list)
    failures: List[UploadFailure] = field(default_factory=list)
    duration: float = 0.0

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage."""
        if self.total == 0:
            return 100.0
        return (self.succeeded / self.total) * 100

    def summary_line(self) -> str:
        """One-line human readable counts."""
        return f"Succeeded: {self.succeeded} | Failed: {self.failed}"

    def preview(self, limit: int = 3) -> List[ContentLink]:
        """Return the first ``limit`` links."""
        return self.links[: max(limit, 0)]

    def to_records(self) -> List[dict]:
        """Return the persisted report shape."""
        return [link.model_dump() for link in self.links]
