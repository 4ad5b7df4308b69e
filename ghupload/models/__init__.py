"""Data models for ghupload."""

from ghupload.models.base import BaseModel
from ghupload.models.content import (
    ContentLink,
    RemoteObjectRef,
    UploadItem,
    WriteRequest,
    WriteResult,
)
from ghupload.models.progress import (
    BatchReport,
    FailureStage,
    OperationPhase,
    TaskState,
    UploadFailure,
    UploadOutcome,
    UploadProgress,
    UploadSuccess,
)

__all__ = [
    "BaseModel",
    "ContentLink",
    "RemoteObjectRef",
    "UploadItem",
    "WriteRequest",
    "WriteResult",
    "BatchReport",
    "FailureStage",
    "OperationPhase",
    "TaskState",
    "UploadFailure",
    "UploadOutcome",
    "UploadProgress",
    "UploadSuccess",
]
