"""Service layer for ghupload."""

from ghupload.services.reports import summarize, write_report
from ghupload.services.uploads import UploadService

__all__ = [
    "UploadService",
    "summarize",
    "write_report",
]
