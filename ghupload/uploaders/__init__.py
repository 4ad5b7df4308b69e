"""Upload building blocks for ghupload.

- File discovery and URL composition helpers
- The bounded worker pool
- The per-file upload task

Use `UploadService` from `ghupload.services.uploads` as the public API.
"""

from ghupload.uploaders.common import (
    IMAGE_EXTENSIONS,
    build_mirror_url,
    collect_image_files,
    collect_upload_items,
    ensure_unique_names,
)
from ghupload.uploaders.scheduler import BoundedScheduler, run_bounded
from ghupload.uploaders.task import UploadTask

__all__ = [
    "IMAGE_EXTENSIONS",
    "build_mirror_url",
    "collect_image_files",
    "collect_upload_items",
    "ensure_unique_names",
    "BoundedScheduler",
    "run_bounded",
    "UploadTask",
]
