"""ghupload - Upload image batches to a GitHub repository.

This package uploads local files through the GitHub contents API:
- Create-or-update by path, carrying the blob sha on updates
- Bounded parallel uploads where one failure never stops the batch
- A JSON report of download and jsDelivr CDN links
"""

__version__ = "0.1.0"

from ghupload.core.client import ContentClient
from ghupload.core.config import Config, Profile, UploadSettings
from ghupload.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ContainerSetupError,
    ContentStoreError,
    GhUploadError,
    NetworkError,
    ValidationError,
    VersionConflictError,
)
from ghupload.services.uploads import UploadService

__all__ = [
    "__version__",
    "ContentClient",
    "Config",
    "Profile",
    "UploadSettings",
    "UploadService",
    "GhUploadError",
    "AuthenticationError",
    "ConfigurationError",
    "ContainerSetupError",
    "ContentStoreError",
    "NetworkError",
    "ValidationError",
    "VersionConflictError",
]
