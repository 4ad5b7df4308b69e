"""Content models: local items, remote references and write requests."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, Field

from .base import BaseModel


class UploadItem(BaseModel):
    """A local file queued for upload. Identity is the file name."""

    # Names are kept byte-for-byte; " a.png" and "a.png" are different files
    model_config = ConfigDict(str_strip_whitespace=False)

    name: str = Field(..., min_length=1, description="File name, unique within a batch")
    path: Path = Field(..., description="Local file path")

    @classmethod
    def from_path(cls, path: Path) -> "UploadItem":
        """Create an item named after the file."""
        return cls(name=path.name, path=path)

    def read_bytes(self) -> bytes:
        """Load the file content."""
        return self.path.read_bytes()

    def target_path(self, container: str) -> str:
        """Return the remote path of this item inside ``container``."""
        return f"{container.strip('/')}/{self.name}"


class RemoteObjectRef(BaseModel):
    """Current remote revision of a path; no sha means the object is absent."""

    path: str
    sha: str | None = Field(None, description="Blob sha of the current revision")

    @property
    def exists(self) -> bool:
        return self.sha is not None


class WriteRequest(BaseModel):
    """Body of a create-or-update contents write."""

    path: str = Field(..., exclude=True)
    message: str
    content: str = Field(..., description="Base64 encoded file content", repr=False)
    branch: str
    sha: str | None = Field(None, description="Required when updating an existing object")

    @classmethod
    def for_item(
        cls,
        *,
        path: str,
        data: bytes,
        message: str,
        branch: str,
        ref: RemoteObjectRef,
    ) -> "WriteRequest":
        """Build a request, carrying the sha only if the object exists."""
        return cls(
            path=path,
            message=message,
            content=base64.b64encode(data).decode("ascii"),
            branch=branch,
            sha=ref.sha if ref.exists else None,
        )

    @property
    def is_update(self) -> bool:
        return self.sha is not None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body; ``sha`` is omitted entirely for creates."""
        return self.model_dump(exclude_none=True)


class WriteResult(BaseModel):
    """Successful write as reported by the store."""

    path: str
    primary_url: str
    sha: str | None = None
    created: bool = True


class ContentLink(BaseModel):
    """One record of the persisted upload report."""

    name: str
    github: str = Field(..., description="Store-provided download URL")
    cdn: str = Field(..., description="Mirror URL composed from repository coordinates")
