"""Common utilities for uploader modules."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

from ghupload.core.exceptions import ValidationError
from ghupload.models.content import UploadItem

logger = logging.getLogger(__name__)

# File extensions recognized as uploadable images
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif"})


def normalize_extensions(extensions: Iterable[str] | None) -> frozenset[str]:
    """Lowercase extensions and ensure a leading dot.

    Args:
        extensions: Extensions such as ``png`` or ``.PNG``; None for defaults.

    Returns:
        Normalized extension set.
    """
    if not extensions:
        return IMAGE_EXTENSIONS
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(normalized) or IMAGE_EXTENSIONS


def collect_image_files(
    root: Path,
    *,
    extensions: Iterable[str] | None = None,
) -> list[Path]:
    """Collect image files directly under a directory.

    Only the top level is scanned; remote paths are flat
    ``<container>/<file name>``.

    Args:
        root: Directory to scan.
        extensions: Accepted extensions (case-insensitive).

    Returns:
        Sorted list of file paths.

    Raises:
        ValueError: If root is not a directory.
    """
    if not root.exists() or not root.is_dir():
        raise ValueError(f"Not a directory: {root}")

    accepted = normalize_extensions(extensions)
    files: list[Path] = []
    for path in root.iterdir():
        if not path.is_file():
            continue

        # Skip hidden files
        if path.name.startswith("."):
            continue

        if path.suffix.lower() in accepted:
            files.append(path)

    return sorted(files)


def collect_upload_items(
    root: Path,
    *,
    extensions: Iterable[str] | None = None,
) -> list[UploadItem]:
    """Collect image files as upload items, ordered by name."""
    items = [UploadItem.from_path(path) for path in collect_image_files(root, extensions=extensions)]
    logger.debug("Collected %d upload items from %s", len(items), root)
    return items


def ensure_unique_names(items: Iterable[UploadItem]) -> None:
    """Reject batches where two items would land on the same remote path.

    Raises:
        ValidationError: If a file name repeats.
    """
    seen: set[str] = set()
    for item in items:
        if item.name in seen:
            raise ValidationError(f"Duplicate file name in batch: {item.name}", field="name")
        seen.add(item.name)


def build_mirror_url(
    cdn_base: str,
    owner: str,
    repo: str,
    branch: str,
    target_path: str,
) -> str:
    """Compose the CDN mirror URL of an uploaded file.

    Branch and path are percent-encoded; ``/`` is kept.

    Returns:
        ``<cdn_base>/<owner>/<repo>@<branch>/<target_path>``
    """
    base = cdn_base.rstrip("/")
    return f"{base}/{owner}/{repo}@{quote(branch)}/{quote(target_path.strip('/'))}"
