"""Aggregation and persistence of upload outcomes."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from ghupload.models.progress import BatchReport, UploadFailure, UploadOutcome, UploadSuccess

logger = logging.getLogger(__name__)

DEFAULT_RESULTS_FILE = "upload_results.json"
DEFAULT_PREVIEW_COUNT = 3


def summarize(outcomes: Sequence[UploadOutcome], duration: float = 0.0) -> BatchReport:
    """Aggregate per-file outcomes into a batch report.

    Order of ``outcomes`` is kept for both links and failures.

    Args:
        outcomes: One outcome per submitted item, in submission order.
        duration: Wall-clock seconds the batch took.

    Returns:
        BatchReport with counts, links and failures.
    """
    successes = [o for o in outcomes if isinstance(o, UploadSuccess)]
    failures = [o for o in outcomes if isinstance(o, UploadFailure)]
    return BatchReport(
        total=len(outcomes),
        succeeded=len(successes),
        links=[s.to_link() for s in successes],
        failures=failures,
        duration=duration,
    )


def write_report(report: BatchReport, path: Path) -> Path:
    """Write the report records as a JSON array.

    Args:
        report: Report to persist.
        path: Destination file; parent directories are created.

    Returns:
        The written path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_records(), f, indent=2, ensure_ascii=False)
        f.write("\n")
    logger.info("Wrote %d records to %s", len(report.links), path)
    return path
