"""Tests for ghupload.services.reports module."""

from __future__ import annotations

import json

from ghupload.models.content import ContentLink
from ghupload.models.progress import BatchReport, FailureStage, UploadFailure, UploadSuccess
from ghupload.services.reports import summarize, write_report


def _success(name: str) -> UploadSuccess:
    return UploadSuccess(
        name=name,
        primary_url=f"https://raw.githubusercontent.com/octo/assets/main/images/{name}",
        mirror_url=f"https://cdn.jsdelivr.net/gh/octo/assets@main/images/{name}",
    )


class TestSummarize:
    """Tests for summarize."""

    def test_counts_and_order(self):
        outcomes = [
            _success("c.png"),
            UploadFailure(name="a.png", reason="boom", stage=FailureStage.LOOKUP),
            _success("b.png"),
        ]

        report = summarize(outcomes, duration=1.5)

        assert report.total == 3
        assert report.succeeded == 2
        assert report.failed == 1
        assert [link.name for link in report.links] == ["c.png", "b.png"]
        assert report.failures[0].name == "a.png"
        assert report.duration == 1.5

    def test_empty(self):
        report = summarize([])

        assert report.total == 0
        assert report.failed == 0
        assert report.success_rate == 100.0
        assert report.to_records() == []

    def test_all_failed(self):
        report = summarize([UploadFailure(name="a.png", reason="x")])

        assert report.succeeded == 0
        assert report.success_rate == 0.0
        assert report.summary_line() == "Succeeded: 0 | Failed: 1"


class TestBatchReport:
    """Tests for BatchReport helpers."""

    def test_preview_limits_links(self):
        report = summarize([_success(f"{i}.png") for i in range(5)])

        assert [link.name for link in report.preview()] == ["0.png", "1.png", "2.png"]
        assert len(report.preview(10)) == 5
        assert report.preview(0) == []

    def test_records_use_persisted_keys(self):
        report = summarize([_success("a.png")])

        assert report.to_records() == [
            {
                "name": "a.png",
                "github": "https://raw.githubusercontent.com/octo/assets/main/images/a.png",
                "cdn": "https://cdn.jsdelivr.net/gh/octo/assets@main/images/a.png",
            }
        ]


class TestWriteReport:
    """Tests for write_report."""

    def test_writes_pretty_json_array(self, temp_dir):
        report = summarize([_success("a.png"), UploadFailure(name="b.png", reason="x")])
        path = temp_dir / "upload_results.json"

        write_report(report, path)

        text = path.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert '\n  {\n    "name": "a.png"' in text
        assert json.loads(text) == report.to_records()

    def test_empty_report_writes_empty_array(self, temp_dir):
        path = write_report(summarize([]), temp_dir / "out.json")

        assert json.loads(path.read_text()) == []

    def test_creates_parent_directories(self, temp_dir):
        path = temp_dir / "nested" / "dir" / "results.json"

        write_report(BatchReport(total=0, succeeded=0), path)

        assert path.exists()

    def test_keeps_non_ascii_names(self, temp_dir):
        link = ContentLink(name="café.png", github="https://x/café.png", cdn="https://y/café.png")
        report = BatchReport(total=1, succeeded=1, links=[link])
        path = temp_dir / "results.json"

        write_report(report, path)

        assert "café.png" in path.read_text(encoding="utf-8")
