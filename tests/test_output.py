"""Tests for ghupload.core.output module."""

from __future__ import annotations

import json

from ghupload.core.output import (
    OutputFormat,
    print_counts,
    print_key_value,
    print_output,
    print_table,
)


class TestPrintTable:
    def test_renders_headers_and_cells(self, capsys):
        print_table(
            [{"name": "a.png", "target": "images/a.png"}],
            ["name", "target"],
            column_labels={"name": "File"},
        )

        out = capsys.readouterr().out
        assert "File" in out
        assert "Target" in out
        assert "a.png" in out

    def test_empty_rows(self, capsys):
        print_table([], ["name"])

        assert "No files" in capsys.readouterr().out


class TestPrintKeyValue:
    def test_formats_values(self, capsys):
        print_key_value({"can_push": True, "private": False, "profiles": ["blog", "docs"]})

        out = capsys.readouterr().out
        assert "Can Push" in out
        assert "Yes" in out
        assert "No" in out
        assert "blog, docs" in out

    def test_empty_dict_prints_title_only(self, capsys):
        print_key_value({}, title="Configuration")

        assert capsys.readouterr().out.strip() == "Configuration"


class TestPrintOutput:
    def test_quiet_prints_one_field_per_row(self, capsys):
        rows = [{"name": "a.png", "cdn": "https://c/a.png"}, {"name": "b.jpg", "cdn": "https://c/b.jpg"}]

        print_output(rows, quiet=True, id_field="cdn")

        assert capsys.readouterr().out.splitlines() == ["https://c/a.png", "https://c/b.jpg"]

    def test_json(self, capsys):
        print_output({"name": "café.png"}, format=OutputFormat.JSON)

        out = capsys.readouterr().out
        assert "café.png" in out
        assert json.loads(out) == {"name": "café.png"}

    def test_list_without_columns_uses_row_keys(self, capsys):
        print_output([{"name": "a.png", "target": "images/a.png"}])

        out = capsys.readouterr().out
        assert "Name" in out
        assert "Target" in out


def test_print_counts(capsys):
    print_counts(3, 1)

    assert "Succeeded: 3 | Failed: 1" in capsys.readouterr().out


def test_output_format_from_string():
    assert OutputFormat.from_string("JSON") is OutputFormat.JSON
