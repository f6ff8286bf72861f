# This project was developed with assistance from AI tools.
"""Tests for the plain-text table export."""

from datetime import UTC, datetime

from loandesk.scripts.export_db import render_export
from loandesk.scripts.tables import TableSnapshot, format_row

GENERATED_AT = datetime(2024, 3, 5, 3, 0, tzinfo=UTC)


def test_format_row_blanks_none():
    assert format_row(("HL-2024-0001", None, 5)) == "HL-2024-0001 |  | 5"


def test_render_export_sections():
    snapshots = [
        TableSnapshot(
            name="partners",
            total=1,
            columns=["id", "name"],
            rows=[(1, "partner-1")],
        ),
        TableSnapshot(name="conversation_logs", total=0, columns=["id"], rows=[]),
    ]

    text = render_export(snapshots, generated_at=GENERATED_AT)
    lines = text.splitlines()

    assert lines[0] == "# DB export"
    assert lines[1] == "Generated: 2024-03-05T03:00:00+00:00"
    start = lines.index("## partners (rows: 1)")
    assert lines[start + 1] == "id | name"
    assert lines[start + 2] == "-" * len("id | name")
    assert lines[start + 3] == "1 | partner-1"
    assert "## conversation_logs (rows: 0)" in lines


def test_render_export_empty_database():
    text = render_export([], generated_at=GENERATED_AT)
    assert "(no tables found)" in text
