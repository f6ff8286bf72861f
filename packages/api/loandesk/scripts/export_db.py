# This project was developed with assistance from AI tools.
"""Write a plain-text export of every table.

Usage:
    python -m loandesk.scripts.export_db               # -> db-export.txt
    python -m loandesk.scripts.export_db out.txt
"""

import argparse
import asyncio
from datetime import UTC, datetime
from pathlib import Path

from loandesk_db import get_db_service

from .tables import TableSnapshot, format_row, snapshot_tables


def render_export(snapshots: list[TableSnapshot], *, generated_at: datetime) -> str:
    lines = ["# DB export", f"Generated: {generated_at.isoformat()}", ""]
    if not snapshots:
        lines.append("(no tables found)")
    for snapshot in snapshots:
        header = format_row(snapshot.columns)
        lines.append(f"## {snapshot.name} (rows: {snapshot.total})")
        lines.append(header)
        lines.append("-" * len(header))
        lines.extend(format_row(row) for row in snapshot.rows)
        lines.append("")
    return "\n".join(lines)


async def main(out_path: Path) -> None:
    service = get_db_service()
    try:
        snapshots = await snapshot_tables(service.engine)
    finally:
        await service.dispose()
    out_path.write_text(render_export(snapshots, generated_at=datetime.now(UTC)), encoding="utf-8")
    print(f"Written {out_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Export the loan desk tables to a text file")
    parser.add_argument("out", nargs="?", default="db-export.txt", type=Path)
    args = parser.parse_args()
    asyncio.run(main(args.out))
