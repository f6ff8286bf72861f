# This project was developed with assistance from AI tools.
"""Print every table of the configured database.

Usage:
    python -m loandesk.scripts.dump_db             # up to 50 rows per table
    python -m loandesk.scripts.dump_db --limit 10
"""

import argparse
import asyncio

from loandesk_db import get_db_service

from .tables import format_row, snapshot_tables

DEFAULT_ROW_LIMIT = 50


async def main(limit: int = DEFAULT_ROW_LIMIT) -> None:
    service = get_db_service()
    try:
        snapshots = await snapshot_tables(service.engine, row_limit=limit)
    finally:
        await service.dispose()

    if not snapshots:
        print("No tables found")
        return

    print(f"Tables: {', '.join(s.name for s in snapshots)}")
    for snapshot in snapshots:
        print(f"\n== {snapshot.name} (total: {snapshot.total}, showing up to {limit}) ==")
        if not snapshot.rows:
            print("(empty)")
            continue
        print(format_row(snapshot.columns))
        for row in snapshot.rows:
            print(format_row(row))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the loan desk tables")
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_ROW_LIMIT,
        help="Maximum rows shown per table",
    )
    args = parser.parse_args()
    asyncio.run(main(limit=args.limit))
