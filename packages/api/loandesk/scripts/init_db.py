# This project was developed with assistance from AI tools.
"""Create the loan desk tables without running migrations.

Usage:
    python -m loandesk.scripts.init_db          # create missing tables
    python -m loandesk.scripts.init_db --drop   # drop everything first

Alembic (``packages/db``) remains the migration path for real deployments.
"""

import argparse
import asyncio

from loandesk_db import get_db_service


async def main(drop: bool = False) -> None:
    service = get_db_service()
    try:
        if drop:
            await service.drop_all()
            print("Dropped all tables")
        await service.create_all()
        print("Tables ready")
    finally:
        await service.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the loan desk tables")
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop existing tables before creating them",
    )
    args = parser.parse_args()
    asyncio.run(main(drop=args.drop))
