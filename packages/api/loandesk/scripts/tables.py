# This project was developed with assistance from AI tools.
"""Table snapshots shared by the dump and export scripts."""

from dataclasses import dataclass
from typing import Any

from loandesk_db import Base
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine


@dataclass
class TableSnapshot:
    name: str
    total: int
    columns: list[str]
    rows: list[tuple[Any, ...]]


async def snapshot_tables(engine: AsyncEngine, *, row_limit: int | None = None) -> list[TableSnapshot]:
    """Read every mapped table, ordered by name, with up to *row_limit* rows each."""
    snapshots = []
    async with engine.connect() as conn:
        for table in sorted(Base.metadata.sorted_tables, key=lambda t: t.name):
            total = (await conn.execute(select(func.count()).select_from(table))).scalar() or 0
            stmt = select(table)
            if row_limit is not None:
                stmt = stmt.limit(row_limit)
            rows = (await conn.execute(stmt)).all()
            snapshots.append(
                TableSnapshot(
                    name=table.name,
                    total=total,
                    columns=[column.name for column in table.columns],
                    rows=[tuple(row) for row in rows],
                )
            )
    return snapshots


def format_value(value: Any) -> str:
    return "" if value is None else str(value)


def format_row(values: tuple[Any, ...] | list[str]) -> str:
    return " | ".join(format_value(v) for v in values)
