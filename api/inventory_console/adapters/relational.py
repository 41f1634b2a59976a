# inventory_console/adapters/relational.py
"""
External relational backend on SQLAlchemy Core (async engine).

One table per collection (``db_models.TABLES``); the primary key ``id`` is the
public id, so records need no key translation. Columns that are NULL are left
out of returned records, which keeps an inserted record and its re-read equal.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import Table, and_, delete, func, insert, select, update
from sqlalchemy.sql import Select

from inventory_console.adapters.base import BaseCollection, Record
from inventory_console.database import Database
from inventory_console.db_models import TABLES
from inventory_console.identifiers import PUBLIC_KEY, uuid_id

logger = logging.getLogger(__name__)


def row_to_record(row: Mapping[str, Any], prefix: str = "") -> Record:
    """Mapping row -> record, dropping NULL columns (and an optional label prefix)."""
    out: Record = {}
    for k, v in row.items():
        if prefix:
            if not k.startswith(prefix):
                continue
            k = k[len(prefix):]
        if v is not None:
            out[k] = v
    return out


class RelationalCollection(BaseCollection):
    backend = "postgres"

    def __init__(self, name: str, database: Database, table: Optional[Table] = None, **kwargs: Any):
        super().__init__(name, **kwargs)
        self.db = database
        self.table = table if table is not None else TABLES[name]

    # =========================================================================
    # Statement helpers
    # =========================================================================

    def _columns(self, data: Mapping[str, Any]) -> None:
        unknown = sorted(set(data) - set(self.table.c.keys()))
        if unknown:
            raise ValueError(f"unknown columns for {self.table.name}: {', '.join(unknown)}")

    def _where(self, stmt: Any, query: Mapping[str, Any]) -> Any:
        if not query:
            return stmt
        self._columns(query)
        return stmt.where(and_(*[self.table.c[k] == v for k, v in query.items()]))

    async def _rows(self, stmt: Select) -> List[Record]:
        async def run() -> List[Record]:
            async with self.db.begin() as conn:
                res = await conn.execute(stmt)
                return [row_to_record(r) for r in res.mappings().all()]
        return await self._bounded(run())

    async def _scalar(self, stmt: Select) -> Any:
        async def run() -> Any:
            async with self.db.begin() as conn:
                return (await conn.execute(stmt)).scalar()
        return await self._bounded(run())

    async def _write(self, stmt: Any) -> int:
        async def run() -> int:
            async with self.db.begin() as conn:
                return (await conn.execute(stmt)).rowcount
        return await self._bounded(run())

    # =========================================================================
    # Hooks
    # =========================================================================

    async def _find(self, query: Record) -> List[Record]:
        return await self._rows(self._where(select(self.table), query))

    async def _find_one(self, query: Record) -> Optional[Record]:
        rows = await self._rows(self._where(select(self.table), query).limit(1))
        return rows[0] if rows else None

    async def _find_by_id(self, record_id: str) -> Optional[Record]:
        return await self._find_one({PUBLIC_KEY: record_id})

    async def _count(self, query: Record) -> int:
        stmt = self._where(select(func.count()).select_from(self.table), query)
        return int(await self._scalar(stmt) or 0)

    async def _insert(self, record: Record) -> Record:
        self._columns(record)
        values = {**record, PUBLIC_KEY: uuid_id()}
        await self._write(insert(self.table).values(**values))
        # re-read so column defaults show up in the result
        stored = await self._find_by_id(values[PUBLIC_KEY])
        return stored if stored is not None else row_to_record(values)

    async def _update(self, record_id: str, patch: Record) -> Optional[Record]:
        self._columns(patch)
        if self.model is not None or not patch:
            current = await self._find_by_id(record_id)
            if current is None:
                return None
            if not patch:
                return current
            self._check_merged(current, patch)
        stmt = update(self.table).where(self.table.c.id == record_id).values(**patch)
        if await self._write(stmt) == 0:
            return None
        return await self._find_by_id(record_id)

    async def _delete(self, record_id: str) -> Optional[Record]:
        existing = await self._find_by_id(record_id)
        if existing is None:
            return None
        await self._write(delete(self.table).where(self.table.c.id == record_id))
        return existing

    async def order_details(self, order_id: str) -> Optional[Dict[str, Any]]:
        """Joined order read (see ``fetch_order_details``); only meaningful on the orders table."""
        return await self._read(
            self._bounded(fetch_order_details(self.db, str(order_id))), "order details",
        )


# =========================================================================
# Composite read
# =========================================================================

def _labelled(table: Table, prefix: str) -> List[Any]:
    return [c.label(f"{prefix}{c.name}") for c in table.c]


async def fetch_order_details(database: Database, order_id: str) -> Optional[Dict[str, Any]]:
    """
    Order plus its items, payment and customer in one LEFT JOIN select.

    Returns ``None`` when the order does not exist. With several payments on
    one order the first one returned is used.
    """
    o, i, p, c = (TABLES[n] for n in ("orders", "orderItems", "payments", "customers"))
    stmt = (
        select(*_labelled(o, "o__"), *_labelled(i, "i__"), *_labelled(p, "p__"), *_labelled(c, "c__"))
        .select_from(
            o.outerjoin(i, i.c.order_id == o.c.id)
            .outerjoin(p, p.c.order_id == o.c.id)
            .outerjoin(c, c.c.id == o.c.customer_id)
        )
        .where(o.c.id == order_id)
    )
    async with database.begin() as conn:
        rows = (await conn.execute(stmt)).mappings().all()
    if not rows:
        return None

    details: Dict[str, Any] = row_to_record(rows[0], "o__")
    items: List[Record] = []
    seen = set()
    payment: Optional[Record] = None
    for row in rows:
        item = row_to_record(row, "i__")
        if item.get(PUBLIC_KEY) and item[PUBLIC_KEY] not in seen:
            seen.add(item[PUBLIC_KEY])
            items.append(item)
        if payment is None:
            pay = row_to_record(row, "p__")
            payment = pay if pay.get(PUBLIC_KEY) else None
    customer = row_to_record(rows[0], "c__")

    details["items"] = items
    details["payment"] = payment
    details["customer"] = customer if customer.get(PUBLIC_KEY) else None
    logger.debug("postgres: order %s details, %d item(s)", order_id, len(items))
    return details
