from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bakramandi.models.order import Order
from bakramandi.schemas.payment import OrderRecord

log = logging.getLogger(__name__)

_orders_adapter = TypeAdapter(list[OrderRecord])


class OrderStore(ABC):
    @abstractmethod
    async def list_all(self) -> list[OrderRecord]: ...


class InMemoryOrderStore(OrderStore):
    def __init__(self, orders: Iterable[OrderRecord] = ()) -> None:
        self._orders = list(orders)

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryOrderStore":
        orders = _orders_adapter.validate_json(Path(path).read_bytes())
        log.info("loaded %d orders from %s", len(orders), path)
        return cls(orders)

    async def list_all(self) -> list[OrderRecord]:
        return list(self._orders)


def _to_record(row: Order) -> OrderRecord:
    return OrderRecord(
        id=row.id,
        order_id=row.order_id,
        buyer=row.buyer,
        seller=row.seller,
        buyer_id=row.buyer_id,
        total=row.total,
        subtotal=row.subtotal,
        tax=row.tax,
        payment_method=row.payment_method,
        payment_details=row.payment_details,
        status=row.status,
        date=row.date,
        items=row.items,
    )


class SqlOrderStore(OrderStore):
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def list_all(self) -> list[OrderRecord]:
        stmt = select(Order).order_by(Order.created_at.asc(), Order.id.asc())
        async with self._sessions() as db:
            rows = (await db.execute(stmt)).scalars().all()
            return [_to_record(r) for r in rows]
