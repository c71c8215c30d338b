from __future__ import annotations

import asyncio
import itertools
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bakramandi.models.listing import Listing
from bakramandi.schemas.listing import ListingOut, NewListing


class ListingStore(ABC):
    """Owns listing records and hands out their identifiers."""

    @abstractmethod
    async def list_all(self) -> list[ListingOut]:
        """All listings in insertion order."""

    @abstractmethod
    async def append(self, listing: NewListing) -> ListingOut:
        """Store a listing under a fresh identifier and return it."""


class InMemoryListingStore(ListingStore):
    def __init__(self) -> None:
        self._listings: list[ListingOut] = []
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def list_all(self) -> list[ListingOut]:
        return list(self._listings)

    async def append(self, listing: NewListing) -> ListingOut:
        async with self._lock:
            created = ListingOut(id=next(self._ids), **listing.model_dump())
            self._listings.append(created)
            return created


def _to_out(row: Listing) -> ListingOut:
    return ListingOut(
        id=row.id,
        title=row.title,
        type=row.type,
        breed=row.breed,
        age=row.age,
        weight=row.weight,
        price=row.price,
        location=row.location,
        description=row.description,
        images=list(row.images or []),
        status=row.status,
        listed=row.listed,
        rating=row.rating,
        for_eid=row.for_eid,
    )


class SqlListingStore(ListingStore):
    def __init__(self, sessions: async_sessionmaker[AsyncSession]) -> None:
        self._sessions = sessions

    async def list_all(self) -> list[ListingOut]:
        async with self._sessions() as db:
            rows = (await db.execute(select(Listing).order_by(Listing.id.asc()))).scalars().all()
            return [_to_out(r) for r in rows]

    async def append(self, listing: NewListing) -> ListingOut:
        async with self._sessions() as db:
            row = Listing(**listing.model_dump())
            db.add(row)
            await db.commit()
            return _to_out(row)
