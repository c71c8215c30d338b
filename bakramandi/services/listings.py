from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from bakramandi.schemas.listing import ListingOut, NewListing
from bakramandi.services.listing_store import ListingStore
from bakramandi.services.storage import LocalObjectStore
from bakramandi.services.uploads import UploadPolicy, UploadedFile, read_images, store_images

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_int(value: str | None) -> int | None:
    """Leading integer of a form value ("12", "12.5kg" -> 12); None when there is none."""
    if value is None:
        return None
    m = _LEADING_INT.match(value)
    return int(m.group(1)) if m else None


def parse_flag(value: str | None) -> bool:
    return value == "true"


@dataclass(frozen=True)
class ListingForm:
    title: str | None = None
    type: str | None = None
    breed: str | None = None
    age: str | None = None
    weight: str | None = None
    price: str | None = None
    location: str | None = None
    description: str | None = None
    for_eid: str | None = None


def build_new_listing(
    form: ListingForm,
    image_urls: list[str],
    *,
    rating: float,
    now: datetime | None = None,
) -> NewListing:
    return NewListing(
        title=form.title,
        type=form.type,
        breed=form.breed,
        age=parse_int(form.age),
        weight=parse_int(form.weight),
        price=parse_int(form.price),
        location=form.location,
        description=form.description,
        images=image_urls,
        status="active",
        listed=now or datetime.now(timezone.utc),
        rating=rating,
        for_eid=parse_flag(form.for_eid),
    )


async def create_listing(
    *,
    store: ListingStore,
    object_store: LocalObjectStore,
    policy: UploadPolicy,
    form: ListingForm,
    files: Sequence[UploadedFile],
    rating: float,
) -> ListingOut:
    """
    Validate attachments, persist them, then append the listing.
    Nothing is written when any attachment is rejected.
    """
    images = await read_images(files, policy)
    urls = store_images(images, object_store)
    try:
        listing = await store.append(build_new_listing(form, urls, rating=rating))
    except Exception:
        for url in urls:
            object_store.delete(url)
        raise
    log.info("listing created: id=%s images=%d", listing.id, len(urls))
    return listing
