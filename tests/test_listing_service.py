import asyncio
from datetime import datetime, timezone

import pytest

from bakramandi.services.listing_store import InMemoryListingStore
from bakramandi.services.listings import ListingForm, build_new_listing, create_listing, parse_flag, parse_int
from bakramandi.services.storage import LocalObjectStore
from bakramandi.services.uploads import UploadPolicy


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12", 12),
        (" 7 ", 7),
        ("12.9", 12),
        ("45kg", 45),
        ("-3", -3),
        ("0", 0),
        ("abc", None),
        ("٣", None),
        ("١٢", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw, expected", [("true", True), ("True", False), ("1", False), (None, False)])
def test_parse_flag(raw, expected):
    assert parse_flag(raw) is expected


def test_build_new_listing_fixed_fields():
    now = datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)
    form = ListingForm(title="Ram", age="3", weight="x", for_eid="true")
    listing = build_new_listing(form, ["/uploads/1-a.jpg"], rating=4.5, now=now)

    assert listing.status == "active"
    assert listing.listed == now
    assert listing.rating == 4.5
    assert listing.age == 3
    assert listing.weight is None
    assert listing.for_eid is True
    assert listing.images == ["/uploads/1-a.jpg"]


@pytest.mark.asyncio
async def test_in_memory_store_assigns_sequential_ids():
    store = InMemoryListingStore()
    draft = build_new_listing(ListingForm(title="Goat"), [], rating=4.5)

    created = [await store.append(draft) for _ in range(3)]

    assert [c.id for c in created] == [1, 2, 3]
    assert [c.id for c in await store.list_all()] == [1, 2, 3]


@pytest.mark.asyncio
async def test_in_memory_store_list_is_a_copy():
    store = InMemoryListingStore()
    await store.append(build_new_listing(ListingForm(), [], rating=4.5))
    snapshot = await store.list_all()
    snapshot.clear()
    assert len(await store.list_all()) == 1


class BrokenStore(InMemoryListingStore):
    async def append(self, listing):
        raise RuntimeError("store unavailable")


class Upload:
    filename = "ram.png"
    content_type = "image/png"

    async def read(self, size: int = -1) -> bytes:
        return b"png"


@pytest.mark.asyncio
async def test_create_listing_removes_images_when_append_fails(tmp_path):
    object_store = LocalObjectStore(str(tmp_path))
    policy = UploadPolicy(
        max_files=5,
        max_bytes=100,
        allowed_extensions=frozenset({".png"}),
        allowed_media_types=frozenset({"image/png"}),
    )

    with pytest.raises(RuntimeError, match="store unavailable"):
        await create_listing(
            store=BrokenStore(),
            object_store=object_store,
            policy=policy,
            form=ListingForm(title="Ram"),
            files=[Upload()],
            rating=4.5,
        )

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_in_memory_store_ids_unique_under_concurrent_appends():
    store = InMemoryListingStore()
    draft = build_new_listing(ListingForm(title="Goat"), [], rating=4.5)

    created = await asyncio.gather(*(store.append(draft) for _ in range(10)))

    assert sorted(c.id for c in created) == list(range(1, 11))
