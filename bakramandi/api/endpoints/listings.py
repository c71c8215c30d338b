from fastapi import APIRouter, Depends, File, Form, UploadFile

from bakramandi.api.deps import get_listing_store, get_object_store, get_settings, get_upload_policy
from bakramandi.core.config import Settings
from bakramandi.schemas.listing import ListingOut
from bakramandi.services.listing_store import ListingStore
from bakramandi.services.listings import ListingForm, create_listing
from bakramandi.services.storage import LocalObjectStore
from bakramandi.services.uploads import UploadPolicy

router = APIRouter()


@router.get("/listings", response_model=list[ListingOut], response_model_exclude_none=True)
async def list_listings(store: ListingStore = Depends(get_listing_store)) -> list[ListingOut]:
    return await store.list_all()


@router.post("/listings", response_model=ListingOut, response_model_exclude_none=True, status_code=201)
async def add_listing(
    images: list[UploadFile] | None = File(default=None),
    title: str | None = Form(default=None),
    type: str | None = Form(default=None),
    breed: str | None = Form(default=None),
    age: str | None = Form(default=None),
    weight: str | None = Form(default=None),
    price: str | None = Form(default=None),
    location: str | None = Form(default=None),
    description: str | None = Form(default=None),
    for_eid: str | None = Form(default=None, alias="forEid"),
    store: ListingStore = Depends(get_listing_store),
    object_store: LocalObjectStore = Depends(get_object_store),
    policy: UploadPolicy = Depends(get_upload_policy),
    settings: Settings = Depends(get_settings),
) -> ListingOut:
    form = ListingForm(
        title=title,
        type=type,
        breed=breed,
        age=age,
        weight=weight,
        price=price,
        location=location,
        description=description,
        for_eid=for_eid,
    )
    return await create_listing(
        store=store,
        object_store=object_store,
        policy=policy,
        form=form,
        files=images or [],
        rating=settings.default_listing_rating,
    )
