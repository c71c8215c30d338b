from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NewListing(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    type: str | None = None
    breed: str | None = None
    age: int | None = None
    weight: int | None = None
    price: int | None = None
    location: str | None = None
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    status: str = "active"
    listed: datetime
    rating: float
    for_eid: bool = Field(default=False, alias="forEid")


class ListingOut(NewListing):
    id: int
