from datetime import datetime

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from bakramandi.models.base import Base, JsonType, TimestampMixin


class Listing(TimestampMixin, Base):
    __tablename__ = "listings"

    # database-generated so concurrent inserts never share an id
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    type: Mapped[str | None] = mapped_column(String(60), nullable=True)
    breed: Mapped[str | None] = mapped_column(String(120), nullable=True)

    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[int | None] = mapped_column(Integer, nullable=True)

    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ordered list of public image URLs
    images: Mapped[list] = mapped_column(JsonType, nullable=False, default=list)

    # "active" on creation
    status: Mapped[str] = mapped_column(String(30), nullable=False, default="active")
    listed: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    for_eid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
