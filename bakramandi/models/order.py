from datetime import datetime

from sqlalchemy import Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import DateTime

from bakramandi.models.base import Base, JsonType, TimestampMixin


class Order(TimestampMixin, Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    order_id: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)

    buyer: Mapped[str | None] = mapped_column(String(200), nullable=True)
    seller: Mapped[str | None] = mapped_column(String(200), nullable=True)
    buyer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    total: Mapped[float] = mapped_column(Float, nullable=False)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False)
    tax: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    payment_method: Mapped[str] = mapped_column(String(40), nullable=False)
    # {"bankName", "accountNumber"} or {"stripePaymentIntentId"}
    payment_details: Mapped[dict | None] = mapped_column(JsonType, nullable=True)

    # "completed" | "pending" | "cancelled" | ...
    status: Mapped[str] = mapped_column(String(30), nullable=False)
    date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    items: Mapped[list | None] = mapped_column(JsonType, nullable=True)
