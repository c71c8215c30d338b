"""Wire shape of the order records served by ``GET /payment/admin/all``.

The same models validate the response on the admin side, so a backend that
drifts from this shape is reported instead of rendered with made-up defaults.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentDetailsRecord(_CamelModel):
    bank_name: str | None = None
    account_number: str | None = None
    stripe_payment_intent_id: str | None = None


class OrderItemRecord(_CamelModel):
    id: str | int
    title: str
    price: float


class OrderRecord(_CamelModel):
    id: str | int
    order_id: str
    buyer: str | None = None
    seller: str | None = None
    buyer_id: int | None = None
    total: float
    subtotal: float
    tax: float
    payment_method: str
    payment_details: PaymentDetailsRecord | None = None
    status: str
    date: datetime | None = None
    items: list[OrderItemRecord] | None = None
