"""Display model for the admin payments table.

Raw order records are validated at the fetch boundary (see ``parse_orders``)
and then projected into frozen ``Payment`` rows. Rows are never mutated; the
table functions always return new lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from bakramandi.core.errors import MalformedResponseError
from bakramandi.schemas.payment import OrderRecord

_orders_adapter = TypeAdapter(list[OrderRecord])


@dataclass(frozen=True)
class PaymentDetails:
    bank_name: str | None = None
    account_number: str | None = None
    stripe_payment_intent_id: str | None = None


@dataclass(frozen=True)
class LineItem:
    id: str
    title: str
    price: float


@dataclass(frozen=True)
class Payment:
    id: str
    order_id: str
    buyer: str | None
    seller: str | None
    buyer_id: int | None
    # always total; subtotal + tax is shown as reported, not reconciled
    amount: float
    total: float
    subtotal: float
    tax: float
    payment_method: str
    payment_details: PaymentDetails | None
    status: str
    date: datetime | None
    items: tuple[LineItem, ...] = ()


def parse_orders(data: Any) -> list[OrderRecord]:
    """Validate a decoded response body; raise MalformedResponseError if it is not a list of orders."""
    try:
        return _orders_adapter.validate_python(data)
    except PydanticValidationError as e:
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise MalformedResponseError(f"Invalid payments response: {e.error_count()} error(s)", errors=errors) from e


def to_payment(order: OrderRecord) -> Payment:
    details = None
    if order.payment_details is not None:
        details = PaymentDetails(
            bank_name=order.payment_details.bank_name,
            account_number=order.payment_details.account_number,
            stripe_payment_intent_id=order.payment_details.stripe_payment_intent_id,
        )
    return Payment(
        id=str(order.id),
        order_id=order.order_id,
        buyer=order.buyer or f"Buyer ID: {order.buyer_id or 'Unknown'}",
        seller=order.seller or "Unknown Seller",
        buyer_id=order.buyer_id,
        amount=order.total,
        total=order.total,
        subtotal=order.subtotal,
        tax=order.tax,
        payment_method=order.payment_method,
        payment_details=details,
        status=order.status,
        date=order.date,
        items=tuple(LineItem(id=str(i.id), title=i.title, price=i.price) for i in order.items or ()),
    )
