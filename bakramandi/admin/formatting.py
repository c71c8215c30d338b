from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from bakramandi.admin.view_model import Payment, PaymentDetails

CURRENCY_PREFIX = "Rs."
NOT_AVAILABLE = "N/A"
# calendar days are rendered in Pakistan time
DISPLAY_TZ = ZoneInfo("Asia/Karachi")

STATUS_COLORS = {
    "completed": "green",
    "pending": "yellow",
    "cancelled": "red",
}
DEFAULT_STATUS_COLOR = "gray"


def format_currency(amount: float) -> str:
    if float(amount).is_integer():
        digits = f"{int(amount):,}"
    else:
        digits = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"{CURRENCY_PREFIX} {digits}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    if value.tzinfo is not None:
        value = value.astimezone(DISPLAY_TZ)
    return value.strftime("%d/%m/%Y")


def format_payment_method(method: str) -> str:
    return method[:1].upper() + method[1:]


def format_payment_details(details: PaymentDetails | None) -> str:
    if details is None:
        return NOT_AVAILABLE
    if details.bank_name and details.account_number:
        return f"{details.bank_name} - {details.account_number}"
    if details.stripe_payment_intent_id:
        return "Stripe Payment"
    return NOT_AVAILABLE


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status.lower(), DEFAULT_STATUS_COLOR)


TABLE_HEADERS = ("Order ID", "Buyer", "Seller", "Amount", "Payment Method", "Payment Details", "Status", "Date")


@dataclass(frozen=True)
class PaymentRow:
    order_id: str
    buyer: str
    seller: str
    amount: str
    payment_method: str
    payment_details: str
    status: str
    status_color: str
    date: str

    def cells(self) -> list[str]:
        return [
            self.order_id,
            self.buyer,
            self.seller,
            self.amount,
            self.payment_method,
            self.payment_details,
            self.status,
            self.date,
        ]


def format_row(payment: Payment) -> PaymentRow:
    return PaymentRow(
        order_id=payment.order_id,
        buyer=payment.buyer or "Unknown",
        seller=payment.seller or "Unknown",
        amount=format_currency(payment.amount),
        payment_method=format_payment_method(payment.payment_method),
        payment_details=format_payment_details(payment.payment_details),
        status=payment.status,
        status_color=status_color(payment.status),
        date=format_date(payment.date),
    )
