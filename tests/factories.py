from datetime import datetime

from bakramandi.admin.view_model import Payment


def make_payment(**overrides) -> Payment:
    fields = dict(
        id="p1",
        order_id="ORD-1",
        buyer="Buyer",
        seller="Seller",
        buyer_id=1,
        amount=100.0,
        total=100.0,
        subtotal=90.0,
        tax=10.0,
        payment_method="bank",
        payment_details=None,
        status="pending",
        date=None,
        items=(),
    )
    fields.update(overrides)
    if "amount" in overrides and "total" not in overrides:
        fields["total"] = overrides["amount"]
    return Payment(**fields)


def at(day: int) -> datetime:
    return datetime.fromisoformat(f"2024-06-{day:02d}T12:00:00+00:00")


SAMPLE_ORDERS = [
    {
        "id": "ord_1",
        "orderId": "ORD-1001",
        "buyer": "Alice",
        "seller": "Karachi Cattle Co",
        "buyerId": 11,
        "total": 100,
        "subtotal": 90,
        "tax": 10,
        "paymentMethod": "bank",
        "paymentDetails": {"bankName": "HBL", "accountNumber": "0012-3456"},
        "status": "pending",
        "date": "2024-06-10T09:30:00Z",
        "items": [{"id": "it_1", "title": "Beetal goat", "price": 90}],
    },
    {
        "id": "ord_2",
        "orderId": "ORD-1002",
        "buyer": "Bilal",
        "seller": None,
        "buyerId": 12,
        "total": 50,
        "subtotal": 45,
        "tax": 5,
        "paymentMethod": "stripe",
        "paymentDetails": {"stripePaymentIntentId": "pi_123"},
        "status": "completed",
        "date": None,
        "items": None,
    },
]
