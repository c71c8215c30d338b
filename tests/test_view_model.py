import pytest

from bakramandi.admin.formatting import format_date, format_payment_details
from bakramandi.admin.view_model import LineItem, parse_orders, to_payment
from bakramandi.core.errors import MalformedResponseError

from tests.factories import SAMPLE_ORDERS


def _order(**overrides):
    return {**SAMPLE_ORDERS[0], **overrides}


def test_to_payment_maps_fields():
    [order] = parse_orders([SAMPLE_ORDERS[0]])
    p = to_payment(order)

    assert p.id == "ord_1"
    assert p.order_id == "ORD-1001"
    assert p.buyer == "Alice"
    assert p.amount == p.total == 100
    assert p.subtotal == 90
    assert p.tax == 10
    assert p.payment_details.bank_name == "HBL"
    assert p.items == (LineItem(id="it_1", title="Beetal goat", price=90),)
    assert p.date.year == 2024


def test_buyer_and_seller_fallbacks():
    [with_id, without_id] = parse_orders([
        _order(buyer=None, buyerId=7, seller=None),
        _order(buyer="", buyerId=None, seller=""),
    ])
    assert to_payment(with_id).buyer == "Buyer ID: 7"
    assert to_payment(with_id).seller == "Unknown Seller"
    assert to_payment(without_id).buyer == "Buyer ID: Unknown"
    assert to_payment(without_id).seller == "Unknown Seller"


def test_missing_items_become_empty():
    [order] = parse_orders([_order(items=None)])
    assert to_payment(order).items == ()


def test_null_date_and_details_format_as_na():
    [order] = parse_orders([_order(date=None, paymentDetails=None)])
    p = to_payment(order)
    assert format_date(p.date) == "N/A"
    assert format_payment_details(p.payment_details) == "N/A"


def test_numeric_ids_become_strings():
    [order] = parse_orders([_order(id=42, items=[{"id": 5, "title": "Ram", "price": 1}])])
    p = to_payment(order)
    assert p.id == "42"
    assert p.items[0].id == "5"


@pytest.mark.parametrize("body", [{"orders": []}, "oops", None, [{"orderId": "ORD-1"}]])
def test_parse_orders_rejects_malformed_bodies(body):
    with pytest.raises(MalformedResponseError):
        parse_orders(body)


def test_parse_orders_reports_field_errors():
    bad = {k: v for k, v in SAMPLE_ORDERS[0].items() if k != "paymentMethod"}
    with pytest.raises(MalformedResponseError) as exc:
        parse_orders([bad])
    assert exc.value.errors[0]["loc"] == [0, "paymentMethod"]


def test_to_payment_does_not_mutate_record():
    [order] = parse_orders([_order(buyer=None)])
    to_payment(order)
    assert order.buyer is None
