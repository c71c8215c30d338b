from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, Literal

from bakramandi.admin.view_model import Payment

SortColumn = Literal["buyer", "seller", "amount", "status", "date"]
SortDirection = Literal["asc", "desc"]

SORT_COLUMNS: tuple[str, ...] = ("buyer", "seller", "amount", "status", "date")

ALL_PAYMENTS = "all-payments"
STATUS_TABS: tuple[str, ...] = (ALL_PAYMENTS, "completed", "pending", "cancelled")


def next_sort(
    current_column: str | None,
    current_direction: SortDirection,
    clicked: str,
) -> tuple[str, SortDirection]:
    """Clicking the active column flips direction; any other column starts ascending."""
    if clicked not in SORT_COLUMNS:
        raise ValueError(f"Unsortable column: {clicked!r}")
    if clicked == current_column:
        return clicked, "desc" if current_direction == "asc" else "asc"
    return clicked, "asc"


def search_payments(payments: Iterable[Payment], term: str) -> list[Payment]:
    needle = term.lower()
    out = []
    for p in payments:
        fields = (p.buyer, p.seller, p.order_id, p.payment_method)
        if any(f is not None and needle in f.lower() for f in fields):
            out.append(p)
    return out


def _collate(value: str | None) -> tuple[str, str]:
    # case-insensitive first, original text breaks ties
    s = value or ""
    return s.casefold(), s


def _timestamp(value: datetime | None) -> float:
    if value is None:
        return 0.0
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


_SORT_KEYS: dict[str, Callable[[Payment], object]] = {
    "buyer": lambda p: _collate(p.buyer),
    "seller": lambda p: _collate(p.seller),
    "amount": lambda p: p.amount,
    "status": lambda p: _collate(p.status),
    "date": lambda p: _timestamp(p.date),
}


def sort_payments(
    payments: Iterable[Payment],
    column: str | None,
    direction: SortDirection = "asc",
) -> list[Payment]:
    if column is None:
        return list(payments)
    key = _SORT_KEYS.get(column)
    if key is None:
        raise ValueError(f"Unsortable column: {column!r}")
    # sorted() is stable in both directions, so ties keep fetch order
    return sorted(payments, key=key, reverse=direction == "desc")


def filter_by_status(payments: Iterable[Payment], tab: str) -> list[Payment]:
    if tab == ALL_PAYMENTS:
        return list(payments)
    wanted = tab.lower()
    return [p for p in payments if p.status.lower() == wanted]


def tab_counts(payments: Iterable[Payment]) -> dict[str, int]:
    rows = list(payments)
    counts = {ALL_PAYMENTS: len(rows)}
    for tab in STATUS_TABS[1:]:
        counts[tab] = len(filter_by_status(rows, tab))
    return counts
