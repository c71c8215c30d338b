from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Protocol

from bakramandi.admin.client import PaymentsClient
from bakramandi.admin.formatting import PaymentRow, format_row
from bakramandi.admin.table import (
    ALL_PAYMENTS,
    SortDirection,
    filter_by_status,
    next_sort,
    search_payments,
    sort_payments,
    tab_counts,
)
from bakramandi.admin.view_model import Payment
from bakramandi.core.errors import MalformedResponseError, NetworkError

log = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to load payment data. Please try again."


class Notifier(Protocol):
    def error(self, message: str) -> None: ...


class LogNotifier:
    def error(self, message: str) -> None:
        log.error("notify: %s", message)


class PaymentsView:
    """
    Headless admin payments table.

    ``mount()`` runs the single fetch; everything after that (search, sort,
    tabs) works on the fetched rows in memory.
    """

    def __init__(self, client: PaymentsClient, notifier: Notifier | None = None):
        self._client = client
        self._notifier = notifier or LogNotifier()
        self._task: asyncio.Task[None] | None = None

        self.payments: tuple[Payment, ...] = ()
        self.search_term = ""
        self.sort_column: str | None = None
        self.sort_direction: SortDirection = "asc"
        self.is_loading = False

    def mount(self) -> asyncio.Task[None]:
        if self._task is not None:
            raise RuntimeError("PaymentsView is already mounted")
        self.is_loading = True
        self._task = asyncio.create_task(self._load())
        return self._task

    async def unmount(self) -> None:
        task = self._task
        if task is None or task.done():
            return
        # cancelled before it can touch state
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _load(self) -> None:
        try:
            payments = await self._client.fetch_payments()
        except (NetworkError, MalformedResponseError) as e:
            log.warning("payments fetch failed: %s", e)
            self.payments = ()
            self._notifier.error(FETCH_FAILED_MESSAGE)
        else:
            log.info("payments loaded: %d", len(payments))
            self.payments = tuple(payments)
        self.is_loading = False

    def search(self, term: str) -> None:
        self.search_term = term

    def sort_by(self, column: str) -> None:
        self.sort_column, self.sort_direction = next_sort(self.sort_column, self.sort_direction, column)

    def rows(self, tab: str = ALL_PAYMENTS) -> list[Payment]:
        searched = search_payments(self.payments, self.search_term)
        ordered = sort_payments(searched, self.sort_column, self.sort_direction)
        return filter_by_status(ordered, tab)

    def display_rows(self, tab: str = ALL_PAYMENTS) -> list[PaymentRow]:
        return [format_row(p) for p in self.rows(tab)]

    def tab_counts(self) -> dict[str, int]:
        return tab_counts(self.payments)
