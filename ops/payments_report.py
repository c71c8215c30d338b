from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import TextIO

import httpx

from bakramandi.admin.client import PaymentsClient
from bakramandi.admin.formatting import TABLE_HEADERS, PaymentRow
from bakramandi.admin.table import SORT_COLUMNS, STATUS_TABS
from bakramandi.admin.view import PaymentsView
from bakramandi.core.config import settings


DEFAULT_BASE_URL = os.getenv("BAKRAMANDI_BASE_URL", settings.payments_api_url)
DEFAULT_ADMIN_KEY = settings.internal_admin_key or ""

DEFAULT_TIMEOUT_SECONDS = settings.payments_timeout_seconds

_ANSI = {"green": "\033[32m", "yellow": "\033[33m", "red": "\033[31m", "gray": "\033[90m"}
_RESET = "\033[0m"


class StderrNotifier:
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream
        self.errors = 0

    def error(self, message: str) -> None:
        self.errors += 1
        print(message, file=self.stream or sys.stderr)


def render_table(rows: list[PaymentRow], *, color: bool = False) -> str:
    cells = [r.cells() for r in rows]
    widths = [len(h) for h in TABLE_HEADERS]
    for line in cells:
        widths = [max(w, len(c)) for w, c in zip(widths, line)]

    def _fmt(line: list[str]) -> str:
        return "  ".join(c.ljust(w) for c, w in zip(line, widths)).rstrip()

    out = [_fmt(list(TABLE_HEADERS)), _fmt(["-" * w for w in widths])]
    status_col = TABLE_HEADERS.index("Status")
    for row, line in zip(rows, cells):
        text = _fmt(line)
        if color:
            # colour only the status cell; padding is computed on plain text
            start = sum(w + 2 for w in widths[:status_col])
            end = start + len(row.status)
            text = text[:start] + _ANSI[row.status_color] + row.status + _RESET + text[end:]
        out.append(text)
    return "\n".join(out)


def render_tabs(counts: dict[str, int]) -> str:
    return "  ".join(f"{tab.replace('-', ' ').title()} ({counts[tab]})" for tab in STATUS_TABS)


async def _run(args: argparse.Namespace, transport: httpx.AsyncBaseTransport | None = None) -> int:
    client = PaymentsClient(
        base_url=args.base_url,
        admin_key=args.admin_key or None,
        timeout_seconds=DEFAULT_TIMEOUT_SECONDS,
        transport=transport,
    )
    async with client:
        notifier = StderrNotifier()
        view = PaymentsView(client, notifier=notifier)
        await view.mount()

    if not view.payments:
        print("No payment data available yet.")
        return 1 if notifier.errors else 0

    view.search(args.search)
    for column in args.sort:
        view.sort_by(column)

    print(render_tabs(view.tab_counts()))
    rows = view.display_rows(args.tab)
    if not rows:
        print("No payments match your search criteria.")
        return 0
    print(render_table(rows, color=args.color))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Print the admin payments table.")
    p.add_argument("--base-url", default=DEFAULT_BASE_URL)
    p.add_argument("--admin-key", default=DEFAULT_ADMIN_KEY)
    p.add_argument("--search", default="", help="free-text filter on buyer, seller, order id, payment method")
    p.add_argument(
        "--sort",
        action="append",
        default=[],
        choices=SORT_COLUMNS,
        help="column to sort by; repeat the same column to flip to descending",
    )
    p.add_argument("--tab", choices=STATUS_TABS, default=STATUS_TABS[0])
    p.add_argument("--color", action="store_true", help="colour the status column")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
