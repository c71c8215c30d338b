from __future__ import annotations

import logging
from typing import Mapping

import httpx

from bakramandi.admin.view_model import Payment, parse_orders, to_payment
from bakramandi.core.errors import MalformedResponseError, NetworkError
from bakramandi.schemas.payment import OrderRecord

log = logging.getLogger(__name__)

PAYMENTS_PATH = "/payment/admin/all"


class PaymentsClient:
    """
    HTTP client for the admin payments endpoint.

    - Uses one AsyncClient instance (connection pooling).
    - Does NOT retry; a failed fetch is terminal and the user reloads the view.
    - Transport failures and non-2xx answers raise NetworkError, bodies that are
      not a list of order records raise MalformedResponseError.
    """

    def __init__(
        self,
        *,
        base_url: str,
        admin_key: str | None = None,
        timeout_seconds: float = 20.0,
        default_headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = dict(default_headers or {})
        if admin_key:
            headers["X-Internal-Admin-Key"] = admin_key
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PaymentsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def fetch_orders(self) -> list[OrderRecord]:
        try:
            resp = await self._client.get(PAYMENTS_PATH)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timed out fetching {PAYMENTS_PATH}") from e
        except httpx.RequestError as e:
            # DNS errors, connection refused, TLS, etc.
            raise NetworkError(f"Could not reach {PAYMENTS_PATH}: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise NetworkError(f"HTTP {resp.status_code} from {PAYMENTS_PATH}", status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponseError(f"{PAYMENTS_PATH} did not return JSON") from e

        orders = parse_orders(data)
        log.debug("fetched %d orders", len(orders))
        return orders

    async def fetch_payments(self) -> list[Payment]:
        return [to_payment(o) for o in await self.fetch_orders()]
