import asyncio

import httpx
import pytest

from bakramandi.admin.client import PAYMENTS_PATH, PaymentsClient
from bakramandi.admin.view import FETCH_FAILED_MESSAGE, PaymentsView
from bakramandi.main import create_app

from tests.factories import SAMPLE_ORDERS


class RecordingNotifier:
    def __init__(self):
        self.messages: list[str] = []

    def error(self, message: str) -> None:
        self.messages.append(message)


def _client(handler, **kwargs) -> PaymentsClient:
    return PaymentsClient(base_url="http://payments.test", transport=httpx.MockTransport(handler), **kwargs)


@pytest.mark.asyncio
async def test_mount_loads_payments():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == PAYMENTS_PATH
        return httpx.Response(200, json=SAMPLE_ORDERS)

    notifier = RecordingNotifier()
    view = PaymentsView(_client(handler), notifier)
    await view.mount()

    assert view.is_loading is False
    assert [p.order_id for p in view.payments] == ["ORD-1001", "ORD-1002"]
    assert view.payments[1].seller == "Unknown Seller"
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_loading_flag_is_set_while_fetching():
    gate = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        await gate.wait()
        return httpx.Response(200, json=[])

    view = PaymentsView(_client(handler), RecordingNotifier())
    task = view.mount()
    await asyncio.sleep(0)
    assert view.is_loading is True

    gate.set()
    await task
    assert view.is_loading is False


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(500, json={"message": "boom"}),
        lambda request: httpx.Response(404),
        lambda request: httpx.Response(200, json={"data": []}),
        lambda request: httpx.Response(200, text="<html>nope</html>"),
        lambda request: httpx.Response(200, json=[{"orderId": "ORD-1"}]),
    ],
    ids=["http-500", "http-404", "not-a-list", "not-json", "missing-fields"],
)
@pytest.mark.asyncio
async def test_fetch_failure_fails_soft(handler):
    notifier = RecordingNotifier()
    view = PaymentsView(_client(handler), notifier)
    await view.mount()

    assert view.is_loading is False
    assert view.payments == ()
    assert notifier.messages == [FETCH_FAILED_MESSAGE]


@pytest.mark.asyncio
async def test_connection_error_fails_soft():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    notifier = RecordingNotifier()
    view = PaymentsView(_client(handler), notifier)
    await view.mount()

    assert view.is_loading is False
    assert view.payments == ()
    assert len(notifier.messages) == 1


@pytest.mark.asyncio
async def test_unmount_cancels_in_flight_fetch():
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.Event().wait()
        return httpx.Response(200, json=SAMPLE_ORDERS)

    notifier = RecordingNotifier()
    view = PaymentsView(_client(handler), notifier)
    task = view.mount()
    await started.wait()

    await view.unmount()

    assert task.cancelled()
    assert view.payments == ()
    assert notifier.messages == []


@pytest.mark.asyncio
async def test_mount_twice_is_an_error():
    view = PaymentsView(_client(lambda request: httpx.Response(200, json=[])), RecordingNotifier())
    await view.mount()
    with pytest.raises(RuntimeError):
        view.mount()


@pytest.mark.asyncio
async def test_admin_key_header_is_sent():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["key"] = request.headers.get("X-Internal-Admin-Key")
        return httpx.Response(200, json=[])

    view = PaymentsView(_client(handler, admin_key="s3cret"), RecordingNotifier())
    await view.mount()
    assert seen["key"] == "s3cret"


@pytest.mark.asyncio
async def test_search_sort_and_tabs_work_on_fetched_rows():
    orders = [
        {**SAMPLE_ORDERS[0], "id": "a", "orderId": "ORD-A1", "buyer": "A", "total": 100, "status": "pending"},
        {**SAMPLE_ORDERS[1], "id": "b", "orderId": "ORD-B1", "buyer": "B", "total": 50, "status": "completed"},
    ]
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=orders)

    view = PaymentsView(_client(handler), RecordingNotifier())
    await view.mount()

    view.sort_by("amount")
    assert [p.buyer for p in view.rows()] == ["B", "A"]
    view.sort_by("amount")
    assert [p.buyer for p in view.rows()] == ["A", "B"]

    assert [p.buyer for p in view.rows("completed")] == ["B"]
    assert [p.buyer for p in view.rows("all-payments")] == ["A", "B"]

    view.search("b1")
    assert [p.buyer for p in view.rows()] == ["B"]
    # tab counts ignore the search term
    assert view.tab_counts()["all-payments"] == 2

    rows = view.display_rows()
    assert rows[0].amount == "Rs. 50"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_view_against_running_api(settings, orders_file):
    app = create_app(settings.model_copy(update={"orders_seed_file": str(orders_file)}))
    client = PaymentsClient(base_url="http://test", transport=httpx.ASGITransport(app=app))
    async with client:
        view = PaymentsView(client, RecordingNotifier())
        await view.mount()

    assert view.tab_counts() == {"all-payments": 2, "completed": 1, "pending": 1, "cancelled": 0}
    assert [r.payment_details for r in view.display_rows()] == ["HBL - 0012-3456", "Stripe Payment"]


@pytest.mark.asyncio
async def test_default_notifier_logs_the_error(caplog):
    view = PaymentsView(_client(lambda request: httpx.Response(502)))

    with caplog.at_level("ERROR", logger="bakramandi.admin.view"):
        await view.mount()

    assert [r.getMessage() for r in caplog.records if r.levelname == "ERROR" and r.name == "bakramandi.admin.view"] == [f"notify: {FETCH_FAILED_MESSAGE}"]
