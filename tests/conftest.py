import json

import httpx
import pytest
import pytest_asyncio

from bakramandi.core.config import Settings
from bakramandi.main import create_app

from tests.factories import SAMPLE_ORDERS


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=None,
        upload_dir=str(tmp_path / "uploads"),
        reset_token_pepper="test-pepper",
        internal_admin_key=None,
        orders_seed_file=None,
        otlp_endpoint=None,
    )


@pytest.fixture
def orders_file(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps(SAMPLE_ORDERS), encoding="utf-8")
    return path


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
