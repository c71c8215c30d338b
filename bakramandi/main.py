import logging
from datetime import timedelta

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from bakramandi.api.router import router
from bakramandi.core.config import Settings, settings as default_settings
from bakramandi.core.db import create_engine, create_session_factory
from bakramandi.core.errors import AppError
from bakramandi.core.telemetry import setup_telemetry
from bakramandi.schemas.common import ErrorResponse
from bakramandi.services.accounts import (
    InMemoryAccountStore,
    InMemoryResetTokenStore,
    SqlAccountStore,
    SqlResetTokenStore,
)
from bakramandi.services.listing_store import InMemoryListingStore, SqlListingStore
from bakramandi.services.orders import InMemoryOrderStore, SqlOrderStore
from bakramandi.services.reset_password import ResetPasswordService
from bakramandi.services.storage import LocalObjectStore
from bakramandi.services.uploads import UploadPolicy

log = logging.getLogger(__name__)


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    body = ErrorResponse(code=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title="Bakra Mandi API", version="0.1.0")
    app.state.settings = settings

    pepper = settings.reset_token_pepper.get_secret_value()
    engine = None
    if settings.database_url:
        engine = create_engine(settings.database_url)
        sessions = create_session_factory(engine)
        app.state.listing_store = SqlListingStore(sessions)
        app.state.order_store = SqlOrderStore(sessions)
        accounts = SqlAccountStore(sessions)
        tokens = SqlResetTokenStore(sessions, pepper=pepper)
    else:
        log.warning("no database_url configured: using in-memory stores")
        app.state.listing_store = InMemoryListingStore()
        if settings.orders_seed_file:
            app.state.order_store = InMemoryOrderStore.from_file(settings.orders_seed_file)
        else:
            app.state.order_store = InMemoryOrderStore()
        accounts = InMemoryAccountStore()
        tokens = InMemoryResetTokenStore(accounts, pepper=pepper)

    app.state.account_store = accounts
    app.state.reset_token_store = tokens
    app.state.reset_password_service = ResetPasswordService(
        accounts=accounts,
        tokens=tokens,
        token_ttl=timedelta(minutes=settings.reset_token_ttl_minutes),
        min_password_length=settings.password_min_length,
    )

    app.state.object_store = LocalObjectStore(settings.upload_dir, settings.upload_url_prefix)
    app.state.upload_policy = UploadPolicy.from_settings(settings)

    app.add_exception_handler(AppError, _app_error_handler)
    app.include_router(router)
    app.mount(settings.upload_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")

    setup_telemetry(app, settings, engine)
    return app


app = create_app()


def run() -> None:
    logging.basicConfig(level=default_settings.log_level)
    log.info("starting %s on port %d", default_settings.service_name, default_settings.port)
    uvicorn.run("bakramandi.main:app", host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":
    run()
