from fastapi import Request

from bakramandi.core.config import Settings
from bakramandi.services.listing_store import ListingStore
from bakramandi.services.orders import OrderStore
from bakramandi.services.reset_password import ResetPasswordService
from bakramandi.services.storage import LocalObjectStore
from bakramandi.services.uploads import UploadPolicy


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_listing_store(request: Request) -> ListingStore:
    return request.app.state.listing_store


def get_object_store(request: Request) -> LocalObjectStore:
    return request.app.state.object_store


def get_upload_policy(request: Request) -> UploadPolicy:
    return request.app.state.upload_policy


def get_reset_password_service(request: Request) -> ResetPasswordService:
    return request.app.state.reset_password_service


def get_order_store(request: Request) -> OrderStore:
    return request.app.state.order_store
