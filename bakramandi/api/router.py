from fastapi import APIRouter

from bakramandi.api.endpoints.health import router as health_router
from bakramandi.api.endpoints.listings import router as listings_router
from bakramandi.api.endpoints.reset_password import router as reset_password_router
from bakramandi.api.endpoints.payments import router as payments_router


router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(listings_router, tags=["listings"])
router.include_router(reset_password_router, tags=["auth"])
router.include_router(payments_router, tags=["payments"])
