import logging

from fastapi import APIRouter, Depends, Query

from bakramandi.api.deps import get_reset_password_service
from bakramandi.schemas.auth import ResetPasswordIn, ResetPasswordOut
from bakramandi.services.redaction import mask_token, redact
from bakramandi.services.reset_password import ResetPasswordService

log = logging.getLogger(__name__)
router = APIRouter(prefix="/auth")


@router.post("/reset-password", response_model=ResetPasswordOut)
async def reset_password(
    payload: ResetPasswordIn,
    token: str | None = Query(default=None),
    service: ResetPasswordService = Depends(get_reset_password_service),
) -> ResetPasswordOut:
    log.info("reset-password request: token=%s body=%s", mask_token(token), redact(payload.model_dump()))
    return await service.reset_password(token, payload)
