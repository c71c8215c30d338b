from fastapi import APIRouter

from bakramandi.schemas.common import HealthOut

router = APIRouter()


@router.get("/health", response_model=HealthOut, include_in_schema=False)
async def health() -> HealthOut:
    return HealthOut()
