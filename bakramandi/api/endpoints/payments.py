from fastapi import APIRouter, Depends

from bakramandi.api.deps import get_order_store
from bakramandi.schemas.payment import OrderRecord
from bakramandi.services.internal_admin import require_internal_admin
from bakramandi.services.orders import OrderStore

router = APIRouter(prefix="/payment")


@router.get("/admin/all", response_model=list[OrderRecord], dependencies=[Depends(require_internal_admin)])
async def list_all_payments(store: OrderStore = Depends(get_order_store)) -> list[OrderRecord]:
    return await store.list_all()
