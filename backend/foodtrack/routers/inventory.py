from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from foodtrack.config import get_settings
from foodtrack.database import get_db
from foodtrack.schemas.inventory import (
    PurchaseRequest, ConsumeRequest, WasteRequest,
    InventoryItemResponse, LedgerResultResponse, ExpiringItemResponse,
)
from foodtrack.services import ledger, queries
from foodtrack.utils.identity import get_current_user_id
from foodtrack.utils.pagination import pagination_params, paginate

router = APIRouter()


@router.get("/", response_model=dict)
def list_items(
    include_empty: bool = True,
    page: dict = Depends(pagination_params),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    q = queries.list_inventory(db, user_id, include_empty=include_empty)
    return paginate(q, page["skip"], page["limit"], schema=InventoryItemResponse)


@router.post("/purchase", response_model=LedgerResultResponse, status_code=201)
def purchase(
    body: PurchaseRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    result = ledger.purchase(db, user_id, **body.model_dump())
    return LedgerResultResponse.model_validate(result)


@router.get("/expiring", response_model=list[ExpiringItemResponse])
def expiring_items(
    days: int | None = None,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    within = get_settings().DEFAULT_EXPIRING_DAYS if days is None else days
    return queries.expiring_soon(db, user_id, within)


@router.get("/{item_id}", response_model=InventoryItemResponse)
def get_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    return queries.get_inventory_item(db, item_id, user_id)


@router.post("/{item_id}/consume", response_model=LedgerResultResponse)
def consume(
    item_id: UUID,
    body: ConsumeRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    result = ledger.consume(db, item_id, user_id, body.amount, reason=body.reason)
    return LedgerResultResponse.model_validate(result)


@router.post("/{item_id}/waste", response_model=LedgerResultResponse)
def waste(
    item_id: UUID,
    body: WasteRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    result = ledger.waste(db, item_id, user_id, body.amount, body.reason)
    return LedgerResultResponse.model_validate(result)


@router.post("/{item_id}/donate", response_model=LedgerResultResponse)
def donate(
    item_id: UUID,
    body: ConsumeRequest,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    result = ledger.donate(db, item_id, user_id, body.amount, reason=body.reason)
    return LedgerResultResponse.model_validate(result)


@router.delete("/{item_id}", status_code=204)
def remove_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    ledger.remove(db, item_id, user_id)
    return Response(status_code=204)
