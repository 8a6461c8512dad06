from datetime import datetime
from uuid import UUID
from pydantic import BaseModel

from foodtrack.schemas.logs import ConsumptionLogResponse


class PurchaseRequest(BaseModel):
    quantity: float
    name: str | None = None
    unit: str | None = None
    food_item_id: UUID | None = None
    purchase_date: datetime | None = None
    expiration_date: datetime | None = None
    source_image_url: str | None = None
    ai_metadata: dict | None = None


class ConsumeRequest(BaseModel):
    amount: float
    reason: str | None = None


class WasteRequest(BaseModel):
    amount: float
    reason: str | None = None


class InventoryItemResponse(BaseModel):
    id: UUID
    user_id: UUID
    food_item_id: UUID | None
    custom_name: str
    quantity: float
    unit: str | None
    purchase_date: datetime | None
    expiration_date: datetime | None
    source_image_url: str | None
    ai_metadata: dict | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LedgerResultResponse(BaseModel):
    item: InventoryItemResponse
    log_entry: ConsumptionLogResponse

    model_config = {"from_attributes": True}


class ExpiringItemResponse(BaseModel):
    id: UUID
    user_id: UUID
    user_email: str
    item_name: str
    food_item_id: UUID | None
    food_item_name: str | None
    food_item_category: str | None
    quantity: float
    unit: str | None
    expiration_date: datetime
    days_until_expiry: float
