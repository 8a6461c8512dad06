from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class FoodItemResponse(BaseModel):
    id: UUID
    name: str
    category: str | None
    default_expiration_days: int | None
    average_cost: float | None
    unit: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
