from datetime import datetime
from uuid import UUID
from pydantic import BaseModel

from foodtrack.models.consumption_log import ActionType


class ConsumptionLogResponse(BaseModel):
    id: UUID
    user_id: UUID
    food_name: str | None
    action_type: ActionType
    quantity: float
    reason: str | None
    log_date: datetime

    model_config = {"from_attributes": True}


class ConsumptionStatsResponse(BaseModel):
    start_date: datetime
    end_date: datetime
    purchased: int
    consumed: int
    wasted: int
    donated: int
    consumed_quantity: float
    wasted_quantity: float
    total_entries: int


class UserSummaryResponse(BaseModel):
    user_id: UUID
    total_purchased: int
    total_consumed: int
    total_wasted: int
    total_donated: int
    total_waste_quantity: float
    last_log_date: datetime | None
