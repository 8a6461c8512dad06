from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodtrack.database import get_db
from foodtrack.models.consumption_log import ActionType
from foodtrack.schemas.logs import ConsumptionLogResponse, ConsumptionStatsResponse
from foodtrack.services import queries
from foodtrack.utils.identity import get_current_user_id
from foodtrack.utils.pagination import pagination_params, paginate

router = APIRouter()


@router.get("/", response_model=dict)
def list_logs(
    action_type: ActionType | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    page: dict = Depends(pagination_params),
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    q = queries.list_log_entries(db, user_id, action_type=action_type, start=start_date, end=end_date)
    return paginate(q, page["skip"], page["limit"], schema=ConsumptionLogResponse)


@router.get("/stats", response_model=ConsumptionStatsResponse)
def stats(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
):
    return queries.consumption_stats(db, user_id, start_date, end_date)
