from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodtrack.database import get_db
from foodtrack.errors import Forbidden
from foodtrack.schemas.logs import UserSummaryResponse
from foodtrack.schemas.user import UserCreate, UserUpdate, UserResponse
from foodtrack.services import queries, users
from foodtrack.utils.identity import get_current_user_id

router = APIRouter()


@router.post("/", response_model=UserResponse, status_code=201)
def register(body: UserCreate, db: Session = Depends(get_db)):
    return users.register_user(db, **body.model_dump())


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: UUID, db: Session = Depends(get_db)):
    return users.get_user(db, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    body: UserUpdate,
    db: Session = Depends(get_db),
    current_user_id: UUID = Depends(get_current_user_id),
):
    if user_id != current_user_id:
        raise Forbidden("User", user_id, current_user_id)
    return users.update_profile(db, user_id, **body.model_dump(exclude_unset=True))


@router.get("/{user_id}/summary", response_model=UserSummaryResponse)
def summary(user_id: UUID, db: Session = Depends(get_db)):
    users.get_user(db, user_id)
    return queries.user_summary(db, user_id)
