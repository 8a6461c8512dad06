from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodtrack.database import get_db
from foodtrack.schemas.catalog import FoodItemResponse
from foodtrack.services import catalog
from foodtrack.utils.pagination import pagination_params, paginate

router = APIRouter()


@router.get("/", response_model=dict)
def list_food_items(
    category: str | None = None,
    search: str | None = None,
    page: dict = Depends(pagination_params),
    db: Session = Depends(get_db),
):
    q = catalog.list_food_items(db, category=category, search=search)
    return paginate(q, page["skip"], page["limit"], schema=FoodItemResponse)


@router.get("/{food_item_id}", response_model=FoodItemResponse)
def get_food_item(food_item_id: UUID, db: Session = Depends(get_db)):
    return catalog.find_food_item(db, food_item_id)
