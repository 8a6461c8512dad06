from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from foodtrack.database import get_db
from foodtrack.schemas.resource import ResourceResponse
from foodtrack.services import resources
from foodtrack.utils.pagination import pagination_params, paginate

router = APIRouter()


@router.get("/", response_model=dict)
def list_resources(
    category: str | None = None,
    resource_type: str | None = None,
    page: dict = Depends(pagination_params),
    db: Session = Depends(get_db),
):
    q = resources.list_resources(db, category_tag=category, resource_type=resource_type)
    return paginate(q, page["skip"], page["limit"], schema=ResourceResponse)


@router.get("/{resource_id}", response_model=ResourceResponse)
def get_resource(resource_id: UUID, db: Session = Depends(get_db)):
    return resources.get_resource(db, resource_id)
