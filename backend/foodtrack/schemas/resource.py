from datetime import datetime
from uuid import UUID
from pydantic import BaseModel

from foodtrack.models.resource import ResourceType


class ResourceResponse(BaseModel):
    id: UUID
    title: str
    content: str | None
    category_tag: str | None
    resource_type: ResourceType
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
