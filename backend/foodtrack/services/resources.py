from sqlalchemy.orm import Session

from foodtrack.errors import InvalidArgument, NotFound
from foodtrack.models.resource import Resource, ResourceType
from foodtrack.utils.coerce import parse_id


def _resource_type(value) -> ResourceType:
    try:
        return ResourceType(value.upper() if isinstance(value, str) else value)
    except ValueError:
        allowed = ", ".join(t.value for t in ResourceType)
        raise InvalidArgument(f"resource_type must be one of {allowed}, got {value!r}")


def list_resources(db: Session, category_tag: str | None = None, resource_type=None):
    q = db.query(Resource)
    if category_tag:
        q = q.filter(Resource.category_tag == category_tag)
    if resource_type is not None:
        q = q.filter(Resource.resource_type == _resource_type(resource_type))
    return q.order_by(Resource.title.asc())


def get_resource(db: Session, resource_id) -> Resource:
    resource_id = parse_id(resource_id, "resource_id")
    resource = db.get(Resource, resource_id)
    if resource is None:
        raise NotFound("Resource", resource_id)
    return resource
