from fastapi import Query


def pagination_params(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
):
    return {"skip": skip, "limit": limit}


def paginate(query, skip: int, limit: int, schema=None):
    """Slice a query into a page; ``schema`` serialises each row when given."""
    total = query.count()
    items = query.offset(skip).limit(limit).all()
    if schema is not None:
        items = [schema.model_validate(i) for i in items]
    return {"items": items, "total": total, "skip": skip, "limit": limit}
