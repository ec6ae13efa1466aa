from fastapi import Query


def pagination_params(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
) -> dict:
    return {"skip": skip, "limit": limit}


def paginate(query, page: dict) -> dict:
    """Apply offset/limit to a list query; `total` counts the unpaged rows."""
    total = query.count()
    items = query.offset(page["skip"]).limit(page["limit"]).all()
    return {"items": items, "total": total, **page}
