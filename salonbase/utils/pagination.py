from typing import List, Tuple
from sqlalchemy.orm import Query
from salonbase.schemas.common_schema import Pagination


def paginate(query: Query, page: int, limit: int) -> Tuple[List, Pagination]:
    """Run ``query`` for one page; ``page`` is 1-based"""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, Pagination.build(page=page, limit=limit, total=total)
