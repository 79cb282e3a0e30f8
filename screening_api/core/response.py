"""JSON response envelopes for the saved-package endpoints."""


import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from screening_api.core.pagination import PageMeta

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item envelope: `{ data: {...} }`"""

    data: T


class ListResponse(BaseModel, Generic[T]):
    """Paginated list envelope: `{ data: [...], meta: {...} }`"""

    data: list[T]
    meta: PageMeta


def paginated(items: list[Any], total: int, page: int, limit: int) -> dict:
    """Build a paginated response dict for use with ListResponse."""
    return {
        "data": items,
        "meta": {
            "total": total,
            "page": page,
            "limit": limit,
            "pages": math.ceil(total / limit) if limit else 1,
        },
    }
