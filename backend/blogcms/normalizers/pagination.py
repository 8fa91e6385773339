# blogcms/normalizers/pagination.py
from typing import Callable, Any, List, Optional, Dict

from blogcms.utils.pagination import CursorMeta, PageMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    cursor: Optional[CursorMeta] = None,
    page: Optional[PageMeta] = None,
) -> Dict[str, Any]:
    """
    Normalize paginated API responses.

    Supports:
    - Cursor-based pagination (audit log)
    - Offset-based pagination (post listings)

    Exactly ONE pagination strategy should be used per response.
    """
    response: Dict[str, Any] = {
        "data": [normalize_fn(item) for item in items],
    }

    if cursor is not None:
        response["meta"] = {
            "has_more": cursor["has_more"],
            "next_cursor": cursor["next_cursor"],
        }
    elif page is not None:
        response["meta"] = dict(page)

    return response
