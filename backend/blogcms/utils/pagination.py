# blogcms/utils/pagination.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple, Type, TypedDict

from flask import current_app
from sqlalchemy import and_, or_
from sqlalchemy.orm import Query

from blogcms.domain.exceptions import InvalidArgumentError


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


class PageMeta(TypedDict):
    total: int
    page: int
    limit: int
    total_pages: int


def clamp_page_args(page: Any, limit: Any, *, default_limit: int, max_limit: int) -> Tuple[int, int]:
    """
    Coerce page/limit query arguments; limit is capped at max_limit.
    """
    try:
        page = int(page) if page is not None else 1
        limit = int(limit) if limit is not None else default_limit
    except (TypeError, ValueError):
        raise InvalidArgumentError("page and limit must be integers")

    if page < 1 or limit < 1:
        raise InvalidArgumentError("page and limit must be positive")

    return page, min(limit, max_limit)


def paginate_offset(query: Query, *, page: int, limit: int) -> tuple[list[Any], PageMeta]:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()

    return items, {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": (total + limit - 1) // limit,
    }


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """
    Encode a cursor using a stable, deterministic sort key.

    Format: ISO8601|<id>
    """
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode cursor")

    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise InvalidArgumentError("Invalid cursor format")

    try:
        ts_str, row_id = cursor.split("|", 1)
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        current_app.logger.debug("Rejected cursor %r", cursor)
        raise InvalidArgumentError("Invalid cursor format") from exc


def paginate_cursor(
    query: Query,
    *,
    model: Type[Any],
    cursor: Optional[str],
    limit: int,
) -> tuple[list[Any], CursorMeta]:
    """
    Execute a cursor-paginated query, newest first.

    Ordering contract: ORDER BY created_at DESC, id DESC. Fetches limit + 1
    rows to detect continuation.
    """
    if limit <= 0:
        raise InvalidArgumentError("Limit must be greater than zero")

    if cursor:
        cursor_ts, cursor_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < cursor_ts,
                and_(
                    model.created_at == cursor_ts,
                    model.id < cursor_id,
                ),
            )
        )

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )

    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor: Optional[str] = None
    if items and has_more:
        last = items[-1]
        next_cursor = encode_cursor(last.created_at, last.id)

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
    }
