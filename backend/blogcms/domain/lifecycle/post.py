import enum
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy import and_, or_

from blogcms.domain.exceptions import InvalidArgumentError


class PostStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    REVIEW = "REVIEW"
    SCHEDULED = "SCHEDULED"
    PUBLISHED = "PUBLISHED"


# Editorial workflows move posts back and forth freely: every status may
# follow every other.
ALLOWED_POST_TRANSITIONS: dict[PostStatus, set[PostStatus]] = {
    status: set(PostStatus) for status in PostStatus
}


def parse_status(value) -> PostStatus:
    try:
        return PostStatus(value)
    except ValueError:
        raise InvalidArgumentError(
            f"Invalid post status: {value}",
            details={"field": "status", "allowed": [s.value for s in PostStatus]},
        )


def assert_post_transition(*, from_status, to_status) -> PostStatus:
    """
    Guards post lifecycle transitions.
    Single source of truth for status changes.
    """
    source = parse_status(from_status)
    target = parse_status(to_status)

    if target not in ALLOWED_POST_TRANSITIONS[source]:
        raise InvalidArgumentError(
            f"Illegal post transition: {source.value} → {target.value}"
        )

    return target


def resolve_publication(
    requested_at: Optional[datetime],
    now: datetime,
) -> Tuple[PostStatus, datetime]:
    """
    Compute (status, publish_at) for a publish request.

    A missing or past/present requested time publishes immediately and
    stamps publish_at with now; a strictly future time schedules the post
    for that time.
    """
    if requested_at is not None and requested_at > now:
        return PostStatus.SCHEDULED, requested_at
    return PostStatus.PUBLISHED, now


def is_publicly_visible(post, now: datetime) -> bool:
    return post.status == PostStatus.PUBLISHED.value and (
        post.publish_at is None or post.publish_at <= now
    )


def visible_clause(model, now: datetime):
    """SQL form of is_publicly_visible for list and lookup queries."""
    return and_(
        model.status == PostStatus.PUBLISHED.value,
        or_(model.publish_at.is_(None), model.publish_at <= now),
    )
