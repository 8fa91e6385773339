# blogcms/application/posts/publish_post.py
from datetime import datetime
from typing import Optional

from flask import current_app

from blogcms.domain.lifecycle.post import PostStatus, resolve_publication
from blogcms.models.post import Post
from blogcms.utils.audit import log_action
from blogcms.utils.clock import to_utc_naive, utcnow
from blogcms.utils.transaction import transactional
from .common import lock_post


def publish_post(
    *,
    post_id: str,
    actor_id: str,
    publish_at: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Post:
    """
    Publish a post now, or schedule it when publish_at is in the future.

    SCHEDULED posts flip to PUBLISHED once publish_at passes, either on the
    next public read or through the ``promote-scheduled`` command.
    """
    now = now or utcnow()
    if publish_at is not None:
        publish_at = to_utc_naive(publish_at)

    with transactional():
        post = lock_post(post_id)

        status, effective_at = resolve_publication(publish_at, now)
        post.status = status.value
        post.publish_at = effective_at

        action = "SCHEDULE" if status is PostStatus.SCHEDULED else "PUBLISH"

        log_action(
            action=action,
            entity_type="Post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"status": post.status, "publish_at": effective_at.isoformat()},
        )

    current_app.logger.info(
        "Post %s %s by %s at %s", post_id, action.lower(), actor_id, effective_at.isoformat()
    )
    return post
