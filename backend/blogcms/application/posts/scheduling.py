from datetime import datetime
from typing import Optional

from flask import current_app

from blogcms.domain.lifecycle.post import PostStatus
from blogcms.extensions import db
from blogcms.models.post import Post
from blogcms.utils.audit import log_action
from blogcms.utils.clock import utcnow
from blogcms.utils.transaction import transactional


def promote_due_posts(*, now: Optional[datetime] = None) -> int:
    """
    Flip SCHEDULED posts whose publish_at has passed to PUBLISHED.

    Called lazily by public read paths and by the ``promote-scheduled`` CLI
    command. publish_at is kept, so the visibility predicate gives the same
    answer before and after promotion for every instant >= publish_at.
    """
    now = now or utcnow()

    with transactional():
        promoted = (
            Post.query
            .filter(
                Post.status == PostStatus.SCHEDULED.value,
                Post.publish_at.isnot(None),
                Post.publish_at <= now,
            )
            .update(
                {Post.status: PostStatus.PUBLISHED.value, Post.updated_at: now},
                synchronize_session=False,
            )
        )

        if promoted:
            # Audit once per batch
            log_action(
                action="PUBLISH",
                entity_type="Post",
                entity_id="*",
                payload={"count": promoted, "scheduled": True},
            )

    if promoted:
        db.session.expire_all()
        current_app.logger.info("Promoted %d scheduled post(s) to PUBLISHED", promoted)

    return promoted
