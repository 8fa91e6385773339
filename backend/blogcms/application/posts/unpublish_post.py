# blogcms/application/posts/unpublish_post.py
from flask import current_app

from blogcms.domain.lifecycle.post import PostStatus, assert_post_transition
from blogcms.models.post import Post
from blogcms.utils.audit import log_action
from blogcms.utils.transaction import transactional
from .common import lock_post


def unpublish_post(
    *,
    post_id: str,
    actor_id: str,
) -> Post:
    """
    Return a post to DRAFT from any state and clear its publish time.
    """
    with transactional():
        post = lock_post(post_id)
        previous = post.status

        post.status = assert_post_transition(
            from_status=previous, to_status=PostStatus.DRAFT
        ).value
        post.publish_at = None

        log_action(
            action="UNPUBLISH",
            entity_type="Post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"from_status": previous},
        )

    current_app.logger.info("Post %s unpublished by %s (was %s)", post_id, actor_id, previous)
    return post
