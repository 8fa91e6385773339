from flask import current_app

from blogcms.extensions import db
from blogcms.models.revision import Revision
from blogcms.utils.audit import log_action
from blogcms.utils.transaction import transactional
from .common import lock_post, translation_summary


def delete_post(
    *,
    post_id: str,
    actor_id: str,
) -> None:
    """
    Hard-delete a post and everything it owns.

    Notes:
    - Revisions are removed with a bulk delete; the ORM refuses to delete
      revision rows one by one
    - Translations, preview tokens and category/tag links cascade via the ORM
    """
    with transactional():
        post = lock_post(post_id)
        old_translations = translation_summary(post)

        Revision.query.filter_by(post_id=post.id).delete(synchronize_session=False)

        db.session.delete(post)

        log_action(
            action="DELETE",
            entity_type="Post",
            entity_id=post_id,
            actor_id=actor_id,
            payload={"translations": old_translations},
        )

    current_app.logger.info("Post %s deleted by %s", post_id, actor_id)
