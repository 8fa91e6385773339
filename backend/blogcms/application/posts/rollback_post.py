# blogcms/application/posts/rollback_post.py
from flask import current_app

from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.invariants.translation import assert_slugs_available
from blogcms.models.post import Post
from blogcms.models.revision import Revision
from blogcms.utils.audit import log_action
from blogcms.utils.clock import utcnow
from blogcms.utils.rendering import render_markdown
from blogcms.utils.transaction import transactional
from blogcms.utils.versioning import TranslationSnapshot, record_revision
from .common import lock_post


def rollback_post(
    *,
    post_id: str,
    locale: str,
    version: int,
    actor_id: str,
) -> Post:
    """
    Restore one locale of a post to a previously recorded revision.

    Responsibilities:
    - Record the current content as a new revision first, so the rollback
      can itself be rolled back
    - Re-check the historical slug against other posts
    - Re-render body_html from the historical markdown
    - Audit logging

    Rolling back to content that is already current is allowed; it simply
    adds one more revision.
    """
    with transactional():
        post = lock_post(post_id)

        revision = Revision.query.filter_by(
            post_id=post.id, locale=locale, version=version
        ).first()
        if not revision:
            raise NotFoundError(
                "Revision not found",
                details={"locale": locale, "version": version},
            )

        translation = post.translation_for(locale)
        if translation is None:
            raise NotFoundError("Translation not found", details={"locale": locale})

        snapshot = TranslationSnapshot.from_payload(revision.data, revision.schema_version)

        assert_slugs_available(
            [{"locale": locale, "slug": snapshot.slug}], exclude_post_id=post.id
        )

        recorded = record_revision(translation, actor_id)

        snapshot.apply_to(translation)
        translation.body_html = render_markdown(translation.body)
        post.updated_at = utcnow()

        log_action(
            action="ROLLBACK",
            entity_type="Post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={
                "locale": locale,
                "rollback_to": version,
                "recorded_version": recorded.version,
            },
        )

    current_app.logger.info(
        "Post %s [%s] rolled back to v%s by %s (previous content saved as v%s)",
        post_id, locale, version, actor_id, recorded.version,
    )
    return post
