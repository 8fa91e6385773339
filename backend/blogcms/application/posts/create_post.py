from typing import Any, Dict

from flask import current_app

from blogcms.extensions import db
from blogcms.domain.exceptions import InvalidArgumentError
from blogcms.domain.invariants.translation import (
    assert_slugs_available,
    validate_translation_payloads,
)
from blogcms.domain.lifecycle.post import PostStatus, parse_status
from blogcms.models.post import Post
from blogcms.models.post_translation import PostTranslation
from blogcms.utils.audit import log_action
from blogcms.utils.clock import parse_timestamp
from blogcms.utils.transaction import transactional
from .common import (
    resolve_categories,
    resolve_tags,
    supported_locales,
    write_translation,
)


def create_post(
    *,
    author_id: str,
    data: Dict[str, Any],
) -> Post:
    """
    Create a new post, by default in DRAFT state.

    Edge cases handled:
    - Missing required translation fields or unsupported locales
    - Slug already used by another post in the same locale
    - Unknown category or tag ids
    """
    translations = validate_translation_payloads(
        data.get("translations", []), supported_locales()
    )

    status = parse_status(data["status"]) if data.get("status") else PostStatus.DRAFT

    try:
        publish_at = parse_timestamp(data.get("publish_at"))
    except ValueError as exc:
        raise InvalidArgumentError(str(exc), details={"field": "publish_at"})

    with transactional():
        # All locales are checked before anything is added to the session
        assert_slugs_available(translations)

        post = Post()
        post.author_id = author_id
        post.status = status.value
        post.publish_at = publish_at
        post.categories = resolve_categories(data.get("category_ids"))
        post.tags = resolve_tags(data.get("tag_ids"))

        for payload in translations:
            translation = PostTranslation()
            translation.locale = payload["locale"]
            write_translation(translation, payload)
            post.translations.append(translation)

        db.session.add(post)
        db.session.flush()  # ensures post.id is available

        log_action(
            action="CREATE",
            entity_type="Post",
            entity_id=post.id,
            actor_id=author_id,
            payload={
                "translations": [
                    {"locale": t["locale"], "title": t["title"]} for t in translations
                ],
                "status": post.status,
            },
        )

    current_app.logger.info("Post %s created by %s", post.id, author_id)
    return post
