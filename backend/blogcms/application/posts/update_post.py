from datetime import datetime
from typing import Any, Dict, Optional

from flask import current_app

from blogcms.domain.exceptions import InvalidArgumentError
from blogcms.domain.invariants.translation import (
    assert_slugs_available,
    validate_translation_payloads,
)
from blogcms.domain.lifecycle.post import assert_post_transition
from blogcms.models.post import Post
from blogcms.models.post_translation import PostTranslation
from blogcms.utils.audit import log_action
from blogcms.utils.clock import parse_timestamp, utcnow
from blogcms.utils.optimistic_lock import enforce_optimistic_lock
from blogcms.utils.transaction import transactional
from blogcms.utils.versioning import record_revision
from .common import (
    lock_post,
    resolve_categories,
    resolve_tags,
    supported_locales,
    write_translation,
)


ALLOWED_UPDATE_FIELDS = {"translations", "category_ids", "tag_ids", "status", "publish_at"}


def update_post(
    *,
    post_id: str,
    actor_id: str,
    data: Dict[str, Any],
    expected_updated_at: Optional[datetime] = None,
) -> Post:
    """
    Update a post's translations, links and (optionally) status.

    Design rules:
    - Every locale in the payload is validated and slug-checked before any write
    - The pre-update content of each existing locale being written is captured
      as a revision, even when the new values are identical
    - Status only changes when the caller supplies one
    - A stale expected_updated_at is rejected as a conflict
    """
    unknown = set(data) - ALLOWED_UPDATE_FIELDS
    if unknown:
        raise InvalidArgumentError(
            f"Unknown update fields: {', '.join(sorted(unknown))}",
            details={"fields": sorted(unknown)},
        )

    if not data:
        # Explicitly fail instead of silently succeeding
        raise InvalidArgumentError("No valid fields provided for update")

    translations = None
    if data.get("translations") is not None:
        translations = validate_translation_payloads(
            data["translations"], supported_locales()
        )

    publish_at_given = "publish_at" in data
    try:
        publish_at = parse_timestamp(data.get("publish_at"))
    except ValueError as exc:
        raise InvalidArgumentError(str(exc), details={"field": "publish_at"})

    changed: Dict[str, Any] = {}

    with transactional():
        post = lock_post(post_id)
        enforce_optimistic_lock(post, expected_updated_at)

        if translations is not None:
            assert_slugs_available(translations, exclude_post_id=post.id)

            recorded = {}
            for payload in translations:
                translation = post.translation_for(payload["locale"])
                if translation is not None:
                    revision = record_revision(translation, actor_id)
                    recorded[payload["locale"]] = revision.version

            for payload in translations:
                translation = post.translation_for(payload["locale"])
                if translation is None:
                    translation = PostTranslation()
                    translation.locale = payload["locale"]
                    post.translations.append(translation)
                write_translation(translation, payload)

            changed["locales"] = [t["locale"] for t in translations]
            changed["revisions"] = recorded

        if data.get("category_ids") is not None:
            post.categories = resolve_categories(data["category_ids"])
            changed["category_ids"] = [c.id for c in post.categories]

        if data.get("tag_ids") is not None:
            post.tags = resolve_tags(data["tag_ids"])
            changed["tag_ids"] = [t.id for t in post.tags]

        if data.get("status"):
            target = assert_post_transition(from_status=post.status, to_status=data["status"])
            post.status = target.value
            changed["status"] = post.status

        if publish_at_given:
            post.publish_at = publish_at
            changed["publish_at"] = data.get("publish_at")

        # Translation-only edits must still move the post's updated_at
        post.updated_at = utcnow()

        log_action(
            action="UPDATE",
            entity_type="Post",
            entity_id=post.id,
            actor_id=actor_id,
            payload=changed,
        )

    current_app.logger.info("Post %s updated by %s: %s", post.id, actor_id, sorted(changed))
    return post
