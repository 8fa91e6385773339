import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from flask import current_app

from blogcms.extensions import db
from blogcms.domain.exceptions import InvalidArgumentError
from blogcms.models.post import Post
from blogcms.models.preview_token import PreviewToken
from blogcms.utils.audit import log_action
from blogcms.utils.clock import utcnow
from blogcms.utils.transaction import transactional
from .common import get_post_or_404, supported_locales

INVALID_TOKEN_MESSAGE = "Invalid or expired preview token"


def issue_preview_token(
    *,
    post_id: str,
    actor_id: Optional[str] = None,
    locale: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Mint a bearer token granting read access to a post until a fixed expiry.

    Tokens are never renewed; callers ask for a new one instead.
    """
    now = now or utcnow()

    if locale is not None and locale not in supported_locales():
        raise InvalidArgumentError(
            f'Unsupported locale "{locale}"', details={"locale": locale, "field": "locale"}
        )

    ttl = timedelta(hours=current_app.config["PREVIEW_TOKEN_TTL_HOURS"])

    with transactional():
        post = get_post_or_404(post_id)

        preview = PreviewToken()
        preview.token = secrets.token_hex(32)
        preview.post_id = post.id
        preview.locale = locale
        preview.expires_at = now + ttl
        preview.created_by = actor_id

        db.session.add(preview)
        db.session.flush()

        log_action(
            action="PREVIEW_TOKEN",
            entity_type="Post",
            entity_id=post.id,
            actor_id=actor_id,
            payload={"locale": locale, "expires_at": preview.expires_at.isoformat()},
        )

    frontend_url = current_app.config["FRONTEND_URL"].rstrip("/")

    return {
        "token": preview.token,
        "url": f"{frontend_url}/preview/{preview.token}",
        "expires_at": preview.expires_at,
        "locale": locale,
    }


def resolve_preview_token(
    token: str,
    *,
    now: Optional[datetime] = None,
) -> tuple[Post, Optional[str]]:
    """
    Return (post, pinned locale) for a live token, ignoring publication status.

    Unknown and expired tokens fail identically so callers cannot probe for
    tokens that once existed. Read-only.
    """
    now = now or utcnow()

    preview = PreviewToken.query.filter_by(token=token).first() if token else None

    if preview is None or now >= preview.expires_at:
        raise InvalidArgumentError(INVALID_TOKEN_MESSAGE)

    return get_post_or_404(preview.post_id), preview.locale
