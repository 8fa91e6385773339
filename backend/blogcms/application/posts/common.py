from typing import Any, Dict, Iterable, List, Optional

from flask import current_app
from sqlalchemy import select

from blogcms.extensions import db
from blogcms.domain.exceptions import NotFoundError
from blogcms.models.post import Post
from blogcms.models.post_translation import PostTranslation
from blogcms.models.taxonomy import Category, Tag
from blogcms.utils.rendering import render_markdown


def supported_locales() -> List[str]:
    return list(current_app.config["SUPPORTED_LOCALES"])


def get_post_or_404(post_id: str) -> Post:
    post = db.session.get(Post, post_id)
    if not post:
        raise NotFoundError("Post not found", details={"post_id": post_id})
    return post


def lock_post(post_id: str) -> Post:
    """Fetch a post with a row-level lock for the rest of the transaction."""
    post = (
        db.session.execute(
            select(Post)
            .where(Post.id == post_id)
            .with_for_update()
        )
        .scalar_one_or_none()
    )

    if not post:
        raise NotFoundError("Post not found", details={"post_id": post_id})

    return post


def write_translation(translation: PostTranslation, payload: Dict[str, Any]) -> None:
    """
    Copy payload fields onto a translation and re-render body_html from body.
    """
    for field, value in payload.items():
        if field == "locale":
            continue
        setattr(translation, field, value)

    translation.body_html = render_markdown(translation.body)


def resolve_links(model, ids: Optional[Iterable[str]], label: str) -> list:
    if ids is None:
        return []

    ids = list(dict.fromkeys(ids))
    if not ids:
        return []

    rows = model.query.filter(model.id.in_(ids)).all()
    found = {row.id for row in rows}
    missing = [i for i in ids if i not in found]
    if missing:
        raise NotFoundError(f"{label} not found", details={"ids": missing})

    return rows


def resolve_categories(ids):
    return resolve_links(Category, ids, "Category")


def resolve_tags(ids):
    return resolve_links(Tag, ids, "Tag")


def translation_summary(post: Post) -> list[dict]:
    return [{"locale": t.locale, "title": t.title, "slug": t.slug} for t in post.translations]
