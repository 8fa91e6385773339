from datetime import datetime
from typing import Any, Optional

from sqlalchemy import or_

from blogcms.domain.exceptions import NotFoundError
from blogcms.domain.lifecycle.post import is_publicly_visible, parse_status, visible_clause
from blogcms.models.post import Post
from blogcms.models.post_translation import PostTranslation
from blogcms.models.taxonomy import Category, Tag
from blogcms.utils.clock import utcnow
from blogcms.utils.pagination import PageMeta, paginate_offset
from .common import get_post_or_404
from .scheduling import promote_due_posts


def _search_clause(search: str, locale: Optional[str] = None):
    pattern = f"%{search}%"
    clause = or_(
        PostTranslation.title.ilike(pattern),
        PostTranslation.body.ilike(pattern),
    )
    if locale:
        return Post.translations.any(clause & (PostTranslation.locale == locale))
    return Post.translations.any(clause)


def _filter_links(query, category_id: Optional[str], tag_id: Optional[str]):
    if category_id:
        query = query.filter(Post.categories.any(Category.id == category_id))
    if tag_id:
        query = query.filter(Post.tags.any(Tag.id == tag_id))
    return query


def get_post_admin(post_id: str) -> Post:
    return get_post_or_404(post_id)


def list_posts_admin(
    *,
    page: int = 1,
    limit: int = 20,
    status: Optional[str] = None,
    search: Optional[str] = None,
    category_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    author_id: Optional[str] = None,
) -> tuple[list[Post], PageMeta]:
    query = Post.query

    if status:
        query = query.filter(Post.status == parse_status(status).value)
    if author_id:
        query = query.filter(Post.author_id == author_id)
    if search:
        query = query.filter(_search_clause(search))
    query = _filter_links(query, category_id, tag_id)

    query = query.order_by(Post.updated_at.desc(), Post.id.desc())
    return paginate_offset(query, page=page, limit=limit)


def list_published_posts(
    *,
    page: int = 1,
    limit: int = 10,
    locale: Optional[str] = None,
    category_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    search: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[list[Post], PageMeta]:
    """
    Publicly visible posts, most recently published first.

    Due scheduled posts are promoted first; the visibility predicate is then
    applied verbatim against now.
    """
    now = now or utcnow()
    promote_due_posts(now=now)

    query = Post.query.filter(visible_clause(Post, now))

    if locale:
        query = query.filter(Post.translations.any(PostTranslation.locale == locale))
    if search:
        query = query.filter(_search_clause(search, locale))
    query = _filter_links(query, category_id, tag_id)

    query = query.order_by(Post.publish_at.desc(), Post.id.desc())
    return paginate_offset(query, page=page, limit=limit)


def get_published_by_slug(
    *,
    locale: str,
    slug: str,
    now: Optional[datetime] = None,
) -> tuple[Post, Any]:
    """Return (post, translation) for a publicly visible post's slug."""
    now = now or utcnow()
    promote_due_posts(now=now)

    translation = PostTranslation.query.filter_by(locale=locale, slug=slug).first()

    if not translation or not is_publicly_visible(translation.post, now):
        raise NotFoundError("Post not found")

    return translation.post, translation
