from .create_post import create_post
from .update_post import update_post
from .delete_post import delete_post
from .publish_post import publish_post
from .unpublish_post import unpublish_post
from .rollback_post import rollback_post
from .revisions import list_revisions
from .preview import issue_preview_token, resolve_preview_token
from .scheduling import promote_due_posts
from .queries import (
    get_post_admin,
    list_posts_admin,
    list_published_posts,
    get_published_by_slug,
)

__all__ = [
    "create_post",
    "update_post",
    "delete_post",
    "publish_post",
    "unpublish_post",
    "rollback_post",
    "list_revisions",
    "issue_preview_token",
    "resolve_preview_token",
    "promote_due_posts",
    "get_post_admin",
    "list_posts_admin",
    "list_published_posts",
    "get_published_by_slug",
]
