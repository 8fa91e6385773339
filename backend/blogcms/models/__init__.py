from .taxonomy import Category, Tag, post_categories, post_tags
from .post import Post
from .post_translation import PostTranslation
from .revision import Revision
from .preview_token import PreviewToken
from .audit_log import AuditLog

__all__ = [
    "Category",
    "Tag",
    "post_categories",
    "post_tags",
    "Post",
    "PostTranslation",
    "Revision",
    "PreviewToken",
    "AuditLog",
]
