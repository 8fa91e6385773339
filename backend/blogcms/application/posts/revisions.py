from typing import List

from blogcms.models.revision import Revision
from .common import get_post_or_404


def list_revisions(*, post_id: str, locale: str) -> List[Revision]:
    """Revision history for one locale, newest first."""
    post = get_post_or_404(post_id)

    return (
        Revision.query
        .filter_by(post_id=post.id, locale=locale)
        .order_by(Revision.version.desc())
        .all()
    )
