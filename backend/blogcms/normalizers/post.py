from blogcms.utils.clock import isoformat
from .translation import normalize_translation


def normalize_post(post, admin=False, locale=None):
    translations = post.translations
    if locale:
        translations = [t for t in translations if t.locale == locale]

    data = {
        "id": post.id,
        "status": post.status,
        "publish_at": isoformat(post.publish_at),
        "translations": [normalize_translation(t, admin=admin) for t in translations],
        "categories": [{"id": c.id, "slug": c.slug, "name": c.name} for c in post.categories],
        "tags": [{"id": t.id, "slug": t.slug, "name": t.name} for t in post.tags],
    }

    if admin:
        data["author_id"] = post.author_id
        data["created_at"] = isoformat(post.created_at)
        data["updated_at"] = isoformat(post.updated_at)

    return data
