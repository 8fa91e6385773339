from blogcms.utils.clock import isoformat


def normalize_translation(translation, admin=False):
    data = {
        "locale": translation.locale,
        "title": translation.title,
        "slug": translation.slug,
        "excerpt": translation.excerpt,
        "body_html": translation.body_html,
        "seo": {
            "meta_title": translation.meta_title,
            "meta_description": translation.meta_description,
            "canonical": translation.canonical,
            "og_image": translation.og_image,
            "schema_type": translation.schema_type,
            "schema_data": translation.schema_data,
        },
        "hero_image_id": translation.hero_image_id,
    }

    if admin:
        data["body"] = translation.body
        data["updated_at"] = isoformat(translation.updated_at)

    return data
