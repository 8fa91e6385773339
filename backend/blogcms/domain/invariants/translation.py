import re
from typing import Any, Dict, Iterable, List, Optional

from blogcms.domain.exceptions import InvalidArgumentError, SlugConflict

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

REQUIRED_FIELDS = ("locale", "title", "slug")

TRANSLATION_FIELDS = (
    "title",
    "slug",
    "excerpt",
    "body",
    "meta_title",
    "meta_description",
    "canonical",
    "og_image",
    "schema_type",
    "schema_data",
    "hero_image_id",
)


def validate_translation_payloads(
    payloads: Any,
    supported_locales: Iterable[str],
) -> List[Dict[str, Any]]:
    """
    Check required-field completeness of a batch of translation payloads.

    Returns the payloads restricted to known translation fields plus
    ``locale``. Nothing is written; every payload is checked before the
    caller touches the store.
    """
    if not isinstance(payloads, list):
        raise InvalidArgumentError(
            "translations must be a list", details={"field": "translations"}
        )

    allowed_locales = set(supported_locales)
    seen: set[str] = set()
    cleaned: List[Dict[str, Any]] = []

    for payload in payloads:
        if not isinstance(payload, dict):
            raise InvalidArgumentError(
                "Each translation must be an object", details={"field": "translations"}
            )

        locale = payload.get("locale")

        for field in REQUIRED_FIELDS:
            value = payload.get(field)
            if not isinstance(value, str) or not value.strip():
                raise InvalidArgumentError(
                    f'Translation field "{field}" is required'
                    + (f' for locale "{locale}"' if isinstance(locale, str) and locale else ""),
                    details={"locale": locale, "field": field},
                )

        if locale not in allowed_locales:
            raise InvalidArgumentError(
                f'Unsupported locale "{locale}"',
                details={"locale": locale, "field": "locale"},
            )

        if locale in seen:
            raise InvalidArgumentError(
                f'Locale "{locale}" appears more than once',
                details={"locale": locale, "field": "locale"},
            )
        seen.add(locale)

        body = payload.get("body")
        if not isinstance(body, str):
            raise InvalidArgumentError(
                f'Translation field "body" is required for locale "{locale}"',
                details={"locale": locale, "field": "body"},
            )

        slug = payload["slug"]
        if not SLUG_PATTERN.match(slug):
            raise InvalidArgumentError(
                f'Slug "{slug}" for locale "{locale}" must be lowercase words joined by hyphens',
                details={"locale": locale, "field": "slug", "slug": slug},
            )

        item = {"locale": locale}
        for field in TRANSLATION_FIELDS:
            if field in payload:
                item[field] = payload[field]
        cleaned.append(item)

    return cleaned


def assert_slugs_available(
    payloads: Iterable[Dict[str, Any]],
    *,
    exclude_post_id: Optional[str] = None,
) -> None:
    """
    Fail with SlugConflict if another post already owns (locale, slug).

    Runs for every locale before any write is attempted; the current post is
    excluded so an update may keep its own slugs.
    """
    from blogcms.models.post_translation import PostTranslation

    for payload in payloads:
        query = PostTranslation.query.filter(
            PostTranslation.locale == payload["locale"],
            PostTranslation.slug == payload["slug"],
        )
        if exclude_post_id is not None:
            query = query.filter(PostTranslation.post_id != exclude_post_id)

        if query.first() is not None:
            raise SlugConflict(payload["locale"], payload["slug"])
