from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from blogcms.extensions import db
from blogcms.domain.exceptions import InternalError


@dataclass(frozen=True)
class TranslationSnapshot:
    """
    Typed revision payload: the content fields of a translation at capture
    time. body_html is not captured; restore re-renders it from body.
    """

    SCHEMA_VERSION = 1

    title: str
    slug: str
    body: str
    excerpt: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    canonical: Optional[str] = None
    og_image: Optional[str] = None
    schema_type: Optional[str] = None
    schema_data: Optional[Dict[str, Any]] = None
    hero_image_id: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_payload(cls, data: Dict[str, Any], schema_version: int) -> "TranslationSnapshot":
        if schema_version != cls.SCHEMA_VERSION:
            raise InternalError(
                f"Unsupported revision schema version {schema_version}"
            )
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def apply_to(self, translation) -> None:
        for f in fields(self):
            setattr(translation, f.name, getattr(self, f.name))


def snapshot_translation(translation) -> TranslationSnapshot:
    return TranslationSnapshot(
        title=translation.title,
        slug=translation.slug,
        body=translation.body or "",
        excerpt=translation.excerpt,
        meta_title=translation.meta_title,
        meta_description=translation.meta_description,
        canonical=translation.canonical,
        og_image=translation.og_image,
        schema_type=translation.schema_type,
        schema_data=translation.schema_data,
        hero_image_id=translation.hero_image_id,
    )


def next_version(post_id, locale):
    from blogcms.models.revision import Revision

    current = (
        db.session.query(func.max(Revision.version))
        .filter(Revision.post_id == post_id, Revision.locale == locale)
        .scalar()
    )
    return (current or 0) + 1


def record_revision(translation, actor_id):
    """
    Append the translation's current content as the next revision.

    Must run before the incoming change is applied. Failures abort the
    surrounding update: a lost race on the (post, locale, version) unique
    constraint is re-raised for transactional() to report as a conflict,
    any other store failure becomes InternalError.
    """
    from blogcms.models.revision import Revision

    snapshot = snapshot_translation(translation)

    revision = Revision()
    revision.post_id = translation.post_id
    revision.locale = translation.locale
    revision.schema_version = TranslationSnapshot.SCHEMA_VERSION
    revision.data = snapshot.to_payload()
    revision.created_by = actor_id

    try:
        revision.version = next_version(translation.post_id, translation.locale)
        db.session.add(revision)
        db.session.flush()  # surface constraint failures here, not at commit
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        raise InternalError("Failed to record revision history") from exc

    return revision
