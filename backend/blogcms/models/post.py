from blogcms.extensions import db
from .base import BaseModel
from .taxonomy import post_categories, post_tags


class Post(BaseModel):
    __tablename__ = "posts"

    author_id = db.Column(db.String(36), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default="DRAFT", index=True)
    publish_at = db.Column(db.DateTime, nullable=True, index=True)

    translations = db.relationship(
        "PostTranslation",
        back_populates="post",
        order_by="PostTranslation.locale",
        cascade="all, delete-orphan",
    )

    # Append-only; rows are written by utils.versioning.record_revision
    revisions = db.relationship(
        "Revision",
        viewonly=True,
        order_by="Revision.version.desc()",
    )

    preview_tokens = db.relationship(
        "PreviewToken",
        back_populates="post",
        cascade="all, delete-orphan",
    )

    categories = db.relationship("Category", secondary=post_categories, lazy="selectin")
    tags = db.relationship("Tag", secondary=post_tags, lazy="selectin")

    __table_args__ = (
        db.Index("ix_posts_visibility", "status", "publish_at"),
    )

    def translation_for(self, locale):
        for translation in self.translations:
            if translation.locale == locale:
                return translation
        return None
