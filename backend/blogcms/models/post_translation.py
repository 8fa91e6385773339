from blogcms.extensions import db
from .base import BaseModel


class PostTranslation(BaseModel):
    __tablename__ = "post_translations"

    post_id = db.Column(
        db.String(36),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = db.Column(db.String(10), nullable=False)

    title = db.Column(db.String(300), nullable=False)
    slug = db.Column(db.String(300), nullable=False)
    excerpt = db.Column(db.Text, nullable=True)
    body = db.Column(db.Text, nullable=False, default="")  # markdown
    body_html = db.Column(db.Text, nullable=False, default="")  # always render(body)

    # SEO
    meta_title = db.Column(db.String(300), nullable=True)
    meta_description = db.Column(db.Text, nullable=True)
    canonical = db.Column(db.String(512), nullable=True)
    og_image = db.Column(db.String(512), nullable=True)
    schema_type = db.Column(db.String(50), nullable=True)  # Article | FAQ | HowTo | BlogPosting
    schema_data = db.Column(db.JSON(none_as_null=True), nullable=True)

    hero_image_id = db.Column(db.String(36), nullable=True)

    post = db.relationship("Post", back_populates="translations")

    __table_args__ = (
        db.UniqueConstraint("locale", "slug", name="uq_translation_locale_slug"),
        db.UniqueConstraint("post_id", "locale", name="uq_translation_post_locale"),
    )
