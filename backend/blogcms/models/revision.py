from sqlalchemy import event
from blogcms.extensions import db
from .base import BaseModel


class Revision(BaseModel):
    __tablename__ = "revisions"

    post_id = db.Column(
        db.String(36),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    locale = db.Column(db.String(10), nullable=False)
    version = db.Column(db.Integer, nullable=False)

    schema_version = db.Column(db.Integer, nullable=False, default=1)
    data = db.Column(db.JSON, nullable=False)

    created_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("post_id", "locale", "version", name="uq_revision_post_locale_version"),
        db.Index("idx_revision_post_locale", "post_id", "locale"),
    )


@event.listens_for(Revision, "before_update")
@event.listens_for(Revision, "before_delete")
def prevent_revision_mutation(mapper, connection, target):
    raise RuntimeError("Revisions are immutable")
