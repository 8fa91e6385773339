from blogcms.extensions import db
from .base import BaseModel


class PreviewToken(BaseModel):
    __tablename__ = "preview_tokens"

    token = db.Column(db.String(128), unique=True, nullable=False, index=True)
    post_id = db.Column(
        db.String(36),
        db.ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale = db.Column(db.String(10), nullable=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_by = db.Column(db.String(36), nullable=True)

    post = db.relationship("Post", back_populates="preview_tokens")
