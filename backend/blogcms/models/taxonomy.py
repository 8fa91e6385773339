# Category and tag CRUD lives outside this service; only the rows posts link to.
from blogcms.extensions import db
from .base import BaseModel


post_categories = db.Table(
    "post_categories",
    db.Column("post_id", db.String(36), db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.String(36), db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)

post_tags = db.Table(
    "post_tags",
    db.Column("post_id", db.String(36), db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", db.String(36), db.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Category(BaseModel):
    __tablename__ = "categories"

    slug = db.Column(db.String(200), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)


class Tag(BaseModel):
    __tablename__ = "tags"

    slug = db.Column(db.String(200), unique=True, nullable=False)
    name = db.Column(db.String(200), nullable=False)
