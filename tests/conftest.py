"""
Test fixtures for the blog content backend.

Provides:
- Application configured with TestingConfig and a fresh in-memory database
- Test client and JWT header factories for each editorial role
- Helpers for building translation payloads and posts
"""

from datetime import datetime
from typing import Any, Callable, Dict

import pytest
from flask import Flask
from flask_jwt_extended import create_access_token

from blogcms import create_app
from blogcms.extensions import db
from blogcms.application import posts as post_service
from blogcms.models.taxonomy import Category, Tag


@pytest.fixture
def app() -> Flask:
    """
    Create test application instance.

    Returns:
        Flask application with an in-memory SQLite database; tables are
        created before and dropped after each test.
    """
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app) -> Callable[..., Dict[str, str]]:
    """
    Factory for bearer-token headers.

    Usage: auth_headers("EDITOR") or auth_headers("ADMIN", user_id="admin-1")
    """

    def _headers(role: str, user_id: str = None) -> Dict[str, str]:
        token = create_access_token(
            identity=user_id or f"{role.lower()}-1",
            additional_claims={"role": role},
        )
        return {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }

    return _headers


def translation(locale: str = "en", **overrides: Any) -> Dict[str, Any]:
    payload = {
        "locale": locale,
        "title": f"Title {locale}",
        "slug": f"post-{locale}",
        "excerpt": "Short summary",
        "body": "# Heading\n\nSome **markdown** body.",
        "meta_title": "Meta",
        "meta_description": "Meta description",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_translation() -> Callable[..., Dict[str, Any]]:
    return translation


@pytest.fixture
def make_post(app):
    """Create a post through the service layer."""

    def _make(*translations: Dict[str, Any], author_id: str = "author-1", **extra):
        data = {"translations": list(translations) or [translation()]}
        data.update(extra)
        return post_service.create_post(author_id=author_id, data=data)

    return _make


@pytest.fixture
def category(app) -> Category:
    row = Category()
    row.slug = "engineering"
    row.name = "Engineering"
    db.session.add(row)
    db.session.commit()
    return row


@pytest.fixture
def tag(app) -> Tag:
    row = Tag()
    row.slug = "python"
    row.name = "Python"
    db.session.add(row)
    db.session.commit()
    return row


@pytest.fixture
def now() -> datetime:
    return datetime(2030, 1, 1, 12, 0, 0)
