from datetime import timedelta

from blogcms.application import posts as post_service
from blogcms.extensions import db
from blogcms.models.audit_log import AuditLog
from blogcms.models.post import Post
from blogcms.models.revision import Revision
from blogcms.utils.clock import utcnow


def _create(client, headers, *translations):
    response = client.post("/api/v1/admin/posts", json={"translations": list(translations)}, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


class TestHealth:

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"
        assert response.get_json()["database"] == "ok"


class TestAuthorization:

    def test_admin_routes_require_token(self, client):
        assert client.get("/api/v1/admin/posts").status_code == 401
        assert client.post("/api/v1/admin/posts", json={}).status_code == 401

    def test_author_cannot_publish(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/publish", headers=auth_headers("AUTHOR")
        )

        assert response.status_code == 403
        assert response.get_json()["error"] == "Forbidden"

    def test_higher_roles_inherit_lower_permissions(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("ADMIN"), make_translation("en"))

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/publish", headers=auth_headers("ADMIN")
        )
        assert response.status_code == 200

    def test_only_admin_deletes(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("EDITOR"), make_translation("en"))

        response = client.delete(
            f"/api/v1/admin/posts/{created['id']}", headers=auth_headers("EDITOR")
        )
        assert response.status_code == 403

    def test_audit_log_is_admin_only(self, client, auth_headers):
        response = client.get("/api/v1/admin/audit-logs", headers=auth_headers("EDITOR"))
        assert response.status_code == 403


class TestAdminPosts:

    def test_create(self, client, auth_headers, make_translation):
        created = _create(
            client, auth_headers("AUTHOR", user_id="writer-7"),
            make_translation("en"), make_translation("vi"),
        )

        assert created["status"] == "DRAFT"
        assert created["author_id"] == "writer-7"
        assert created["publish_at"] is None
        assert [t["locale"] for t in created["translations"]] == ["en", "vi"]
        assert "<h1>Heading</h1>" in created["translations"][0]["body_html"]

    def test_create_validation_error(self, client, auth_headers, make_translation):
        response = client.post(
            "/api/v1/admin/posts",
            json={"translations": [make_translation("en", slug="Not A Slug")]},
            headers=auth_headers("AUTHOR"),
        )

        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidArgument"
        assert Post.query.count() == 0

    def test_create_slug_conflict(self, client, auth_headers, make_translation):
        _create(client, auth_headers("AUTHOR"), make_translation("en", slug="taken"))

        response = client.post(
            "/api/v1/admin/posts",
            json={"translations": [make_translation("en", slug="taken")]},
            headers=auth_headers("AUTHOR"),
        )

        body = response.get_json()
        assert response.status_code == 409
        assert body["error"] == "Conflict"
        assert body["details"] == {"locale": "en", "slug": "taken"}

    def test_get_unknown_post(self, client, auth_headers):
        response = client.get("/api/v1/admin/posts/missing", headers=auth_headers("AUTHOR"))
        assert response.status_code == 404
        assert response.get_json()["error"] == "NotFound"

    def test_list_with_status_filter(self, client, auth_headers, make_translation):
        draft = _create(client, auth_headers("AUTHOR"), make_translation("en", slug="draft"))
        live = _create(client, auth_headers("AUTHOR"), make_translation("en", slug="live"))
        client.post(f"/api/v1/admin/posts/{live['id']}/publish", headers=auth_headers("EDITOR"))

        response = client.get(
            "/api/v1/admin/posts?status=DRAFT", headers=auth_headers("AUTHOR")
        )

        body = response.get_json()
        assert [p["id"] for p in body["data"]] == [draft["id"]]
        assert body["meta"]["total"] == 1

    def test_list_rejects_bad_paging(self, client, auth_headers):
        response = client.get("/api/v1/admin/posts?page=0", headers=auth_headers("AUTHOR"))
        assert response.status_code == 400

    def test_update_records_revision(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en", title="One"))

        response = client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"translations": [make_translation("en", title="Two")]},
            headers=auth_headers("AUTHOR"),
        )

        assert response.status_code == 200
        assert response.get_json()["translations"][0]["title"] == "Two"

        revisions = client.get(
            f"/api/v1/admin/posts/{created['id']}/revisions/en",
            headers=auth_headers("EDITOR"),
        ).get_json()["data"]
        assert [r["version"] for r in revisions] == [1]
        assert revisions[0]["data"]["title"] == "One"
        assert revisions[0]["schema_version"] == 1

    def test_update_unknown_field(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))

        response = client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"author_id": "someone-else"},
            headers=auth_headers("AUTHOR"),
        )
        assert response.status_code == 400

    def test_stale_if_unmodified_since(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))
        headers = auth_headers("AUTHOR")
        headers["If-Unmodified-Since"] = "Mon, 01 Jan 2001 00:00:00 GMT"

        response = client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"translations": [make_translation("en", title="Late")]},
            headers=headers,
        )

        assert response.status_code == 409
        assert Revision.query.count() == 0

    def test_fresh_if_unmodified_since(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))
        headers = auth_headers("AUTHOR")
        headers["If-Unmodified-Since"] = created["updated_at"]

        response = client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"translations": [make_translation("en", title="On time")]},
            headers=headers,
        )
        assert response.status_code == 200

    def test_rollback(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en", title="One"))
        client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"translations": [make_translation("en", title="Two")]},
            headers=auth_headers("AUTHOR"),
        )

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/rollback/en/1",
            headers=auth_headers("EDITOR"),
        )

        assert response.status_code == 200
        assert response.get_json()["translations"][0]["title"] == "One"

        missing = client.post(
            f"/api/v1/admin/posts/{created['id']}/rollback/en/99",
            headers=auth_headers("EDITOR"),
        )
        assert missing.status_code == 404

    def test_delete_cascades(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))
        client.patch(
            f"/api/v1/admin/posts/{created['id']}",
            json={"translations": [make_translation("en", title="Edited")]},
            headers=auth_headers("AUTHOR"),
        )

        response = client.delete(
            f"/api/v1/admin/posts/{created['id']}", headers=auth_headers("ADMIN")
        )

        assert response.status_code == 200
        assert Post.query.count() == 0
        assert Revision.query.count() == 0

        again = client.delete(
            f"/api/v1/admin/posts/{created['id']}", headers=auth_headers("ADMIN")
        )
        assert again.status_code == 404


class TestPublication:

    def test_publish_and_schedule(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))
        later = (utcnow() + timedelta(days=1)).replace(microsecond=0)

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/publish",
            json={"publish_at": later.isoformat() + "Z"},
            headers=auth_headers("EDITOR"),
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["status"] == "SCHEDULED"
        assert body["publish_at"] == later.isoformat() + "+00:00"

    def test_publish_bad_timestamp(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/publish",
            json={"publish_at": "next tuesday-ish"},
            headers=auth_headers("EDITOR"),
        )
        assert response.status_code == 400

    def test_unpublish(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR"), make_translation("en"))
        client.post(f"/api/v1/admin/posts/{created['id']}/publish", headers=auth_headers("EDITOR"))

        response = client.post(
            f"/api/v1/admin/posts/{created['id']}/unpublish", headers=auth_headers("EDITOR")
        )

        assert response.get_json()["status"] == "DRAFT"
        assert response.get_json()["publish_at"] is None


class TestPublicRoutes:

    def test_list_and_read_published(self, client, auth_headers, make_translation):
        live = _create(
            client, auth_headers("AUTHOR"),
            make_translation("en", slug="hello"), make_translation("vi", slug="xin-chao"),
        )
        _create(client, auth_headers("AUTHOR"), make_translation("en", slug="draft"))
        client.post(f"/api/v1/admin/posts/{live['id']}/publish", headers=auth_headers("EDITOR"))

        listing = client.get("/api/v1/posts?locale=vi").get_json()
        assert [p["id"] for p in listing["data"]] == [live["id"]]
        assert [t["locale"] for t in listing["data"][0]["translations"]] == ["vi"]
        assert listing["data"][0]["status"] == "PUBLISHED"
        assert "body" not in listing["data"][0]["translations"][0]

        detail = client.get("/api/v1/posts/vi/xin-chao")
        assert detail.status_code == 200
        assert detail.get_json()["current_translation"]["slug"] == "xin-chao"

    def test_draft_is_not_public(self, client, auth_headers, make_translation):
        _create(client, auth_headers("AUTHOR"), make_translation("en", slug="secret"))

        assert client.get("/api/v1/posts/en/secret").status_code == 404
        assert client.get("/api/v1/posts").get_json()["data"] == []

    def test_preview_draft(self, client, auth_headers, make_translation):
        created = _create(
            client, auth_headers("AUTHOR"), make_translation("en"), make_translation("vi")
        )

        issued = client.post(
            f"/api/v1/admin/posts/{created['id']}/preview-token",
            json={"locale": "en"},
            headers=auth_headers("AUTHOR"),
        )
        assert issued.status_code == 201
        token = issued.get_json()["token"]

        response = client.get(f"/api/v1/preview/{token}")

        body = response.get_json()
        assert response.status_code == 200
        assert body["status"] == "DRAFT"
        assert [t["locale"] for t in body["translations"]] == ["en"]

    def test_preview_unknown_token(self, client):
        response = client.get("/api/v1/preview/nope")
        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid or expired preview token"


class TestAuditLogRoute:

    def test_lists_entries_newest_first(self, client, auth_headers, make_translation):
        created = _create(client, auth_headers("AUTHOR", user_id="writer-1"), make_translation("en"))
        client.post(
            f"/api/v1/admin/posts/{created['id']}/publish",
            headers=auth_headers("EDITOR", user_id="editor-9"),
        )

        body = client.get(
            f"/api/v1/admin/audit-logs?entity_id={created['id']}",
            headers=auth_headers("ADMIN"),
        ).get_json()

        assert {e["action"] for e in body["data"]} == {"CREATE", "PUBLISH"}
        assert {e["actor_id"] for e in body["data"]} == {"writer-1", "editor-9"}
        assert body["meta"]["has_more"] is False

    def test_cursor_paging(self, client, auth_headers, make_translation):
        for i in range(3):
            _create(client, auth_headers("AUTHOR"), make_translation("en", slug=f"post-{i}"))

        first = client.get(
            "/api/v1/admin/audit-logs?limit=2", headers=auth_headers("ADMIN")
        ).get_json()
        assert len(first["data"]) == 2
        assert first["meta"]["has_more"] is True

        second = client.get(
            "/api/v1/admin/audit-logs",
            query_string={"limit": 2, "cursor": first["meta"]["next_cursor"]},
            headers=auth_headers("ADMIN"),
        ).get_json()
        assert len(second["data"]) == 1
        assert second["meta"]["has_more"] is False

        ids = {e["id"] for e in first["data"]} | {e["id"] for e in second["data"]}
        assert len(ids) == 3


class TestPromoteCommand:

    def test_promotes_due_posts(self, app, make_post):
        post = make_post()
        post_id = post.id
        post_service.publish_post(
            post_id=post_id,
            actor_id="editor-1",
            publish_at=utcnow() - timedelta(minutes=5),
            now=utcnow() - timedelta(hours=1),
        )
        assert db.session.get(Post, post_id).status == "SCHEDULED"

        result = app.test_cli_runner().invoke(args=["promote-scheduled"])

        assert "Promoted 1 scheduled post(s)" in result.output
        assert AuditLog.query.filter_by(action="PUBLISH", entity_id="*").count() == 1
