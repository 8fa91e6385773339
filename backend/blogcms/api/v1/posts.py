# blogcms/api/v1/posts.py
from flask import current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from blogcms.application import posts as post_service
from blogcms.domain.exceptions import InvalidArgumentError
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.normalizers.post import normalize_post
from blogcms.normalizers.revision import normalize_revision
from blogcms.utils.clock import isoformat, parse_timestamp
from blogcms.utils.decorators import roles_required
from blogcms.utils.optimistic_lock import expected_version_from_request
from blogcms.utils.pagination import clamp_page_args
from . import v1_bp


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidArgumentError("Request body must be a JSON object")
    return data


# ------------------------
# Posts
# ------------------------

@v1_bp.route("/admin/posts", methods=["POST"])
@jwt_required()
@roles_required("AUTHOR")
def create_post():
    post = post_service.create_post(
        author_id=get_jwt_identity(),
        data=_json_body(),
    )
    return jsonify(normalize_post(post, admin=True)), 201


@v1_bp.route("/admin/posts", methods=["GET"])
@jwt_required()
@roles_required("AUTHOR")
def list_posts():
    page, limit = clamp_page_args(
        request.args.get("page"),
        request.args.get("limit"),
        default_limit=20,
        max_limit=current_app.config["ADMIN_PAGE_LIMIT_MAX"],
    )

    items, meta = post_service.list_posts_admin(
        page=page,
        limit=limit,
        status=request.args.get("status"),
        search=request.args.get("search"),
        category_id=request.args.get("category_id"),
        tag_id=request.args.get("tag_id"),
        author_id=request.args.get("author_id"),
    )

    return jsonify(
        normalize_pagination(items, lambda p: normalize_post(p, admin=True), page=meta)
    )


@v1_bp.route("/admin/posts/<post_id>", methods=["GET"])
@jwt_required()
@roles_required("AUTHOR")
def get_post(post_id):
    post = post_service.get_post_admin(post_id)
    return jsonify(normalize_post(post, admin=True))


@v1_bp.route("/admin/posts/<post_id>", methods=["PATCH"])
@jwt_required()
@roles_required("AUTHOR")
def update_post(post_id):
    post = post_service.update_post(
        post_id=post_id,
        actor_id=get_jwt_identity(),
        data=_json_body(),
        expected_updated_at=expected_version_from_request(),
    )
    return jsonify(normalize_post(post, admin=True)), 200


@v1_bp.route("/admin/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@roles_required("ADMIN")
def delete_post(post_id):
    post_service.delete_post(post_id=post_id, actor_id=get_jwt_identity())
    return jsonify({"success": True}), 200


# ------------------------
# Publication
# ------------------------

@v1_bp.route("/admin/posts/<post_id>/publish", methods=["POST"])
@jwt_required()
@roles_required("EDITOR")
def publish_post(post_id):
    data = _json_body()

    try:
        publish_at = parse_timestamp(data.get("publish_at"))
    except ValueError as exc:
        raise InvalidArgumentError(str(exc), details={"field": "publish_at"})

    post = post_service.publish_post(
        post_id=post_id,
        actor_id=get_jwt_identity(),
        publish_at=publish_at,
    )
    return jsonify(normalize_post(post, admin=True)), 200


@v1_bp.route("/admin/posts/<post_id>/unpublish", methods=["POST"])
@jwt_required()
@roles_required("EDITOR")
def unpublish_post(post_id):
    post = post_service.unpublish_post(post_id=post_id, actor_id=get_jwt_identity())
    return jsonify(normalize_post(post, admin=True)), 200


# ------------------------
# Revisions
# ------------------------

@v1_bp.route("/admin/posts/<post_id>/revisions/<locale>", methods=["GET"])
@jwt_required()
@roles_required("EDITOR")
def list_revisions(post_id, locale):
    revisions = post_service.list_revisions(post_id=post_id, locale=locale)
    return jsonify({"data": [normalize_revision(r) for r in revisions]})


@v1_bp.route("/admin/posts/<post_id>/rollback/<locale>/<int:version>", methods=["POST"])
@jwt_required()
@roles_required("EDITOR")
def rollback_post(post_id, locale, version):
    post = post_service.rollback_post(
        post_id=post_id,
        locale=locale,
        version=version,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_post(post, admin=True)), 200


# ------------------------
# Preview
# ------------------------

@v1_bp.route("/admin/posts/<post_id>/preview-token", methods=["POST"])
@jwt_required()
@roles_required("AUTHOR")
def issue_preview_token(post_id):
    data = _json_body()

    issued = post_service.issue_preview_token(
        post_id=post_id,
        actor_id=get_jwt_identity(),
        locale=data.get("locale"),
    )
    issued["expires_at"] = isoformat(issued["expires_at"])

    return jsonify(issued), 201
