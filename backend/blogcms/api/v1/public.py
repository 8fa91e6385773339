# blogcms/api/v1/public.py
from flask import current_app, jsonify, request

from blogcms.application import posts as post_service
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.normalizers.post import normalize_post
from blogcms.normalizers.translation import normalize_translation
from blogcms.utils.pagination import clamp_page_args
from . import v1_bp


@v1_bp.route("/posts", methods=["GET"])
def list_published_posts():
    page, limit = clamp_page_args(
        request.args.get("page"),
        request.args.get("limit"),
        default_limit=10,
        max_limit=current_app.config["PUBLIC_PAGE_LIMIT_MAX"],
    )
    locale = request.args.get("locale")

    items, meta = post_service.list_published_posts(
        page=page,
        limit=limit,
        locale=locale,
        category_id=request.args.get("category_id"),
        tag_id=request.args.get("tag_id"),
        search=request.args.get("search"),
    )

    return jsonify(
        normalize_pagination(
            items,
            lambda p: normalize_post(p, admin=False, locale=locale),
            page=meta,
        )
    )


@v1_bp.route("/posts/<locale>/<slug>", methods=["GET"])
def get_published_post(locale, slug):
    post, translation = post_service.get_published_by_slug(locale=locale, slug=slug)

    data = normalize_post(post, admin=False)
    data["current_translation"] = normalize_translation(translation)

    return jsonify(data)


@v1_bp.route("/preview/<token>", methods=["GET"])
def get_preview(token):
    # Possession of the token is the only check; publication status is ignored
    post, locale = post_service.resolve_preview_token(token)
    return jsonify(normalize_post(post, admin=True, locale=locale))
