from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required

from blogcms.models.audit_log import AuditLog
from blogcms.normalizers.audit import normalize_audit_log
from blogcms.normalizers.pagination import normalize_pagination
from blogcms.utils.decorators import roles_required
from blogcms.utils.pagination import clamp_page_args, paginate_cursor
from . import v1_bp


@v1_bp.route("/admin/audit-logs", methods=["GET"])
@jwt_required()
@roles_required("ADMIN")
def list_audit_logs():
    _, limit = clamp_page_args(
        None,
        request.args.get("limit"),
        default_limit=50,
        max_limit=current_app.config["ADMIN_PAGE_LIMIT_MAX"],
    )

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    if actor_id := request.args.get("actor_id"):
        query = query.filter(AuditLog.actor_id == actor_id)

    logs, cursor = paginate_cursor(
        query,
        model=AuditLog,
        cursor=request.args.get("cursor"),
        limit=limit,
    )

    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=cursor)), 200
