from flask import current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from blogcms.extensions import db
from . import v1_bp


@v1_bp.route("/health", methods=["GET"])
def health_check():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        current_app.logger.exception("Health check could not reach the database")
        database = "unavailable"

    body = {
        "status": "ok" if database == "ok" else "degraded",
        "service": "blog-content",
        "database": database,
        "locales": current_app.config["SUPPORTED_LOCALES"],
    }
    return jsonify(body), 200 if database == "ok" else 503
