from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from blogcms.domain.exceptions import DomainError


def _error_response(code, message, status_code, details=None):
    body = {"error": code, "message": message}
    if details:
        body["details"] = details
    response = jsonify(body)
    response.status_code = status_code
    return response


def register_error_handlers(app):
    @app.errorhandler(DomainError)
    def handle_domain_error(error):
        if error.status_code >= 500:
            app.logger.error("Internal error: %s", error.message)
        return _error_response(
            error.code, error.message, error.status_code, error.details
        )

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        app.logger.exception("Store failure: %s", error)
        return _error_response("Internal", "Internal server error", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return _error_response(
            error.name.replace(" ", ""), error.description, error.code
        )
