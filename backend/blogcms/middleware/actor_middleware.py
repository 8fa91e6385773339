from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


def actor_middleware(app):
    @app.before_request
    def load_actor():
        """
        Attach the acting principal id, when a valid token is present, to the
        request context. log_action falls back to it when no actor is passed.
        """
        g.current_actor_id = None

        try:
            verify_jwt_in_request(optional=True)
        except (JWTExtendedException, PyJWTError):
            return None

        identity = get_jwt_identity()
        if identity is not None:
            g.current_actor_id = str(identity)
