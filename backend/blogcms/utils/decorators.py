from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, verify_jwt_in_request

# Role hierarchy: ADMIN > EDITOR > AUTHOR
ROLE_LEVELS = {
    "ADMIN": 3,
    "EDITOR": 2,
    "AUTHOR": 1,
}


def roles_required(*allowed_roles):
    """
    Require a JWT whose ``role`` claim is at least the lowest of
    ``allowed_roles`` in the role hierarchy.
    """
    min_level = min(ROLE_LEVELS[role] for role in allowed_roles)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            role = get_jwt().get("role")

            if ROLE_LEVELS.get(role, 0) < min_level:
                return jsonify({
                    "error": "Forbidden",
                    "message": "Insufficient permissions",
                }), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator
