from typing import Optional

from flask import current_app, g
from sqlalchemy.exc import SQLAlchemyError

from blogcms.extensions import db
from blogcms.models.audit_log import AuditLog


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    actor_id: Optional[str] = None,
    payload: dict | None = None
) -> None:
    """
    Record an audit entry; a failing audit insert never fails the caller.

    The insert runs inside a SAVEPOINT so a failing audit write is rolled
    back on its own and the surrounding unit of work carries on. The
    caller's pending writes are flushed first, outside the SAVEPOINT, so
    their failures propagate to the caller.
    """
    db.session.flush()

    if actor_id is None:
        actor_id = getattr(g, "current_actor_id", None)

    log = AuditLog()
    log.actor_id = actor_id
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id
    log.payload = payload or {}

    try:
        with db.session.begin_nested():
            db.session.add(log)
    except SQLAlchemyError:
        current_app.logger.exception(
            "Audit write failed: action=%s entity=%s:%s", action, entity_type, entity_id
        )
