# blogcms/normalizers/audit.py
from typing import Any, Dict

from blogcms.models.audit_log import AuditLog
from blogcms.utils.clock import isoformat


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """
    AuditLog row as API JSON.

    entity_id is "*" for batch entries such as scheduled-post promotion.
    """
    return {
        "id": log.id,
        "action": log.action,
        "actor_id": log.actor_id,
        "entity": {"type": log.entity_type, "id": log.entity_id},
        "payload": log.payload or {},
        "created_at": isoformat(log.created_at),
    }
