# blogcms/normalizers/revision.py
from __future__ import annotations

from typing import Any, Dict

from blogcms.utils.clock import isoformat


def normalize_revision(revision) -> Dict[str, Any]:
    """
    Normalizes a Revision into API-safe JSON.

    Notes:
    - data is the stored snapshot as-is, tagged with its schema_version
    """
    return {
        "id": revision.id,
        "post_id": revision.post_id,
        "locale": revision.locale,
        "version": revision.version,
        "schema_version": revision.schema_version,
        "created_by": revision.created_by,
        "created_at": isoformat(revision.created_at),
        "data": revision.data,
    }
