from datetime import datetime
from typing import Optional

from flask import request
from werkzeug.http import parse_date

from blogcms.domain.exceptions import ConflictError, InvalidArgumentError
from blogcms.utils.clock import parse_timestamp, to_utc_naive


def expected_version_from_request() -> Optional[datetime]:
    """
    Read the If-Unmodified-Since header, if any, as naive UTC.

    An RFC 7231 HTTP-date names a whole second, so it is widened to the last
    microsecond of that second. ISO-8601 values keep their full precision.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return None  # No optimistic lock requested

    http_ts = parse_date(client_ts)
    if http_ts is not None:
        return to_utc_naive(http_ts).replace(microsecond=999999)

    try:
        return parse_timestamp(client_ts)
    except ValueError:
        raise InvalidArgumentError("Invalid If-Unmodified-Since header")


def enforce_optimistic_lock(entity, expected_updated_at: Optional[datetime]) -> None:
    """
    Reject a write when the entity changed after the client last read it.
    """
    if expected_updated_at is None:
        return

    server_ts = to_utc_naive(entity.updated_at)
    client_ts = to_utc_naive(expected_updated_at)

    if server_ts > client_ts:
        raise ConflictError(
            "Conflict detected. Resource has been modified.",
            details={"updated_at": server_ts.isoformat()},
        )
