from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for errors surfaced to API callers."""

    code = "Internal"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConflictError(DomainError):
    code = "Conflict"
    status_code = 409


class NotFoundError(DomainError):
    code = "NotFound"
    status_code = 404


class InvalidArgumentError(DomainError):
    code = "InvalidArgument"
    status_code = 400


class InternalError(DomainError):
    code = "Internal"
    status_code = 500


class SlugConflict(ConflictError):
    def __init__(self, locale: str, slug: str):
        super().__init__(
            f'Slug "{slug}" already exists for locale "{locale}"',
            details={"locale": locale, "slug": slug},
        )
        self.locale = locale
        self.slug = slug
