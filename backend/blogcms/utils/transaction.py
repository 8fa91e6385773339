from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from blogcms.extensions import db
from blogcms.domain.exceptions import ConflictError, InternalError


@contextmanager
def transactional():
    """
    Context manager for database transactions.

    Commits on success; on any failure rolls back everything written in the
    block. Unique-constraint violations surface as ConflictError, other
    store failures as InternalError.
    """
    try:
        yield
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ConflictError("The change conflicts with existing content") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise InternalError("Content store transaction failed") from exc
    except Exception:
        db.session.rollback()
        raise
