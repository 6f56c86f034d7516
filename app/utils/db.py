from contextlib import contextmanager
import logging
from models import db

logger = logging.getLogger(__name__)


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit the session when the block exits cleanly.

    Any exception rolls back everything flushed inside the block and is
    re-raised so the caller decides how to report it.
    """
    session = db.session
    try:
        yield session
    except Exception:
        logger.exception(message)
        session.rollback()
        raise
    try:
        session.commit()
    except Exception:
        logger.exception("%s (commit)", message)
        session.rollback()
        raise
