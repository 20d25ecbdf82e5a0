"""
Scoped transaction for service operations.

Repositories only add, flush and delete. The service opens one
transaction per operation; it is committed when the block exits normally
and rolled back on any exception.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


@contextmanager
def transaction(session: Session, read_only: bool = False) -> Iterator[Session]:
    """
    Run the enclosed block inside a single transaction.

    Args:
        session: Session shared by the repositories of the operation.
        read_only: Roll back instead of committing so reads never write.

    Yields:
        The same session.
    """
    try:
        yield session
        if read_only:
            session.rollback()
        else:
            session.commit()
    except Exception:
        session.rollback()
        logger.debug("Transaction rolled back")
        raise
