"""
Transaction boundary for compound order operations.

Each public operation that reads, checks and writes runs inside ``atomic``.
Nested blocks join the outermost one, which alone commits or rolls back, so a
reservation and the stock decrement it triggers form a single unit.
"""

from contextlib import contextmanager

from repair_shop import db
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.core.transaction")

_DEPTH_KEY = "repair_shop.atomic_depth"


def in_transaction() -> bool:
    """True while an ``atomic`` block is active on the current session."""
    return db.session.info.get(_DEPTH_KEY, 0) > 0


@contextmanager
def atomic(operation: str):
    """
    Run the enclosed block as one database transaction.

    Args:
        operation: Name of the operation, used in log records

    Yields:
        The scoped session

    Raises:
        Whatever the block raised, after the outermost block rolled back
    """
    session = db.session
    depth = session.info.get(_DEPTH_KEY, 0)
    session.info[_DEPTH_KEY] = depth + 1
    try:
        yield session
        if depth == 0:
            session.commit()
            logger.debug("Transaction committed", extra=log_context(operation=operation))
    except Exception as e:
        if depth == 0:
            session.rollback()
            logger.error(
                "Transaction rolled back",
                extra=log_context(operation=operation, error=str(e), error_type=type(e).__name__),
            )
        raise
    finally:
        session.info[_DEPTH_KEY] = depth
