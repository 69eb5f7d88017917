"""
Status timeline for orders.

Keeps the append-only history of status intervals of each order and derives
the per-status durations used for turnaround reporting.

Lifecycle of a history row:
    open (ended_at is NULL) -> closed (ended_at and duration_minutes set)
A row is closed only by the next transition, which opens a new row in the
same transaction, so an order always has exactly one open row once its
first status is set.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from repair_shop.business.core.errors import OrderNotFoundError, OrderValidationError
from repair_shop.business.core.transaction import atomic
from repair_shop.data.core.timestamped_base import utcnow
from repair_shop.data.orders.order_status import OrderStatus
from repair_shop.data.orders.order_status_history import OrderStatusHistory
from repair_shop.data.repositories import OrderRepository, OrderStatusHistoryRepository
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.orders.status_timeline")

ZERO_DURATION = "00:00:00"


def format_duration(seconds: int) -> str:
    """
    Format whole seconds as HH:MM:SS.

    Hours are not wrapped at 24, so 90000 seconds is "25:00:00".
    Zero and negative durations format as "00:00:00".
    """
    if seconds <= 0:
        return ZERO_DURATION
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class StatusTimeline:
    """
    Owns the status interval history of orders.

    Args:
        history: Storage for status intervals
        orders: Storage for orders, used to lock the order row per transition
        clock: Callable returning the current naive UTC datetime
    """

    def __init__(
        self,
        history: OrderStatusHistoryRepository | None = None,
        orders: OrderRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.history = history or OrderStatusHistoryRepository()
        self.orders = orders or OrderRepository()
        self.clock = clock or utcnow

    def open_initial_status(self, order_id: int, status: str) -> OrderStatusHistory:
        """Open the first interval of a freshly created order"""
        with atomic("open_initial_status"):
            return self._open_interval(order_id, status)

    def transition_status(self, order_id: int, new_status: str) -> OrderStatusHistory:
        """
        Close the order's open interval and open one for ``new_status``.

        ``Order.status`` is set to ``new_status`` in the same transaction, so
        the cached status always names the open interval.

        An order without an open interval is tolerated: nothing is closed and
        the new interval is opened.

        Returns:
            OrderStatusHistory: The newly opened interval

        Raises:
            OrderValidationError: new_status is not a known order status
            OrderNotFoundError: the order does not exist
            SQLAlchemyError: storage failure; nothing is persisted
        """
        logger.info("Managing order status history",
                    extra=log_context(order_id=order_id, new_status=new_status))

        if not OrderStatus.is_valid(new_status):
            logger.error("Invalid order status",
                         extra=log_context(new_status=new_status, valid_statuses=list(OrderStatus.ALL)))
            raise OrderValidationError("invalid order status")

        with atomic("transition_status"):
            # Serializes transitions of the same order
            order = self.orders.find_by_id(order_id, for_update=True)
            if order is None:
                logger.error("Order not found", extra=log_context(order_id=order_id))
                raise OrderNotFoundError()

            self._close_current_interval(order_id)
            opened = self._open_interval(order_id, new_status)

            if order.status != new_status:
                order.status = new_status
                self.orders.update(order)

        logger.info("Order status history updated successfully",
                    extra=log_context(order_id=order_id, new_status=new_status,
                                      is_final_status=OrderStatus.is_final(new_status)))
        return opened

    def _close_current_interval(self, order_id: int) -> Optional[OrderStatusHistory]:
        current = self.history.find_current_by_order_id(order_id, for_update=True)
        if current is None:
            logger.info("No current status found, this is normal for first status change",
                        extra=log_context(order_id=order_id))
            return None

        logger.info("Current status found",
                    extra=log_context(order_id=order_id, status=current.status, started_at=current.started_at))

        now = self.clock()
        elapsed_seconds = (now - current.started_at).total_seconds()
        current.ended_at = now
        current.duration_minutes = max(0, int(elapsed_seconds // 60))
        self.history.update(current)

        logger.info("Current status finalized",
                    extra=log_context(order_id=order_id, status=current.status, started_at=current.started_at,
                                      ended_at=now, duration_minutes=current.duration_minutes))
        return current

    def _open_interval(self, order_id: int, status: str) -> OrderStatusHistory:
        now = self.clock()
        interval = OrderStatusHistory(order_id=order_id, status=status, started_at=now)
        self.history.create(interval)
        logger.info("New status started",
                    extra=log_context(order_id=order_id, status=status, started_at=now))
        return interval

    def compute_timeline(self, order_id: int) -> Tuple[Dict[str, str], str]:
        """
        Per-status durations and the average duration of closed intervals.

        This is a best-effort read: a storage failure is logged and yields an
        empty timeline with a zero average instead of an error.

        Returns:
            tuple: ({status: "HH:MM:SS"}, average "HH:MM:SS"); open intervals
            report "00:00:00"
        """
        try:
            history = self.history.find_by_order_id(order_id)
        except SQLAlchemyError as e:
            logger.error("Error fetching order status history",
                         extra=log_context(order_id=order_id, error=str(e)))
            return {}, ZERO_DURATION

        logger.info("Found order status history",
                    extra=log_context(order_id=order_id, history_count=len(history)))

        timeline: Dict[str, str] = {}
        total_seconds = 0
        closed_intervals = 0

        for interval in history:
            seconds = interval.duration_seconds
            if seconds is None:
                timeline[interval.status] = ZERO_DURATION
                logger.debug("Status not completed yet",
                             extra=log_context(status=interval.status, started_at=interval.started_at))
                continue

            timeline[interval.status] = format_duration(seconds)
            total_seconds += seconds
            closed_intervals += 1
            logger.debug("Status duration calculated",
                         extra=log_context(status=interval.status, duration_seconds=seconds))

        average = format_duration(total_seconds // closed_intervals) if closed_intervals else ZERO_DURATION

        logger.info("Timeline calculated",
                    extra=log_context(order_id=order_id, total_seconds=total_seconds,
                                      completed_statuses=closed_intervals, average_time=average))
        return timeline, average
