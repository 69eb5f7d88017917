from __future__ import annotations

from repair_shop.business.core.errors import OrderNotFoundError, OrderValidationError
from repair_shop.business.core.transaction import atomic
from repair_shop.business.orders.status_timeline import StatusTimeline
from repair_shop.data.orders.order import Order
from repair_shop.data.orders.order_status import OrderStatus
from repair_shop.data.repositories import OrderRepository
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.orders.order_status_manager")


class OrderStatusManager:
    """
    Order status updates.

    The status timeline writes ``Order.status`` and the history interval in
    one transaction, so the cached status always matches the open interval.
    """

    def __init__(self, orders: OrderRepository | None = None, timeline: StatusTimeline | None = None):
        self.orders = orders or OrderRepository()
        self.timeline = timeline or StatusTimeline(orders=self.orders)

    def update_order_status(self, order_id: int, new_status: str) -> Order:
        logger.info("Processing update order status",
                    extra=log_context(order_id=order_id, new_status=new_status))

        if not OrderStatus.is_valid(new_status):
            logger.error("Invalid order status",
                         extra=log_context(new_status=new_status, valid_statuses=list(OrderStatus.ALL)))
            raise OrderValidationError("invalid order status")

        with atomic("update_order_status"):
            order = self.orders.find_by_id(order_id, for_update=True)
            if order is None:
                logger.error("Order not found", extra=log_context(order_id=order_id))
                raise OrderNotFoundError()

            old_status = order.status
            self.timeline.transition_status(order_id, new_status)

        logger.info("Order status updated successfully",
                    extra=log_context(order_id=order_id, old_status=old_status, new_status=new_status))
        return order
