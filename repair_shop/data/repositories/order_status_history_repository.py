from typing import List, Optional

from repair_shop.data.orders.order_status_history import OrderStatusHistory
from repair_shop.data.repositories.base_repository import BaseRepository


class OrderStatusHistoryRepository(BaseRepository[OrderStatusHistory]):
    model = OrderStatusHistory

    def find_by_order_id(self, order_id) -> List[OrderStatusHistory]:
        """All intervals of an order, oldest first"""
        return (
            self._query()
            .filter_by(order_id=order_id)
            .order_by(OrderStatusHistory.started_at, OrderStatusHistory.id)
            .all()
        )

    def find_current_by_order_id(self, order_id, for_update: bool = False) -> Optional[OrderStatusHistory]:
        """The open interval (ended_at IS NULL) of an order, if any"""
        return (
            self._query(for_update)
            .filter(OrderStatusHistory.order_id == order_id, OrderStatusHistory.ended_at.is_(None))
            .first()
        )
