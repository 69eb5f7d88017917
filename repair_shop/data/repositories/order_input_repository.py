from typing import List, Optional

from repair_shop.data.orders.order_input import OrderInput
from repair_shop.data.repositories.base_repository import BaseRepository


class OrderInputRepository(BaseRepository[OrderInput]):
    model = OrderInput

    def find_by_order_id(self, order_id) -> List[OrderInput]:
        return self._query().filter_by(order_id=order_id).order_by(OrderInput.id).all()

    def find_by_order_id_and_input_id(self, order_id, input_id, for_update: bool = False) -> Optional[OrderInput]:
        return self._query(for_update).filter_by(order_id=order_id, input_id=input_id).first()
