from repair_shop.data.orders.order import Order
from repair_shop.data.repositories.base_repository import BaseRepository


class OrderRepository(BaseRepository[Order]):
    model = Order
