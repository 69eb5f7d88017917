from repair_shop.data.repositories.base_repository import BaseRepository
from repair_shop.data.repositories.customer_repository import CustomerRepository, VehicleRepository
from repair_shop.data.repositories.order_repository import OrderRepository
from repair_shop.data.repositories.input_repository import InputRepository
from repair_shop.data.repositories.order_input_repository import OrderInputRepository
from repair_shop.data.repositories.order_status_history_repository import OrderStatusHistoryRepository

__all__ = [
    'BaseRepository',
    'CustomerRepository',
    'VehicleRepository',
    'OrderRepository',
    'InputRepository',
    'OrderInputRepository',
    'OrderStatusHistoryRepository',
]
