from __future__ import annotations

from repair_shop.business.core.errors import (
    CustomerNotFoundError,
    OrderValidationError,
    VehicleNotFoundError,
    VehicleOwnershipError,
)
from repair_shop.business.core.transaction import atomic
from repair_shop.business.orders.status_timeline import StatusTimeline
from repair_shop.data.orders.order import Order
from repair_shop.data.orders.order_status import OrderStatus
from repair_shop.data.repositories import CustomerRepository, OrderRepository, VehicleRepository
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.orders.order_factory")


class OrderFactory:
    """Creates orders and opens their first status interval"""

    def __init__(
        self,
        orders: OrderRepository | None = None,
        customers: CustomerRepository | None = None,
        vehicles: VehicleRepository | None = None,
        timeline: StatusTimeline | None = None,
    ):
        self.orders = orders or OrderRepository()
        self.customers = customers or CustomerRepository()
        self.vehicles = vehicles or VehicleRepository()
        self.timeline = timeline or StatusTimeline(orders=self.orders)

    def create_order(self, customer_id: int, vehicle_id: int, status: str = OrderStatus.INITIAL) -> Order:
        """
        Create an order for a customer's vehicle.

        Args:
            customer_id: Owner of the vehicle
            vehicle_id: Vehicle being serviced
            status: Initial status, "Received" unless the intake says otherwise

        Returns:
            Order: The persisted order, with its open status interval

        Raises:
            OrderValidationError: unknown status
            CustomerNotFoundError / VehicleNotFoundError: missing records
            VehicleOwnershipError: the vehicle belongs to another customer
        """
        logger.info("Processing order creation",
                    extra=log_context(customer_id=customer_id, vehicle_id=vehicle_id, status=status))

        if not OrderStatus.is_valid(status):
            logger.error("Invalid order status", extra=log_context(status=status))
            raise OrderValidationError("invalid order status")

        with atomic("create_order"):
            if self.customers.find_by_id(customer_id) is None:
                logger.error("Customer not found", extra=log_context(customer_id=customer_id))
                raise CustomerNotFoundError()

            vehicle = self.vehicles.find_by_id(vehicle_id)
            if vehicle is None:
                logger.error("Vehicle not found", extra=log_context(vehicle_id=vehicle_id))
                raise VehicleNotFoundError()

            if not vehicle.belongs_to(customer_id):
                logger.error("Vehicle does not belong to customer",
                             extra=log_context(vehicle_id=vehicle_id, customer_id=customer_id))
                raise VehicleOwnershipError()

            order = Order(customer_id=customer_id, vehicle_id=vehicle_id, status=status)
            self.orders.create(order)
            logger.info("Order created in database", extra=log_context(order_id=order.id))

            self.timeline.open_initial_status(order.id, status)

        logger.info("Status history started successfully",
                    extra=log_context(order_id=order.id, status=status))
        return order
