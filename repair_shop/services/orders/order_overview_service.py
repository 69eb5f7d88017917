"""
Order Overview Service
Read-only service assembling everything shown for a single order.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from repair_shop.business.core.errors import OrderNotFoundError, VehicleNotFoundError
from repair_shop.business.orders.status_timeline import StatusTimeline
from repair_shop.data.orders.order_input import OrderInput
from repair_shop.data.repositories import (
    InputRepository,
    OrderInputRepository,
    OrderRepository,
    VehicleRepository,
)
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.services.orders.order_overview")


class OrderOverviewService:
    """
    Service for the order overview read model.

    Provides:
    - the order itself and its vehicle
    - line items with input names and the order total
    - the status timeline and average time per status
    """

    def __init__(
        self,
        orders: OrderRepository | None = None,
        vehicles: VehicleRepository | None = None,
        inputs: InputRepository | None = None,
        order_inputs: OrderInputRepository | None = None,
        timeline: StatusTimeline | None = None,
    ):
        self.orders = orders or OrderRepository()
        self.vehicles = vehicles or VehicleRepository()
        self.inputs = inputs or InputRepository()
        self.order_inputs = order_inputs or OrderInputRepository()
        self.timeline = timeline or StatusTimeline()

    def get_order_overview(self, order_id: int) -> Dict[str, Any]:
        """
        Build the overview of an order.

        Args:
            order_id: Order ID

        Returns:
            Dictionary with order, vehicle, inputs, total_price, timeline and average_time

        Raises:
            OrderNotFoundError / VehicleNotFoundError: missing records
        """
        order = self.orders.find_by_id(order_id)
        if order is None:
            logger.error("Order not found", extra=log_context(order_id=order_id))
            raise OrderNotFoundError()

        vehicle = self.vehicles.find_by_id(order.vehicle_id)
        if vehicle is None:
            logger.error("Vehicle not found", extra=log_context(vehicle_id=order.vehicle_id))
            raise VehicleNotFoundError()

        inputs, total_price = self._line_items(self.order_inputs.find_by_order_id(order_id))
        timeline, average_time = self.timeline.compute_timeline(order_id)

        logger.info(
            "Order overview retrieved",
            extra=log_context(order_id=order_id, inputs_count=len(inputs),
                              timeline_entries=len(timeline), average_time=average_time),
        )
        return {
            'order': order.to_dict(),
            'vehicle': vehicle.to_dict(include_audit_fields=False),
            'inputs': inputs,
            'total_price': total_price,
            'timeline': timeline,
            'average_time': average_time,
        }

    def _line_items(self, lines: List[OrderInput]) -> Tuple[List[Dict[str, Any]], float]:
        items = []
        total_price = 0.0
        for line in lines:
            catalog_input = self.inputs.find_by_id(line.input_id)
            if catalog_input is None:
                logger.error("Input not found for order input",
                             extra=log_context(input_id=line.input_id, order_input_id=line.id))
                continue
            items.append({
                'id': line.id,
                'input_id': line.input_id,
                'input_name': catalog_input.name,
                'quantity': line.quantity,
                'unit_price': line.unit_price,
                'total_price': line.total_price,
            })
            total_price += line.total_price

        logger.info("Calculated total price", extra=log_context(total_price=total_price))
        return items, total_price
