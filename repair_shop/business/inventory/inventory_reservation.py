"""
Inventory reservation for order line items.

Attaching an input to an order reserves stock on the shared catalog and
records (or grows) the order's line item; detaching releases the stock and
shrinks (or deletes) the line item. Services are never stock-checked.

Every public operation validates first and mutates last, inside one
transaction that also holds the order row lock, so concurrent requests on
the same order or the same catalog input serialize.
"""

from __future__ import annotations

from typing import Optional

from repair_shop.business.core.errors import (
    InputNotFoundError,
    InsufficientOrderInputQuantityError,
    InsufficientStockError,
    OrderInputNotFoundError,
    OrderNotFoundError,
    OrderValidationError,
)
from repair_shop.business.core.transaction import atomic
from repair_shop.business.inventory.stock_manager import StockManager
from repair_shop.data.inventory.input import Input
from repair_shop.data.orders.order import Order
from repair_shop.data.orders.order_input import OrderInput
from repair_shop.data.repositories import InputRepository, OrderInputRepository, OrderRepository
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.inventory.inventory_reservation")


class InventoryReservation:
    """
    Owns the mapping from an order to the inputs attached to it and the
    corresponding stock adjustments.
    """

    def __init__(
        self,
        orders: OrderRepository | None = None,
        inputs: InputRepository | None = None,
        order_inputs: OrderInputRepository | None = None,
        stock_manager: StockManager | None = None,
    ):
        self.orders = orders or OrderRepository()
        self.inputs = inputs or InputRepository()
        self.order_inputs = order_inputs or OrderInputRepository()
        self.stock_manager = stock_manager or StockManager(self.inputs)

    # ----- shared lookups -------------------------------------------------

    def _fetch_order(self, order_id: int) -> Order:
        order = self.orders.find_by_id(order_id, for_update=True)
        if order is None:
            logger.error("Order not found", extra=log_context(order_id=order_id))
            raise OrderNotFoundError()
        logger.info("Order found", extra=log_context(order_id=order.id, status=order.status))
        return order

    def _fetch_input(self, input_id: int) -> Input:
        stock_input = self.inputs.find_by_id(input_id)
        if stock_input is None:
            logger.error("Input not found", extra=log_context(input_id=input_id))
            raise InputNotFoundError()
        logger.info(
            "Input found",
            extra=log_context(input_id=stock_input.id, name=stock_input.name,
                              input_type=stock_input.input_type, available_quantity=stock_input.quantity),
        )
        return stock_input

    # ----- validation -----------------------------------------------------

    @staticmethod
    def _validate_quantity(quantity: int, message: str) -> None:
        if quantity <= 0:
            logger.error("Invalid quantity", extra=log_context(quantity=quantity))
            raise OrderValidationError(message)

    @staticmethod
    def _validate_price(stock_input: Input) -> float:
        unit_price = stock_input.price
        if unit_price is None or unit_price <= 0:
            logger.error("Input has invalid price",
                         extra=log_context(input_id=stock_input.id, name=stock_input.name, price=unit_price))
            raise OrderValidationError("input has invalid price")
        logger.info("Input price retrieved",
                    extra=log_context(input_id=stock_input.id, unit_price=unit_price))
        return unit_price

    @staticmethod
    def _validate_availability(stock_input: Input, quantity: int) -> None:
        if not stock_input.tracks_stock:
            logger.info("Input is service type, skipping stock control",
                        extra=log_context(input_id=stock_input.id, name=stock_input.name))
            return
        if stock_input.quantity < quantity:
            logger.error(
                "Insufficient input quantity",
                extra=log_context(input_id=stock_input.id, name=stock_input.name,
                                  requested_quantity=quantity, available_quantity=stock_input.quantity),
            )
            raise InsufficientStockError()

    # ----- stock movements ------------------------------------------------

    def _reserve_stock(self, stock_input: Input, quantity: int) -> None:
        if not stock_input.tracks_stock:
            logger.info("Skipping quantity decrease for service type",
                        extra=log_context(input_id=stock_input.id, name=stock_input.name))
            return
        self.stock_manager.decrease_quantity(stock_input.id, quantity)

    def _release_stock(self, stock_input: Input, quantity: int) -> None:
        if not stock_input.tracks_stock:
            logger.info("Skipping quantity increase for service type",
                        extra=log_context(input_id=stock_input.id, name=stock_input.name))
            return
        self.stock_manager.increase_quantity(stock_input.id, quantity)

    # ----- public operations ----------------------------------------------

    def add_input(self, order_id: int, input_id: int, quantity: int) -> OrderInput:
        """
        Attach ``quantity`` units of an input to an order.

        A second attachment of the same input aggregates into the existing
        line item and keeps its original unit price snapshot.

        Returns:
            OrderInput: The created or updated line item

        Raises:
            OrderValidationError: quantity <= 0 or input price <= 0
            OrderNotFoundError / InputNotFoundError: missing records
            InsufficientStockError: not enough stock for a supply
        """
        logger.info("Processing add input to order",
                    extra=log_context(order_id=order_id, input_id=input_id, quantity=quantity))

        self._validate_quantity(quantity, "quantity must be greater than zero")

        with atomic("add_input"):
            self._fetch_order(order_id)
            stock_input = self._fetch_input(input_id)
            unit_price = self._validate_price(stock_input)
            self._validate_availability(stock_input, quantity)

            logger.info("Validation passed, checking if order input already exists")
            existing = self.order_inputs.find_by_order_id_and_input_id(order_id, input_id, for_update=True)

            if existing is not None:
                return self._aggregate(existing, stock_input, quantity)

            logger.info("No existing order input found, creating new one")
            self._reserve_stock(stock_input, quantity)
            return self._create_line(order_id, input_id, quantity, unit_price)

    def _aggregate(self, existing: OrderInput, stock_input: Input, quantity: int) -> OrderInput:
        old_quantity = existing.quantity
        old_total = existing.total_price
        logger.info(
            "Existing order input found, updating quantity and total price",
            extra=log_context(order_input_id=existing.id, current_quantity=old_quantity,
                              quantity_to_add=quantity, current_total_price=old_total),
        )

        self._reserve_stock(stock_input, quantity)

        existing.set_quantity(old_quantity + quantity)
        self.order_inputs.update(existing)

        logger.info(
            "OrderInput updated successfully",
            extra=log_context(order_input_id=existing.id, old_quantity=old_quantity,
                              new_quantity=existing.quantity, old_total_price=old_total,
                              new_total_price=existing.total_price, unit_price=existing.unit_price),
        )
        return existing

    def _create_line(self, order_id: int, input_id: int, quantity: int, unit_price: float) -> OrderInput:
        line = OrderInput(
            order_id=order_id,
            input_id=input_id,
            quantity=quantity,
            unit_price=unit_price,
            total_price=OrderInput.line_total(quantity, unit_price),
        )
        self.order_inputs.create(line)
        logger.info(
            "OrderInput created successfully",
            extra=log_context(order_input_id=line.id, order_id=order_id, input_id=input_id,
                              quantity=quantity, unit_price=unit_price, total_price=line.total_price),
        )
        return line

    def remove_input(self, order_id: int, input_id: int, quantity_to_remove: int) -> Optional[OrderInput]:
        """
        Detach ``quantity_to_remove`` units of an input from an order.

        Returns:
            OrderInput | None: The updated line item, or None when its
            quantity reached zero and the row was deleted

        Raises:
            OrderValidationError: quantity_to_remove <= 0 or a corrupt line quantity
            OrderNotFoundError / InputNotFoundError / OrderInputNotFoundError: missing records
            InsufficientOrderInputQuantityError: the line holds fewer units
        """
        logger.info("Processing remove input from order",
                    extra=log_context(order_id=order_id, input_id=input_id,
                                      quantity_to_remove=quantity_to_remove))

        self._validate_quantity(quantity_to_remove, "quantity to remove must be greater than zero")

        with atomic("remove_input"):
            self._fetch_order(order_id)
            stock_input = self._fetch_input(input_id)

            line = self.order_inputs.find_by_order_id_and_input_id(order_id, input_id, for_update=True)
            if line is None:
                logger.error("Order input not found", extra=log_context(order_id=order_id, input_id=input_id))
                raise OrderInputNotFoundError()

            if line.quantity <= 0:
                logger.error("Invalid quantity in order input",
                             extra=log_context(order_input_id=line.id, quantity=line.quantity))
                raise OrderValidationError("invalid quantity in order input")

            if line.quantity < quantity_to_remove:
                logger.error(
                    "Insufficient quantity in order input",
                    extra=log_context(order_input_id=line.id, current_quantity=line.quantity,
                                      quantity_to_remove=quantity_to_remove),
                )
                raise InsufficientOrderInputQuantityError()

            logger.info("Validation passed, proceeding with input quantity increase")
            self._release_stock(stock_input, quantity_to_remove)

            old_quantity = line.quantity
            new_quantity = old_quantity - quantity_to_remove

            if new_quantity == 0:
                self.order_inputs.delete(line)
                logger.info(
                    "Order input removed",
                    extra=log_context(order_id=order_id, input_id=input_id, quantity_removed=quantity_to_remove),
                )
                return None

            line.set_quantity(new_quantity)
            self.order_inputs.update(line)
            logger.info(
                "Order input updated successfully",
                extra=log_context(order_input_id=line.id, old_quantity=old_quantity,
                                  new_quantity=new_quantity, new_total_price=line.total_price),
            )
            return line
