from __future__ import annotations

from repair_shop.business.core.errors import (
    InputNotFoundError,
    InsufficientStockError,
    OrderValidationError,
)
from repair_shop.business.core.transaction import atomic
from repair_shop.data.inventory.input import Input
from repair_shop.data.repositories import InputRepository
from repair_shop.logger import get_logger, log_context

logger = get_logger("repair_shop.business.inventory.stock_manager")


class StockManager:
    """
    Primitive stock mutators on the shared input catalog.

    Both operations re-read the input row under a row lock and apply the
    change as a single guarded UPDATE, so concurrent reservations against the
    same input serialize instead of losing updates.
    """

    def __init__(self, inputs: InputRepository | None = None):
        self.inputs = inputs or InputRepository()

    def _fetch_input(self, input_id: int) -> Input:
        stock_input = self.inputs.find_by_id(input_id, for_update=True)
        if stock_input is None:
            logger.error("Input not found", extra=log_context(input_id=input_id))
            raise InputNotFoundError()
        logger.info(
            "Found input",
            extra=log_context(input_id=stock_input.id, name=stock_input.name,
                              current_quantity=stock_input.quantity),
        )
        return stock_input

    def decrease_quantity(self, input_id: int, amount: int) -> Input:
        """
        Remove ``amount`` units from an input's on-hand stock.

        Args:
            input_id: Input to decrement
            amount: Units to remove, must be > 0

        Returns:
            Input: The input with its refreshed quantity

        Raises:
            InputNotFoundError: input does not exist
            OrderValidationError: amount is not positive
            InsufficientStockError: stock on hand is lower than amount
        """
        logger.info("Processing decrease quantity for input",
                    extra=log_context(input_id=input_id, quantity_to_decrease=amount))

        with atomic("decrease_quantity"):
            stock_input = self._fetch_input(input_id)

            if amount <= 0:
                logger.error("Invalid quantity to decrease", extra=log_context(quantity=amount))
                raise OrderValidationError("quantity to decrease must be greater than zero")

            old_quantity = stock_input.quantity
            if old_quantity < amount:
                logger.error(
                    "Insufficient quantity",
                    extra=log_context(input_id=input_id, current_quantity=old_quantity,
                                      quantity_to_decrease=amount),
                )
                raise InsufficientStockError("insufficient quantity")

            if not self.inputs.decrease_stock(stock_input, amount):
                # Another transaction consumed the stock between our read and write
                logger.error(
                    "Insufficient quantity at write time",
                    extra=log_context(input_id=input_id, read_quantity=old_quantity,
                                      quantity_to_decrease=amount),
                )
                raise InsufficientStockError("insufficient quantity")

            logger.info(
                "Input quantity decreased successfully",
                extra=log_context(input_id=input_id, name=stock_input.name,
                                  old_quantity=old_quantity, new_quantity=stock_input.quantity),
            )
            return stock_input

    def increase_quantity(self, input_id: int, amount: int) -> Input:
        """
        Return ``amount`` units to an input's on-hand stock. No upper bound applies.

        Raises:
            InputNotFoundError: input does not exist
            OrderValidationError: amount is not positive
        """
        logger.info("Processing increase quantity for input",
                    extra=log_context(input_id=input_id, quantity_to_increase=amount))

        with atomic("increase_quantity"):
            stock_input = self._fetch_input(input_id)

            if amount <= 0:
                logger.error("Invalid quantity to increase", extra=log_context(quantity=amount))
                raise OrderValidationError("quantity to increase must be greater than zero")

            old_quantity = stock_input.quantity
            if not self.inputs.increase_stock(stock_input, amount):
                logger.error("Input disappeared before increase", extra=log_context(input_id=input_id))
                raise InputNotFoundError()

            logger.info(
                "Input quantity increased successfully",
                extra=log_context(input_id=input_id, name=stock_input.name,
                                  old_quantity=old_quantity, new_quantity=stock_input.quantity),
            )
            return stock_input
