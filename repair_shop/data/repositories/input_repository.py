from repair_shop import db
from repair_shop.data.inventory.input import Input
from repair_shop.data.repositories.base_repository import BaseRepository
from sqlalchemy import update


class InputRepository(BaseRepository[Input]):
    model = Input

    def decrease_stock(self, stock_input: Input, amount: int) -> bool:
        """
        Subtract ``amount`` from on-hand stock if at least that much remains.

        The check and the write are one UPDATE statement, so two concurrent
        reservations cannot both consume the same units.

        Returns:
            bool: False when the guarded UPDATE matched no row (stock too low)
        """
        result = db.session.execute(
            update(Input)
            .where(Input.id == stock_input.id, Input.quantity >= amount)
            .values(quantity=Input.quantity - amount)
            .execution_options(synchronize_session=False)
        )
        db.session.expire(stock_input, ['quantity', 'updated_at'])
        return result.rowcount == 1

    def increase_stock(self, stock_input: Input, amount: int) -> bool:
        """Add ``amount`` to on-hand stock as a single UPDATE statement"""
        result = db.session.execute(
            update(Input)
            .where(Input.id == stock_input.id)
            .values(quantity=Input.quantity + amount)
            .execution_options(synchronize_session=False)
        )
        db.session.expire(stock_input, ['quantity', 'updated_at'])
        return result.rowcount == 1
