"""
Tests for the primitive stock mutators
"""
import pytest
from sqlalchemy import update

from repair_shop import db
from repair_shop.business.core.errors import InputNotFoundError, InsufficientStockError, OrderValidationError
from repair_shop.business.inventory.stock_manager import StockManager
from repair_shop.data.inventory.input import Input
from repair_shop.data.repositories import InputRepository


def test_decrease_quantity_reduces_stock(make_input, reload):
    part = make_input(quantity=10)

    StockManager().decrease_quantity(part.id, 4)

    assert reload(Input, part.id).quantity == 6


def test_decrease_quantity_to_exactly_zero(make_input, reload):
    part = make_input(quantity=3)

    StockManager().decrease_quantity(part.id, 3)

    assert reload(Input, part.id).quantity == 0


def test_decrease_quantity_rejects_more_than_on_hand(make_input, reload):
    part = make_input(quantity=2)

    with pytest.raises(InsufficientStockError) as exc_info:
        StockManager().decrease_quantity(part.id, 5)

    assert str(exc_info.value) == "insufficient quantity"
    assert reload(Input, part.id).quantity == 2


@pytest.mark.parametrize("amount", [0, -3])
def test_decrease_quantity_rejects_non_positive_amount(make_input, amount):
    part = make_input()

    with pytest.raises(OrderValidationError, match="quantity to decrease must be greater than zero"):
        StockManager().decrease_quantity(part.id, amount)


def test_decrease_quantity_unknown_input(db):
    with pytest.raises(InputNotFoundError, match="input not found"):
        StockManager().decrease_quantity(999, 1)


def test_increase_quantity_has_no_upper_bound(make_input, reload):
    part = make_input(quantity=10)

    StockManager().increase_quantity(part.id, 1000)

    assert reload(Input, part.id).quantity == 1010


@pytest.mark.parametrize("amount", [0, -1])
def test_increase_quantity_rejects_non_positive_amount(make_input, reload, amount):
    part = make_input(quantity=10)

    with pytest.raises(OrderValidationError, match="quantity to increase must be greater than zero"):
        StockManager().increase_quantity(part.id, amount)

    assert reload(Input, part.id).quantity == 10


def test_increase_quantity_unknown_input(db):
    with pytest.raises(InputNotFoundError):
        StockManager().increase_quantity(42, 1)


class ConcurrentWriterInputRepository(InputRepository):
    """Simulates another worker consuming stock right after our locked read"""

    def __init__(self, remaining):
        self.remaining = remaining

    def find_by_id(self, record_id, for_update=False):
        stock_input = super().find_by_id(record_id, for_update)
        if stock_input is not None and for_update:
            db.session.execute(
                update(Input)
                .where(Input.id == record_id)
                .values(quantity=self.remaining)
                .execution_options(synchronize_session=False)
            )
        return stock_input


def test_guarded_update_refuses_stale_read(make_input, reload):
    """The write re-checks stock, so a stale read can never drive it negative"""
    part = make_input(quantity=10)
    manager = StockManager(ConcurrentWriterInputRepository(remaining=1))

    with pytest.raises(InsufficientStockError):
        manager.decrease_quantity(part.id, 5)

    assert reload(Input, part.id).quantity == 10, "Failed decrement must roll back the whole transaction"
