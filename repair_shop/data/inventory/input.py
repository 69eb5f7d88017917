from enum import Enum

from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase
from sqlalchemy.orm import validates


class InputKind(str, Enum):
    """
    Kind of catalog input.

    Supplies are physical parts whose on-hand quantity is reserved and
    released by orders. Services are labor; their quantity is not stock.
    """
    SUPPLIE = "supplie"
    SERVICE = "service"

    @property
    def tracks_stock(self) -> bool:
        return self is not InputKind.SERVICE


class Input(TimestampedBase):
    """Catalog entry for a part or a service that can be attached to orders"""
    __tablename__ = 'inputs'

    name = db.Column(db.String(200), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)  # on-hand stock for supplies
    input_type = db.Column(db.String(20), nullable=False, default=InputKind.SUPPLIE.value)

    __table_args__ = (
        db.CheckConstraint('quantity >= 0', name='ck_inputs_quantity_non_negative'),
    )

    def __repr__(self):
        return f'<Input {self.id}: {self.name} ({self.input_type}) Qty:{self.quantity}>'

    @validates('input_type')
    def _validate_input_type(self, key, value):
        return InputKind(value).value

    @property
    def kind(self) -> InputKind:
        return InputKind(self.input_type)

    @property
    def tracks_stock(self) -> bool:
        return self.kind.tracks_stock
