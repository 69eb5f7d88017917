from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase


class OrderInput(TimestampedBase):
    """
    Line item attaching an input to an order.

    ``unit_price`` is the catalog price sampled when the line was first
    created; ``total_price`` always equals ``quantity * unit_price``.
    """
    __tablename__ = 'order_inputs'

    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    input_id = db.Column(db.Integer, db.ForeignKey('inputs.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)

    # One line per (order, input); repeated attachments aggregate into it
    __table_args__ = (
        db.UniqueConstraint('order_id', 'input_id', name='uix_order_input'),
    )

    # Relationships
    order = db.relationship('Order', back_populates='order_inputs')
    input = db.relationship('Input')

    def __repr__(self):
        return f'<OrderInput Order:{self.order_id} Input:{self.input_id} Qty:{self.quantity}>'

    def set_quantity(self, quantity: int) -> None:
        """Set quantity and recompute the total from the snapshot unit price"""
        self.quantity = quantity
        self.total_price = self.line_total(quantity, self.unit_price)

    @staticmethod
    def line_total(quantity: int, unit_price: float) -> float:
        return quantity * unit_price
