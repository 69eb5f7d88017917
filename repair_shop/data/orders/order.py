from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase
from repair_shop.data.orders.order_status import OrderStatus


class Order(TimestampedBase):
    """
    Repair shop work order.

    ``status`` is a cached projection of the order's open status interval;
    it is only written together with the status history.
    """
    __tablename__ = 'orders'

    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False)
    vehicle_id = db.Column(db.Integer, db.ForeignKey('vehicles.id'), nullable=False)
    status = db.Column(db.String(30), nullable=False, default=OrderStatus.INITIAL)

    # Relationships
    customer = db.relationship('Customer')
    vehicle = db.relationship('Vehicle')
    order_inputs = db.relationship('OrderInput', back_populates='order', lazy='dynamic',
                                   cascade='all, delete-orphan')
    status_history = db.relationship('OrderStatusHistory', back_populates='order', lazy='dynamic',
                                     cascade='all, delete-orphan',
                                     order_by='OrderStatusHistory.started_at')

    def __repr__(self):
        return f'<Order {self.id}: {self.status}>'
