from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase
from sqlalchemy import Index, text


class OrderStatusHistory(TimestampedBase):
    """
    One interval of an order's life spent in a single status.

    A row is open while ``ended_at`` is NULL. It is closed exactly once, when
    the order moves to its next status, and is never modified afterwards.
    At most one open row exists per order (enforced by a partial unique index).
    """
    __tablename__ = 'order_status_history'

    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    status = db.Column(db.String(30), nullable=False)
    started_at = db.Column(db.DateTime, nullable=False)
    ended_at = db.Column(db.DateTime, nullable=True)
    duration_minutes = db.Column(db.Integer, nullable=True)

    # Relationships
    order = db.relationship('Order', back_populates='status_history')

    __table_args__ = (
        Index('idx_order_status_history_order_started', 'order_id', 'started_at'),
        Index(
            'uix_order_status_history_open_interval',
            'order_id',
            unique=True,
            sqlite_where=text('ended_at IS NULL'),
            postgresql_where=text('ended_at IS NULL'),
        ),
    )

    def __repr__(self):
        state = 'open' if self.is_open else f'{self.duration_minutes}min'
        return f'<OrderStatusHistory Order:{self.order_id} {self.status} ({state})>'

    @property
    def is_open(self) -> bool:
        return self.ended_at is None

    @property
    def duration_seconds(self):
        """Whole seconds spent in this status, or None while the interval is open"""
        if self.ended_at is None:
            return None
        return int((self.ended_at - self.started_at).total_seconds())
