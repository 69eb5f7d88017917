from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase


class Customer(TimestampedBase):
    __tablename__ = 'customers'

    name = db.Column(db.String(200), nullable=False)
    document_number = db.Column(db.String(32), nullable=False)
    customer_type = db.Column(db.String(20), nullable=False)  # individual/company

    # Relationships
    vehicles = db.relationship('Vehicle', back_populates='customer', lazy='dynamic')

    def __repr__(self):
        return f'<Customer {self.id}: {self.name}>'
