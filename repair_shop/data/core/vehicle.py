from repair_shop import db
from repair_shop.data.core.timestamped_base import TimestampedBase


class Vehicle(TimestampedBase):
    __tablename__ = 'vehicles'

    customer_id = db.Column(db.Integer, db.ForeignKey('customers.id'), nullable=False)
    model = db.Column(db.String(100), nullable=False)
    brand = db.Column(db.String(100), nullable=False)
    release_year = db.Column(db.Integer, nullable=False)
    vehicle_identification_number = db.Column(db.String(17), nullable=False)
    number_plate = db.Column(db.String(10), unique=True, nullable=False)
    color = db.Column(db.String(30), nullable=False)

    # Relationships
    customer = db.relationship('Customer', back_populates='vehicles')

    def __repr__(self):
        return f'<Vehicle {self.number_plate}: {self.brand} {self.model}>'

    def belongs_to(self, customer_id) -> bool:
        return self.customer_id == customer_id
