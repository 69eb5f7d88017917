"""
Pytest configuration and fixtures for the order fulfillment tests
"""
import os

# Console logging only while testing
os.environ.setdefault('LOG_DIR', '')

from datetime import datetime, timedelta

import pytest

from repair_shop import create_app
from repair_shop import db as _db
from repair_shop.build import build_database
from repair_shop.data.core.customer import Customer
from repair_shop.data.core.vehicle import Vehicle
from repair_shop.data.inventory.input import Input
from repair_shop.data.orders.order import Order


class FrozenClock:
    """Callable clock for StatusTimeline that only moves when told to"""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 3, 1, 8, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(scope='session')
def app():
    """Create application bound to an in-memory SQLite database"""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    })

    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def db(app):
    """Fresh tables for every test"""
    build_database()
    yield _db
    _db.session.remove()
    _db.drop_all()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def customer(db):
    return Customer.create_from_dict({
        'name': 'Maria Souza',
        'document_number': '12345678900',
        'customer_type': 'individual',
    })


@pytest.fixture
def vehicle(db, customer):
    return Vehicle.create_from_dict({
        'customer_id': customer.id,
        'model': 'Onix',
        'brand': 'Chevrolet',
        'release_year': 2020,
        'vehicle_identification_number': '9BGKS48U0LG123456',
        'number_plate': 'ABC1D23',
        'color': 'Silver',
    })


@pytest.fixture
def order(db, customer, vehicle):
    """An order row without any status history"""
    return Order.create_from_dict({
        'customer_id': customer.id,
        'vehicle_id': vehicle.id,
        'status': 'Received',
    })


@pytest.fixture
def make_input(db):
    """Factory for catalog inputs; defaults to a stocked supply"""
    counter = {'n': 0}

    def _make_input(**overrides):
        counter['n'] += 1
        data = {
            'name': f'Input {counter["n"]}',
            'price': 5.0,
            'quantity': 10,
            'input_type': 'supplie',
        }
        data.update(overrides)
        return Input.create_from_dict(data)

    return _make_input


@pytest.fixture
def reload(db):
    """Read a row straight from the database, bypassing the identity map"""

    def _reload(model, record_id):
        db.session.expire_all()
        return db.session.get(model, record_id)

    return _reload
