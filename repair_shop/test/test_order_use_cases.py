"""
Tests for order creation, status updates and the order overview
"""
import pytest

from repair_shop.business.core.errors import (
    CustomerNotFoundError,
    OrderNotFoundError,
    OrderValidationError,
    VehicleNotFoundError,
    VehicleOwnershipError,
)
from repair_shop.business.inventory.inventory_reservation import InventoryReservation
from repair_shop.business.orders.order_factory import OrderFactory
from repair_shop.business.orders.order_status_manager import OrderStatusManager
from repair_shop.business.orders.status_timeline import StatusTimeline
from repair_shop.data.core.customer import Customer
from repair_shop.data.orders.order import Order
from repair_shop.data.orders.order_status import OrderStatus
from repair_shop.data.orders.order_status_history import OrderStatusHistory
from repair_shop.services.orders.order_overview_service import OrderOverviewService


def open_intervals(order_id):
    return OrderStatusHistory.query.filter_by(order_id=order_id, ended_at=None).all()


@pytest.fixture
def timeline(db, clock):
    return StatusTimeline(clock=clock)


@pytest.fixture
def factory(timeline):
    return OrderFactory(timeline=timeline)


@pytest.fixture
def status_manager(timeline):
    return OrderStatusManager(timeline=timeline)


def test_create_order_opens_received_interval(factory, customer, vehicle, clock):
    order = factory.create_order(customer.id, vehicle.id)

    assert order.id is not None
    assert order.status == OrderStatus.RECEIVED

    intervals = open_intervals(order.id)
    assert len(intervals) == 1
    assert intervals[0].status == OrderStatus.RECEIVED
    assert intervals[0].started_at == clock()


def test_create_order_with_explicit_status(factory, customer, vehicle):
    order = factory.create_order(customer.id, vehicle.id, status=OrderStatus.UNDERGOING_DIAGNOSIS)

    assert order.status == 'Undergoing diagnosis'
    assert open_intervals(order.id)[0].status == 'Undergoing diagnosis'


def test_create_order_rejects_unknown_status(factory, customer, vehicle):
    with pytest.raises(OrderValidationError, match="invalid order status"):
        factory.create_order(customer.id, vehicle.id, status='Lost')

    assert Order.query.count() == 0


def test_create_order_unknown_customer(factory, vehicle):
    with pytest.raises(CustomerNotFoundError, match="customer not found"):
        factory.create_order(999, vehicle.id)


def test_create_order_unknown_vehicle(factory, customer):
    with pytest.raises(VehicleNotFoundError, match="vehicle not found"):
        factory.create_order(customer.id, 999)


def test_create_order_vehicle_of_another_customer(factory, vehicle):
    stranger = Customer.create_from_dict({
        'name': 'Joao Lima',
        'document_number': '98765432100',
        'customer_type': 'individual',
    })

    with pytest.raises(VehicleOwnershipError, match="vehicle does not belong to customer"):
        factory.create_order(stranger.id, vehicle.id)

    assert Order.query.count() == 0
    assert OrderStatusHistory.query.count() == 0


def test_update_order_status_keeps_cached_status_in_sync(factory, status_manager, customer, vehicle,
                                                           clock, reload):
    order = factory.create_order(customer.id, vehicle.id)

    for status in (OrderStatus.UNDERGOING_DIAGNOSIS, OrderStatus.IN_PROGRESS, OrderStatus.DELIVERED):
        clock.advance(minutes=45)
        status_manager.update_order_status(order.id, status)

        intervals = open_intervals(order.id)
        assert len(intervals) == 1
        assert reload(Order, order.id).status == intervals[0].status == status


def test_update_order_status_rejects_unknown_status(factory, status_manager, customer, vehicle, reload):
    order = factory.create_order(customer.id, vehicle.id)

    with pytest.raises(OrderValidationError, match="invalid order status"):
        status_manager.update_order_status(order.id, 'Unknown')

    assert reload(Order, order.id).status == OrderStatus.RECEIVED
    assert OrderStatusHistory.query.filter_by(order_id=order.id).count() == 1


def test_update_order_status_unknown_order(status_manager):
    with pytest.raises(OrderNotFoundError, match="order not found"):
        status_manager.update_order_status(999, OrderStatus.COMPLETED)


def test_order_overview(factory, status_manager, timeline, customer, vehicle, make_input, clock):
    order = factory.create_order(customer.id, vehicle.id)
    pads = make_input(name='Brake pad', price=45.0, quantity=8)
    labor = make_input(name='Brake service', price=120.0, quantity=0, input_type='service')

    reservation = InventoryReservation()
    reservation.add_input(order.id, pads.id, 2)
    reservation.add_input(order.id, labor.id, 1)

    clock.advance(hours=1)
    status_manager.update_order_status(order.id, OrderStatus.IN_PROGRESS)
    clock.advance(hours=3)
    status_manager.update_order_status(order.id, OrderStatus.COMPLETED)

    overview = OrderOverviewService(timeline=timeline).get_order_overview(order.id)

    assert overview['order']['id'] == order.id
    assert overview['order']['status'] == 'Completed'
    assert overview['vehicle']['number_plate'] == 'ABC1D23'
    assert 'created_at' not in overview['vehicle']

    assert [item['input_name'] for item in overview['inputs']] == ['Brake pad', 'Brake service']
    assert overview['inputs'][0]['quantity'] == 2
    assert overview['inputs'][0]['total_price'] == 90.0
    assert overview['total_price'] == 210.0

    assert overview['timeline'] == {
        'Received': '01:00:00',
        'In progress': '03:00:00',
        'Completed': '00:00:00',
    }
    assert overview['average_time'] == '02:00:00'


def test_order_overview_of_empty_order(factory, timeline, customer, vehicle):
    order = factory.create_order(customer.id, vehicle.id)

    overview = OrderOverviewService(timeline=timeline).get_order_overview(order.id)

    assert overview['inputs'] == []
    assert overview['total_price'] == 0.0
    assert overview['timeline'] == {'Received': '00:00:00'}
    assert overview['average_time'] == '00:00:00'


def test_order_overview_unknown_order(db):
    with pytest.raises(OrderNotFoundError):
        OrderOverviewService().get_order_overview(999)
