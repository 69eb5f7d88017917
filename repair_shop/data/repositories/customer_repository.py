from repair_shop.data.core.customer import Customer
from repair_shop.data.core.vehicle import Vehicle
from repair_shop.data.repositories.base_repository import BaseRepository


class CustomerRepository(BaseRepository[Customer]):
    model = Customer


class VehicleRepository(BaseRepository[Vehicle]):
    model = Vehicle
