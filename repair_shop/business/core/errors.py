"""
Domain exceptions for order fulfillment business logic

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer before any mutation is attempted; the
message of each instance is the stable, caller-facing reason string.

Storage failures are not wrapped: they surface as sqlalchemy.exc.SQLAlchemyError.
"""


class OrderDomainError(Exception):
    """Base exception for all order fulfillment domain errors"""

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    default_message = "order fulfillment error"

    @property
    def message(self) -> str:
        return str(self)


class OrderValidationError(OrderDomainError):
    """Raised when a request value is invalid (quantity, status, price)"""
    default_message = "invalid request"


class RecordNotFoundError(OrderDomainError):
    """Raised when a referenced record does not exist"""
    default_message = "record not found"


class OrderNotFoundError(RecordNotFoundError):
    default_message = "order not found"


class InputNotFoundError(RecordNotFoundError):
    default_message = "input not found"


class OrderInputNotFoundError(RecordNotFoundError):
    default_message = "order input not found"


class CustomerNotFoundError(RecordNotFoundError):
    default_message = "customer not found"


class VehicleNotFoundError(RecordNotFoundError):
    default_message = "vehicle not found"


class OrderConflictError(OrderDomainError):
    """Raised when the current state of a shared record prevents the operation"""
    default_message = "conflict"


class InsufficientStockError(OrderConflictError):
    """Raised when an input does not have enough stock on hand"""
    default_message = "insufficient input quantity"


class InsufficientOrderInputQuantityError(OrderConflictError):
    """Raised when a line item holds less than the quantity being removed"""
    default_message = "insufficient quantity in order input"


class VehicleOwnershipError(OrderConflictError):
    """Raised when an order pairs a customer with someone else's vehicle"""
    default_message = "vehicle does not belong to customer"
