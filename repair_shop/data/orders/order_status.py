"""
Order status enumeration shared by order creation, status updates and the
status timeline.
"""

from typing import Tuple


class OrderStatus:
    """
    Canonical set of order status values.

    An order moves freely between these values; every change closes the
    current status interval and opens a new one.
    """

    RECEIVED = 'Received'
    UNDERGOING_DIAGNOSIS = 'Undergoing diagnosis'
    AWAITING_APPROVAL = 'Awaiting approval'
    IN_PROGRESS = 'In progress'
    COMPLETED = 'Completed'
    DELIVERED = 'Delivered'
    CANCELED = 'Canceled'

    INITIAL = RECEIVED

    ALL: Tuple[str, ...] = (
        RECEIVED,
        UNDERGOING_DIAGNOSIS,
        AWAITING_APPROVAL,
        IN_PROGRESS,
        COMPLETED,
        DELIVERED,
        CANCELED,
    )

    # The order leaves the shop (or is abandoned) in these statuses
    FINAL_STATUSES = frozenset({DELIVERED, CANCELED})

    @classmethod
    def is_valid(cls, status) -> bool:
        return status in cls.ALL

    @classmethod
    def is_final(cls, status) -> bool:
        return status in cls.FINAL_STATUSES
