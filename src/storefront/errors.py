"""Error kinds reported by cart, delivery and checkout operations.

Expected conditions travel as values of this enum inside result objects;
callers render a message from them without catching exceptions.
"""

from enum import Enum


class ErrorKind(Enum):
    VENDOR_CONFLICT = "VendorConflict"
    EMPTY_CART = "EmptyCart"
    OUTSIDE_SERVICE_AREA = "OutsideServiceArea"
    BELOW_MINIMUM_ORDER = "BelowMinimumOrder"
    COORDINATE_UNAVAILABLE = "CoordinateUnavailable"
    NETWORK_FAILURE = "NetworkFailure"
    INVALID_QUANTITY = "InvalidQuantity"
