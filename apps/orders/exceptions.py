"""
Domain exceptions for orders app.

Exception Hierarchy:
    OrdersServiceError (base)
    ├── EmptyPurchaseError
    └── RequestAlreadyPurchasedError

Views catch these and convert them into HTTP responses.
"""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class EmptyPurchaseError(OrdersServiceError):
    """Raised when a purchase names no requests."""
    pass


class RequestAlreadyPurchasedError(OrdersServiceError):
    """
    Raised when a request in a purchase is no longer active.

    Usually another admin purchased it first. The purchase is rolled back
    and no order is written.
    """

    def __init__(self, missing_ids=()):
        self.missing_ids = sorted(str(request_id) for request_id in missing_ids)
        message = "Snack requests were already purchased"
        if self.missing_ids:
            message = f"{message}: {', '.join(self.missing_ids)}"
        super().__init__(message)
