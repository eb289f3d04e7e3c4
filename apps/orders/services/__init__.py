"""
Orders app services layer.

Services contain business logic and orchestrate operations across models.
"""

from ..exceptions import (
    OrdersServiceError,
    EmptyPurchaseError,
    RequestAlreadyPurchasedError,
)

from .purchasing import (
    purchase_requests,
    list_orders,
    snapshot_request,
    total_net_score,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'EmptyPurchaseError',
    'RequestAlreadyPurchasedError',

    # Purchasing
    'purchase_requests',
    'list_orders',
    'snapshot_request',
    'total_net_score',
]
