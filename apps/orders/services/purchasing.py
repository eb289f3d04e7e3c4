"""
Purchase service.

Turns active snack requests into an order. The whole purchase runs in one
transaction: the requests are locked, copied into order items and deleted,
and if any of them has already gone (bought by another admin) nothing is
written at all.

Example::

    from apps.orders.services import purchase_requests

    order = purchase_requests(
        request_ids=[chips.id, pretzels.id],
        purchased_by=request.user,
    )
    order.total_net_score   # sum of both net scores
"""

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.orders.models import Order, OrderItem
from apps.snacks.models import SnackRequest
from apps.snacks.services import delete_requests

from ..exceptions import EmptyPurchaseError, RequestAlreadyPurchasedError

logger = logging.getLogger(__name__)


def snapshot_request(snack_request: SnackRequest) -> OrderItem:
    """Unsaved order item copying the request's current state."""
    return OrderItem(
        request_id=snack_request.id,
        name=snack_request.name,
        image_url=snack_request.image_url,
        upvotes=snack_request.upvotes,
        downvotes=snack_request.downvotes,
        effective_order_month=snack_request.effective_order_month,
    )


def total_net_score(items) -> int:
    return sum(item.net_score for item in items)


def _unique_ids(request_ids: Iterable) -> list[UUID]:
    unique = []
    for request_id in request_ids:
        request_id = request_id if isinstance(request_id, UUID) else UUID(str(request_id))
        if request_id not in unique:
            unique.append(request_id)
    return unique


@transaction.atomic
def purchase_requests(*, request_ids: Iterable, purchased_by: User) -> Order:
    """
    Record an order for the given requests and remove them from the active list.

    Args:
        request_ids: IDs of the requests to buy; duplicates are ignored
        purchased_by: Admin recording the purchase

    Returns:
        The created Order with its items

    Raises:
        EmptyPurchaseError: If no request IDs were given
        RequestAlreadyPurchasedError: If any request is no longer active.
            Nothing is written in that case.
    """
    request_ids = _unique_ids(request_ids)
    if not request_ids:
        raise EmptyPurchaseError("Select at least one snack request to purchase")

    requests = list(
        SnackRequest.objects
        .select_for_update()
        .filter(id__in=request_ids)
        .order_by('-created_at')
    )
    missing = set(request_ids) - {r.id for r in requests}
    if missing:
        raise RequestAlreadyPurchasedError(missing)

    items = [snapshot_request(r) for r in requests]
    order = Order.objects.create(
        created_by=purchased_by,
        total_net_score=total_net_score(items),
    )
    for item in items:
        item.order = order
    OrderItem.objects.bulk_create(items)

    # A concurrent purchase may have removed rows since they were read
    deleted = delete_requests(request_ids=request_ids)
    if deleted != len(request_ids):
        raise RequestAlreadyPurchasedError()

    logger.info(
        "Order %s recorded by %s: %d request(s), net score %d",
        order.id,
        purchased_by.email if purchased_by else None,
        len(items),
        order.total_net_score,
    )
    return order


def list_orders():
    """Order history, newest first."""
    return Order.objects.select_related('created_by').prefetch_related('items')
