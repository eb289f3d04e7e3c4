"""
Snack request service.

Creates and reads active requests. Submissions are stamped with their
effective order month at creation; every committed change is pushed to
the live request feed.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.snacks.feed import request_feed
from apps.snacks.filters import RequestFilter, filter_requests
from apps.snacks.models import SnackRequest
from apps.snacks.order_cycle import compute_effective_order_month

from ..exceptions import RequestNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def submit_request(
    *,
    name: str,
    owner: Optional[User],
    image_url: str = '',
    now=None
) -> Optional[SnackRequest]:
    """
    Submit a new snack request.

    A name that is blank after trimming is ignored: nothing is created
    and None is returned.

    Args:
        name: Snack name (trimmed before saving)
        owner: Submitting user
        image_url: Optional image URL
        now: Submission time, defaults to ``timezone.now()``

    Returns:
        Created SnackRequest instance, or None for a blank name
    """
    name = (name or '').strip()
    if not name:
        logger.debug("Ignoring snack request with blank name")
        return None

    created_at = now or timezone.now()
    snack_request = SnackRequest.objects.create(
        name=name,
        image_url=(image_url or '').strip(),
        owner=owner,
        created_at=created_at,
        effective_order_month=compute_effective_order_month(created_at),
    )

    logger.info(
        "Snack request %s submitted for %s",
        snack_request.id,
        snack_request.effective_order_month,
    )
    request_feed.publish_on_commit()
    return snack_request


def get_request(*, request_id: UUID) -> SnackRequest:
    """
    Get an active request by ID.

    Raises:
        RequestNotFoundError: If the request doesn't exist
    """
    try:
        return SnackRequest.objects.select_related('owner').get(id=request_id)
    except SnackRequest.DoesNotExist:
        raise RequestNotFoundError(f"Snack request {request_id} not found")


def list_requests(*, request_filter: Optional[RequestFilter] = None) -> QuerySet[SnackRequest]:
    """
    List active requests.

    Without a filter, newest submissions come first. With a month filter,
    results are ordered by the filtered field, newest first.
    """
    return filter_requests(request_filter)


def delete_requests(*, request_ids) -> int:
    """
    Delete active requests.

    Returns:
        Number of requests actually deleted; ids that no longer exist
        are not counted.
    """
    deleted, _ = SnackRequest.objects.filter(id__in=request_ids).delete()
    if deleted:
        request_feed.publish_on_commit()
    return deleted
