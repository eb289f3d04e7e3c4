"""
Voting service.

Persists votes as database-side increments so concurrent voters never
overwrite each other's tallies.
"""

import logging
from uuid import UUID

from django.db import transaction
from django.db.models import F

from apps.snacks.feed import request_feed
from apps.snacks.models import SnackRequest
from apps.snacks.voting import tally_field

from ..exceptions import RequestNotFoundError

logger = logging.getLogger(__name__)


@transaction.atomic
def cast_vote(*, request_id: UUID, direction: str) -> SnackRequest:
    """
    Add one vote to a request.

    Every call counts; there is no per-user de-duplication.

    Args:
        request_id: UUID of the request
        direction: 'up' or 'down'

    Returns:
        The request re-read after the increment

    Raises:
        InvalidVoteDirectionError: If direction is not 'up' or 'down'
        RequestNotFoundError: If the request doesn't exist
    """
    field = tally_field(direction)

    updated = (
        SnackRequest.objects
        .filter(id=request_id)
        .update(**{field: F(field) + 1})
    )
    if not updated:
        raise RequestNotFoundError(f"Snack request {request_id} not found")

    request_feed.publish_on_commit()
    return SnackRequest.objects.select_related('owner').get(id=request_id)
