"""
Snacks app services layer.

Services contain business logic and orchestrate operations across models.
"""

from ..exceptions import (
    SnacksServiceError,
    InvalidMonthError,
    InvalidVoteDirectionError,
    RequestNotFoundError,
)

from .request_management import (
    submit_request,
    get_request,
    list_requests,
    delete_requests,
)

from .voting import (
    cast_vote,
)


__all__ = [
    # Exceptions
    'SnacksServiceError',
    'InvalidMonthError',
    'InvalidVoteDirectionError',
    'RequestNotFoundError',

    # Request Management
    'submit_request',
    'get_request',
    'list_requests',
    'delete_requests',

    # Voting
    'cast_vote',
]
