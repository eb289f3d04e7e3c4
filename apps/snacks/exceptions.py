"""
Domain exceptions for snacks app.

Exception Hierarchy:
    SnacksServiceError (base)
    ├── InvalidMonthError
    ├── InvalidVoteDirectionError
    └── RequestNotFoundError

Views catch these and convert them into HTTP responses.
"""


class SnacksServiceError(Exception):
    """Base exception for all snacks service errors."""
    pass


class InvalidMonthError(SnacksServiceError, ValueError):
    """
    Raised when a month filter is not in YYYY-MM form.

    Example:
        raise InvalidMonthError("Invalid month '2024/02'. Use YYYY-MM")
    """
    pass


class InvalidVoteDirectionError(SnacksServiceError, ValueError):
    """Raised when a vote direction is neither 'up' nor 'down'."""
    pass


class RequestNotFoundError(SnacksServiceError):
    """Raised when a snack request does not exist (or was already purchased)."""
    pass
