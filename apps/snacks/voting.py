"""
Vote tally rules.

A vote increments exactly one of a request's two tallies by one. There is
no per-user tracking, no undo and no cap, so tallies only ever grow and
any interleaving of N up-votes and M down-votes ends at ``(N, M)``.
"""

from dataclasses import dataclass

from django.db import models

from .exceptions import InvalidVoteDirectionError


class VoteDirection(models.TextChoices):
    UP = 'up', 'Up'
    DOWN = 'down', 'Down'


TALLY_FIELDS = {
    VoteDirection.UP: 'upvotes',
    VoteDirection.DOWN: 'downvotes',
}


@dataclass(frozen=True)
class Tally:
    upvotes: int = 0
    downvotes: int = 0

    @property
    def net_score(self) -> int:
        return net_score(self.upvotes, self.downvotes)


def tally_field(direction) -> str:
    """Name of the tally column a vote in ``direction`` increments."""
    try:
        return TALLY_FIELDS[VoteDirection(direction)]
    except ValueError:
        raise InvalidVoteDirectionError(
            f"Invalid vote direction: {direction!r}. Valid options: up, down"
        )


def apply_vote(tally, direction) -> Tally:
    """
    Return the tally after one vote.

    Args:
        tally: Anything with ``upvotes`` and ``downvotes`` attributes
            (a ``Tally`` or a ``SnackRequest``).
        direction (str): ``'up'`` or ``'down'``.

    Raises:
        InvalidVoteDirectionError: For any other direction.
    """
    field = tally_field(direction)
    upvotes, downvotes = tally.upvotes, tally.downvotes
    if field == 'upvotes':
        upvotes += 1
    else:
        downvotes += 1
    return Tally(upvotes=upvotes, downvotes=downvotes)


def net_score(upvotes: int, downvotes: int) -> int:
    return upvotes - downvotes


def format_net_score(score: int) -> str:
    """Signed display form: ``+3``, ``+0``, ``-1``."""
    return f'+{score}' if score >= 0 else str(score)
