"""
Live request feed.

Viewers subscribe with an optional RequestFilter and receive a fresh,
fully ordered snapshot of the matching requests right away and again
after every committed change (submission, vote, purchase). A
subscription is an explicit resource: it delivers nothing once cancelled.

``RequestViewer`` wraps the feed for a single client and guarantees it
holds at most one live subscription; changing the month filter cancels
the current subscription before the next one opens.

Example::

    viewer = RequestViewer(on_snapshot=render)
    viewer.watch(RequestFilter(2024, 2))
    ...
    viewer.watch(None)   # switch to "all requests"
    viewer.close()
"""

import logging
import threading

from django.db import DatabaseError, transaction

from .filters import filter_requests

logger = logging.getLogger(__name__)


class Subscription:
    """One viewer's registration with a RequestFeed."""

    def __init__(self, feed, request_filter, on_snapshot, on_error=None):
        self.feed = feed
        self.request_filter = request_filter
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._active = True

    @property
    def active(self):
        return self._active

    def refresh(self):
        """Query the current snapshot and deliver it."""
        if not self._active:
            return
        try:
            snapshot = list(filter_requests(self.request_filter))
        except DatabaseError as exc:
            logger.exception("Failed to refresh request snapshot")
            if self._on_error is not None:
                self._on_error(exc)
            return
        # Cancelled while querying
        if self._active:
            self._on_snapshot(snapshot)

    def cancel(self):
        if self._active:
            self._active = False
            self.feed._remove(self)
            logger.debug("Cancelled request subscription %s", id(self))


class RequestFeed:
    """In-process publish/subscribe hub for request snapshots."""

    def __init__(self):
        self._subscriptions = []
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self, on_snapshot, request_filter=None, on_error=None):
        """
        Register a subscriber and deliver its first snapshot.

        Args:
            on_snapshot: Called with a list of SnackRequest objects.
            request_filter (RequestFilter, optional): Month filter, or None
                for every active request.
            on_error: Called with the exception when a snapshot query fails.

        Returns:
            Subscription: Call ``cancel()`` to stop deliveries.
        """
        subscription = Subscription(self, request_filter, on_snapshot, on_error)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug("Opened request subscription %s", id(subscription))
        subscription.refresh()
        return subscription

    def publish(self):
        """Push a new snapshot to every live subscription."""
        with self._lock:
            subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription.refresh()

    def publish_on_commit(self):
        """Publish once the surrounding transaction commits."""
        transaction.on_commit(self.publish)

    def _remove(self, subscription):
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)


class RequestViewer:
    """A single client's view of the feed, limited to one live subscription."""

    def __init__(self, on_snapshot, on_error=None, feed=None):
        self.feed = feed if feed is not None else request_feed
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._subscription = None
        self._lock = threading.Lock()

    @property
    def subscription(self):
        return self._subscription

    def watch(self, request_filter=None):
        """Swap the current subscription for one using ``request_filter``."""
        with self._lock:
            if self._subscription is not None:
                self._subscription.cancel()
                self._subscription = None
            self._subscription = self.feed.subscribe(
                self._on_snapshot,
                request_filter=request_filter,
                on_error=self._on_error,
            )
            return self._subscription

    def close(self):
        with self._lock:
            if self._subscription is not None:
                self._subscription.cancel()
                self._subscription = None


# Process-wide feed used by the services and the streaming endpoint
request_feed = RequestFeed()
