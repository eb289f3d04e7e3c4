import pytest
from datetime import datetime, timezone as dt_timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.snacks.models import SnackRequest
from apps.snacks.order_cycle import compute_effective_order_month


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def snack_user(db):
    """Create and return a user who requests snacks."""
    return User.objects.create_user(
        email='snacker@example.com',
        password='TestPass123!',
        display_name='Snack Lover',
    )


@pytest.fixture
def other_snack_user(db):
    """Create and return another requesting user."""
    return User.objects.create_user(
        email='other.snacker@example.com',
        password='TestPass123!',
        display_name='Other Snacker',
    )


@pytest.fixture
def snack_client(api_client, snack_user):
    """Return API client authenticated as the snack user."""
    refresh = RefreshToken.for_user(snack_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def make_request(db, snack_user):
    """Factory creating a request as if submitted at ``created_at``."""
    def _make(name='Spicy Chips', created_at=None, upvotes=0, downvotes=0, image_url='', owner=None):
        created_at = created_at or datetime(2024, 1, 10, 12, 0, tzinfo=dt_timezone.utc)
        return SnackRequest.objects.create(
            name=name,
            image_url=image_url,
            upvotes=upvotes,
            downvotes=downvotes,
            created_at=created_at,
            effective_order_month=compute_effective_order_month(created_at),
            owner=owner or snack_user,
        )
    return _make


@pytest.fixture
def snack_request(make_request):
    """A request made on 10 January 2024 (ordered in February)."""
    return make_request()


@pytest.fixture
def february_requests(make_request):
    """Requests around the February 2024 (leap year) boundaries."""
    return {
        'before': make_request('Before', datetime(2024, 1, 31, 23, 59, 59, tzinfo=dt_timezone.utc)),
        'first': make_request('First', datetime(2024, 2, 1, 0, 0, 0, tzinfo=dt_timezone.utc)),
        'leap_day': make_request('Leap Day', datetime(2024, 2, 29, 23, 59, 59, 999000, tzinfo=dt_timezone.utc)),
        'after': make_request('After', datetime(2024, 3, 1, 0, 0, 0, tzinfo=dt_timezone.utc)),
    }
