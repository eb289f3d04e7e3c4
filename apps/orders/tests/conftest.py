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
def order_admin(db):
    """Create and return a user on the admin allow-list."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Snack Admin',
    )


@pytest.fixture
def order_member(db):
    """Create and return a regular (non-admin) user."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Member',
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_client(order_admin):
    """Return API client authenticated as the snack admin."""
    return _client_for(order_admin)


@pytest.fixture
def member_client(order_member):
    """Return API client authenticated as a regular user."""
    return _client_for(order_member)


@pytest.fixture
def make_request(db, order_member):
    """Factory for active snack requests."""
    def _make(name, upvotes=0, downvotes=0, created_at=None, image_url=''):
        created_at = created_at or datetime(2024, 1, 10, 12, 0, tzinfo=dt_timezone.utc)
        return SnackRequest.objects.create(
            name=name,
            image_url=image_url,
            upvotes=upvotes,
            downvotes=downvotes,
            created_at=created_at,
            effective_order_month=compute_effective_order_month(created_at),
            owner=order_member,
        )
    return _make


@pytest.fixture
def chips(make_request):
    return make_request('Spicy Chips', upvotes=5, downvotes=1, image_url='https://example.com/chips.png')


@pytest.fixture
def pretzels(make_request):
    return make_request(
        'Pretzels',
        upvotes=2,
        downvotes=4,
        created_at=datetime(2024, 1, 12, 8, 0, tzinfo=dt_timezone.utc),
    )
