import json
import uuid
import pytest
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from apps.snacks.feed import request_feed
from apps.snacks.models import SnackRequest


# =============================================================================
# List Tests
# =============================================================================

@pytest.mark.django_db
class TestListRequests:
    """Tests for GET /api/snacks/requests/"""

    def test_list_all(self, snack_client, february_requests):
        url = reverse('snacks:request-list')
        response = snack_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        names = [r['name'] for r in response.data['results']]
        assert names == ['After', 'Leap Day', 'First', 'Before']

    def test_list_by_created_month(self, snack_client, february_requests):
        url = reverse('snacks:request-list')
        response = snack_client.get(url, {'month': '2024-02', 'month_field': 'created'})

        assert response.status_code == status.HTTP_200_OK
        names = [r['name'] for r in response.data['results']]
        assert names == ['Leap Day', 'First']

    def test_list_by_effective_month_is_default(self, snack_client, february_requests):
        url = reverse('snacks:request-list')
        response = snack_client.get(url, {'month': '2024-04'})

        assert response.status_code == status.HTTP_200_OK
        names = [r['name'] for r in response.data['results']]
        assert names == ['After', 'Leap Day']

    def test_empty_month_shows_all(self, snack_client, february_requests):
        url = reverse('snacks:request-list')
        response = snack_client.get(url, {'month': ''})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 4

    def test_invalid_month(self, snack_client):
        url = reverse('snacks:request-list')
        response = snack_client.get(url, {'month': '2024/02'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'month' in response.data

    def test_invalid_month_field(self, snack_client):
        url = reverse('snacks:request-list')
        response = snack_client.get(url, {'month': '2024-02', 'month_field': 'purchased'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'month_field' in response.data

    def test_derived_fields(self, snack_client, make_request, settings):
        make_request('Plain', upvotes=2, downvotes=2)
        url = reverse('snacks:request-list')
        response = snack_client.get(url)

        item = response.data['results'][0]
        assert item['net_score'] == 0
        assert item['net_score_display'] == '+0'
        assert item['display_image_url'] == settings.SNACK_PLACEHOLDER_IMAGE_URL
        assert item['effective_order_month'] == '2024-02-01'
        assert item['requested_for'] == 'February 2024'
        assert item['owner']['display_name'] == 'Snack Lover'

    def test_list_unauthenticated(self, api_client):
        url = reverse('snacks:request-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Retrieve Tests
# =============================================================================

@pytest.mark.django_db
class TestRetrieveRequest:
    """Tests for GET /api/snacks/requests/{id}/"""

    def test_retrieve(self, snack_client, snack_request):
        url = reverse('snacks:request-detail', kwargs={'pk': snack_request.id})
        response = snack_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(snack_request.id)

    def test_retrieve_missing(self, snack_client):
        url = reverse('snacks:request-detail', kwargs={'pk': uuid.uuid4()})
        response = snack_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data


# =============================================================================
# Create Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateRequest:
    """Tests for POST /api/snacks/requests/"""

    def test_create(self, snack_client, snack_user):
        url = reverse('snacks:request-list')
        data = {'name': '  Seaweed Crisps ', 'image_url': 'https://example.com/seaweed.png'}
        response = snack_client.post(url, data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Seaweed Crisps'
        assert response.data['upvotes'] == 0
        assert response.data['downvotes'] == 0
        assert response.data['display_image_url'] == 'https://example.com/seaweed.png'

        snack_request = SnackRequest.objects.get()
        assert snack_request.owner == snack_user
        assert snack_request.effective_order_month.day == 1

    def test_create_without_image(self, snack_client):
        url = reverse('snacks:request-list')
        response = snack_client.post(url, {'name': 'Pretzels'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['image_url'] == ''

    def test_blank_name_creates_nothing(self, snack_client):
        url = reverse('snacks:request-list')
        response = snack_client.post(url, {'name': '   '}, format='json')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert SnackRequest.objects.count() == 0

    def test_invalid_image_url(self, snack_client):
        url = reverse('snacks:request-list')
        response = snack_client.post(url, {'name': 'Pretzels', 'image_url': 'not a url'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'image_url' in response.data

    def test_store_unavailable(self, snack_client, monkeypatch):
        def unavailable(**kwargs):
            raise DatabaseError('database is locked')

        monkeypatch.setattr('apps.snacks.views.submit_request', unavailable)
        url = reverse('snacks:request-list')
        response = snack_client.post(url, {'name': 'Pretzels'}, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert SnackRequest.objects.count() == 0

    def test_create_unauthenticated(self, api_client):
        url = reverse('snacks:request-list')
        response = api_client.post(url, {'name': 'Pretzels'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Vote Tests
# =============================================================================

@pytest.mark.django_db
class TestVote:
    """Tests for POST /api/snacks/requests/{id}/vote/"""

    def test_up_vote(self, snack_client, make_request):
        snack_request = make_request(upvotes=3, downvotes=5)
        url = reverse('snacks:request-vote', kwargs={'pk': snack_request.id})
        response = snack_client.post(url, {'direction': 'up'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['upvotes'] == 4
        assert response.data['downvotes'] == 5
        assert response.data['net_score_display'] == '-1'

    def test_repeated_votes_all_count(self, snack_client, snack_request):
        url = reverse('snacks:request-vote', kwargs={'pk': snack_request.id})
        snack_client.post(url, {'direction': 'down'}, format='json')
        response = snack_client.post(url, {'direction': 'down'}, format='json')

        assert response.data['downvotes'] == 2

    def test_invalid_direction(self, snack_client, snack_request):
        url = reverse('snacks:request-vote', kwargs={'pk': snack_request.id})
        response = snack_client.post(url, {'direction': 'sideways'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'direction' in response.data

    def test_vote_on_missing_request(self, snack_client):
        url = reverse('snacks:request-vote', kwargs={'pk': uuid.uuid4()})
        response = snack_client.post(url, {'direction': 'up'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert 'error' in response.data

    def test_store_unavailable(self, snack_client, snack_request, monkeypatch):
        def unavailable(**kwargs):
            raise DatabaseError('database is locked')

        monkeypatch.setattr('apps.snacks.views.cast_vote', unavailable)
        url = reverse('snacks:request-vote', kwargs={'pk': snack_request.id})
        response = snack_client.post(url, {'direction': 'up'}, format='json')

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        snack_request.refresh_from_db()
        assert snack_request.upvotes == 0


# =============================================================================
# Stream Tests
# =============================================================================

@pytest.mark.django_db
class TestStream:
    """Tests for GET /api/snacks/requests/stream/"""

    def test_first_event_is_snapshot(self, snack_client, february_requests):
        url = reverse('snacks:request-stream')
        response = snack_client.get(url, {'month': '2024-02', 'month_field': 'created'})
        try:
            assert response.status_code == status.HTTP_200_OK
            assert response['Content-Type'].startswith('text/event-stream')

            chunk = next(iter(response.streaming_content))
            if isinstance(chunk, bytes):
                chunk = chunk.decode('utf-8')
            event, data = chunk.strip().split('\n')
            assert event == 'event: snapshot'
            payload = json.loads(data[len('data: '):])
            assert [r['name'] for r in payload] == ['Leap Day', 'First']
        finally:
            response.close()

    def test_unread_stream_holds_no_subscription(self, snack_client):
        url = reverse('snacks:request-stream')
        response = snack_client.get(url)

        assert len(request_feed) == 0
        response.close()
        assert len(request_feed) == 0

    def test_closing_stream_cancels_subscription(self, snack_client, snack_request):
        url = reverse('snacks:request-stream')
        response = snack_client.get(url)

        next(iter(response.streaming_content))
        assert len(request_feed) == 1

        response.close()
        assert len(request_feed) == 0

    def test_invalid_month(self, snack_client):
        url = reverse('snacks:request-stream')
        response = snack_client.get(url, {'month': 'soon'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Order Cycle Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentCycle:
    """Tests for GET /api/snacks/cycle/"""

    def test_before_deadline(self, snack_client):
        url = reverse('snacks:current-cycle')
        response = snack_client.get(url, {'date': '2024-01-24'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['deadline'] == '2024-01-24'
        assert response.data['effective_order_month'] == '2024-02-01'
        assert response.data['requested_for'] == 'February 2024'

    def test_after_deadline(self, snack_client):
        url = reverse('snacks:current-cycle')
        response = snack_client.get(url, {'date': '2024-12-31'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['effective_order_month'] == '2025-02-01'
        assert response.data['requested_for'] == 'February 2025'

    def test_defaults_to_today(self, snack_client):
        url = reverse('snacks:current-cycle')
        response = snack_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['effective_order_month'].endswith('-01')

    def test_cutoff_longer_than_month(self, snack_client, settings):
        settings.SNACKS_CUTOFF_DAYS = 40
        url = reverse('snacks:current-cycle')
        response = snack_client.get(url, {'date': '2024-02-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['deadline'] == '2024-02-01'
        assert response.data['effective_order_month'] == '2024-03-01'

    def test_invalid_date(self, snack_client):
        url = reverse('snacks:current-cycle')
        response = snack_client.get(url, {'date': 'tomorrow'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
