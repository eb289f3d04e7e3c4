import logging
import queue

from django.db import DatabaseError
from django.http import StreamingHttpResponse
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .feed import RequestViewer
from .order_cycle import compute_effective_order_month, deadline_day, format_month_label
from .renderers import EventStreamRenderer
from .serializers import (
    CycleQuerySerializer,
    MonthFilterSerializer,
    OrderCycleSerializer,
    SnackRequestCreateSerializer,
    SnackRequestSerializer,
    VoteInputSerializer,
)
from .services import (
    cast_vote,
    get_request,
    list_requests,
    submit_request,
    RequestNotFoundError,
)

logger = logging.getLogger(__name__)

# Seconds between keep-alive comments on an idle event stream
STREAM_KEEPALIVE_SECONDS = 15

UUID_PATTERN = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

MONTH_PARAMETERS = [
    OpenApiParameter('month', OpenApiTypes.STR, description='Month filter (YYYY-MM); empty shows all'),
    OpenApiParameter(
        'month_field', OpenApiTypes.STR,
        description="Field the month applies to: 'effective' (default) or 'created'"
    ),
]


class SnackRequestPagination(PageNumberPagination):
    """Custom pagination for snack requests."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class SnackRequestViewSet(mixins.ListModelMixin,
                          mixins.RetrieveModelMixin,
                          viewsets.GenericViewSet):
    """
    ViewSet for active snack requests.

    Views are thin HTTP handlers; business logic lives in services.

    list: Active requests, optionally filtered by month
    create: Submit a request
    retrieve: Get a specific request
    vote: Add an up- or down-vote
    stream: Live snapshots as Server-Sent Events
    """

    serializer_class = SnackRequestSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SnackRequestPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """Apply the validated month filter."""
        if self.action != 'list':
            return list_requests()

        filter_serializer = MonthFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        return list_requests(request_filter=filter_serializer.validated_data['request_filter'])

    @extend_schema(parameters=MONTH_PARAMETERS)
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    def retrieve(self, request, *args, **kwargs):
        try:
            snack_request = get_request(request_id=kwargs['pk'])
        except RequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(SnackRequestSerializer(snack_request).data)

    @extend_schema(
        request=SnackRequestCreateSerializer,
        responses={201: SnackRequestSerializer, 204: None, 503: None},
        description="Submit a snack request. A blank name is ignored (204, nothing created).",
    )
    def create(self, request, *args, **kwargs):
        """Submit a snack request."""
        serializer = SnackRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            snack_request = submit_request(
                name=serializer.validated_data['name'],
                image_url=serializer.validated_data.get('image_url', ''),
                owner=request.user,
            )
        except DatabaseError:
            logger.exception("Failed to store snack request")
            return Response(status=status.HTTP_503_SERVICE_UNAVAILABLE)

        if snack_request is None:
            return Response(status=status.HTTP_204_NO_CONTENT)

        return Response(
            SnackRequestSerializer(snack_request).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=VoteInputSerializer,
        responses={200: SnackRequestSerializer, 404: None, 503: None},
        description="Add one vote. Every call counts.",
    )
    @action(detail=True, methods=['post'])
    def vote(self, request, pk=None):
        """
        Vote a request up or down.

        POST /api/snacks/requests/{id}/vote/
        Body: {"direction": "up" | "down"}
        """
        input_serializer = VoteInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            snack_request = cast_vote(
                request_id=pk,
                direction=input_serializer.validated_data['direction'],
            )
        except RequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except DatabaseError:
            logger.exception("Failed to record vote on snack request %s", pk)
            return Response(status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(SnackRequestSerializer(snack_request).data)

    @extend_schema(
        parameters=MONTH_PARAMETERS,
        responses={(200, 'text/event-stream'): OpenApiTypes.STR},
        description="Server-Sent Events: a 'snapshot' event with the full list after every change.",
    )
    @action(detail=False, methods=['get'], renderer_classes=[JSONRenderer, EventStreamRenderer])
    def stream(self, request):
        """
        Live request snapshots.

        GET /api/snacks/requests/stream/?month=YYYY-MM
        """
        filter_serializer = MonthFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        events = queue.Queue()
        renderer = JSONRenderer()

        def on_snapshot(snapshot):
            data = SnackRequestSerializer(snapshot, many=True).data
            events.put(('snapshot', renderer.render(data).decode('utf-8')))

        def on_error(exc):
            events.put(('error', renderer.render({'error': 'Request feed unavailable'}).decode('utf-8')))

        request_filter = filter_serializer.validated_data['request_filter']
        viewer = RequestViewer(on_snapshot=on_snapshot, on_error=on_error)

        def event_stream():
            # Unread responses never subscribe
            try:
                viewer.watch(request_filter)
                while True:
                    try:
                        event, payload = events.get(timeout=STREAM_KEEPALIVE_SECONDS)
                    except queue.Empty:
                        yield ': keep-alive\n\n'
                        continue
                    yield f'event: {event}\ndata: {payload}\n\n'
            finally:
                viewer.close()

        response = StreamingHttpResponse(event_stream(), content_type='text/event-stream')
        response['Cache-Control'] = 'no-cache'
        response['X-Accel-Buffering'] = 'no'
        return response


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, description='Submission date (YYYY-MM-DD), defaults to today'),
    ],
    responses={200: OrderCycleSerializer},
    description="Preview which order month a request made on the given date belongs to.",
    tags=['snacks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_cycle(request):
    """Effective order month for a submission date."""
    query_serializer = CycleQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    day = query_serializer.validated_data.get('date') or timezone.localdate()
    effective_month = compute_effective_order_month(day)

    return Response(OrderCycleSerializer({
        'date': day,
        'deadline': day.replace(day=deadline_day(day.year, day.month)),
        'effective_order_month': effective_month,
        'requested_for': format_month_label(effective_month),
    }).data)
