import logging

from django.db import DatabaseError
from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import IsSnackAdmin
from apps.snacks.views import UUID_PATTERN

from .serializers import OrderSerializer, PurchaseInputSerializer
from .services import (
    list_orders,
    purchase_requests,
    EmptyPurchaseError,
    RequestAlreadyPurchasedError,
)

logger = logging.getLogger(__name__)


class OrderPagination(PageNumberPagination):
    """Custom pagination for order history."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class OrderViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Order history for snack admins.

    list: Recorded orders, newest first
    retrieve: A single order with its items
    """

    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsSnackAdmin]
    pagination_class = OrderPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        return list_orders()


@extend_schema(
    request=PurchaseInputSerializer,
    responses={201: OrderSerializer, 400: None, 409: None, 503: None},
    description=(
        "Purchase snack requests: records an order snapshot and removes the "
        "requests from the active list. All or nothing."
    ),
    tags=['orders'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSnackAdmin])
def purchase(request):
    """
    Purchase one or more requests.

    POST /api/orders/purchase/
    Body: {"request_ids": ["<uuid>", ...]}
    """
    input_serializer = PurchaseInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)

    try:
        order = purchase_requests(
            request_ids=input_serializer.validated_data['request_ids'],
            purchased_by=request.user,
        )
    except EmptyPurchaseError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except RequestAlreadyPurchasedError as e:
        return Response(
            {'error': str(e), 'request_ids': e.missing_ids},
            status=status.HTTP_409_CONFLICT
        )
    except DatabaseError:
        logger.exception("Failed to record purchase")
        return Response(
            {'error': 'Could not record the purchase. Please try again.'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    order = list_orders().get(id=order.id)
    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
