"""
Serializers for orders app.

Input Serializers:
    PurchaseInputSerializer - Request IDs to purchase

Output Serializers:
    OrderItemSerializer - Snapshot of a purchased request
    OrderSerializer - Order with its items
"""

from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from apps.snacks.order_cycle import format_month_label
from apps.snacks.voting import format_net_score

from .models import Order, OrderItem


class PurchaseInputSerializer(serializers.Serializer):
    """
    Validate a purchase.

    An empty list passes validation; the service rejects it with a
    domain error.
    """

    request_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=True,
    )


class OrderItemSerializer(serializers.ModelSerializer):
    display_image_url = serializers.CharField(read_only=True)
    net_score = serializers.IntegerField(read_only=True)
    net_score_display = serializers.SerializerMethodField()
    requested_for = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            'request_id',
            'name',
            'image_url',
            'display_image_url',
            'upvotes',
            'downvotes',
            'net_score',
            'net_score_display',
            'effective_order_month',
            'requested_for',
        ]
        read_only_fields = fields

    def get_net_score_display(self, obj) -> str:
        return format_net_score(obj.net_score)

    def get_requested_for(self, obj) -> str:
        return format_month_label(obj.effective_order_month)


class OrderSerializer(serializers.ModelSerializer):
    """Recorded order."""

    created_by = UserMinimalSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id',
            'created_by',
            'created_at',
            'total_net_score',
            'item_count',
            'items',
        ]
        read_only_fields = fields

    def get_item_count(self, obj) -> int:
        return len(obj.items.all())
