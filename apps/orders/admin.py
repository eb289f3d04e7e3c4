from django.contrib import admin
from .models import Order, OrderItem
from apps.snacks.voting import format_net_score


class OrderItemInline(admin.TabularInline):
    """Purchased request snapshots within an order."""
    model = OrderItem
    extra = 0
    fields = [
        'name',
        'upvotes',
        'downvotes',
        'effective_order_month',
        'request_id',
    ]
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for recorded orders.

    Orders are append-only history, so every field is read-only and
    orders cannot be added or deleted here.
    """

    list_display = [
        'id',
        'created_by',
        'created_at',
        'net',
        'item_count',
    ]

    list_filter = ['created_at']
    search_fields = ['created_by__email', 'items__name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    readonly_fields = ['id', 'created_by', 'created_at', 'total_net_score']
    inlines = [OrderItemInline]

    @admin.display(description='Net score')
    def net(self, obj):
        return format_net_score(obj.total_net_score)

    @admin.display(description='Items')
    def item_count(self, obj):
        return obj.items.count()

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
