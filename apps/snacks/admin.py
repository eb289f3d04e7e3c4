# ==========================================
# apps/snacks/admin.py
# ==========================================

from django.contrib import admin
from .models import SnackRequest
from .voting import format_net_score


@admin.register(SnackRequest)
class SnackRequestAdmin(admin.ModelAdmin):
    """
    Admin interface for active snack requests.

    Requests change only through votes and leave only through a purchase,
    both of which notify live viewers, so the admin is view-only.
    """

    list_display = [
        'name',
        'owner',
        'upvotes',
        'downvotes',
        'net',
        'effective_order_month',
        'created_at',
    ]

    list_filter = [
        'effective_order_month',
        'created_at',
    ]

    search_fields = [
        'name',
        'owner__email',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    readonly_fields = [
        'id',
        'upvotes',
        'downvotes',
        'created_at',
        'effective_order_month',
    ]

    @admin.display(description='Net score')
    def net(self, obj):
        return format_net_score(obj.net_score)

    def has_add_permission(self, request):
        """Requests are submitted through the API so they get an order month."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
