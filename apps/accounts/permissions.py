"""
Custom permission classes backed by the admin allow-list.

Usage:
    @permission_classes([IsAuthenticated, IsSnackAdmin])
    def purchase(request):
        ...
"""
from rest_framework.permissions import BasePermission

from .authorization import is_admin


class IsSnackAdmin(BasePermission):
    """Allow access only to users listed in ``ADMIN_EMAILS``."""

    message = 'Only snack admins can perform this action.'

    def has_permission(self, request, view):
        return is_admin(request.user)
