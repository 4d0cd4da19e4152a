"""
Permission classes for the Wallet app.
"""

from rest_framework.permissions import BasePermission

from .models import Account


class IsAdminRole(BasePermission):
    """Allow only active accounts whose live role is admin."""

    message = 'Forbidden access'

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, 'is_admin', False)
            and getattr(user, 'status', None) == Account.Status.ACTIVE
        )
