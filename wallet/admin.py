"""
Admin configuration for the Wallet app.
"""

from django.contrib import admin
from .models import Account, Transaction


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin configuration for Account model. Balances change only through transfers."""

    list_display = ('id', 'name', 'email', 'mobile_number', 'role', 'status', 'balance', 'created_at')
    list_filter = ('role', 'status', 'created_at')
    search_fields = ('name', 'email', 'mobile_number')
    readonly_fields = ('pin', 'balance', 'created_at', 'last_login_at')
    ordering = ('-created_at',)


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin configuration for Transaction model."""

    list_display = ('transaction_id', 'kind', 'status', 'sender', 'receiver', 'amount', 'fee', 'timestamp')
    list_filter = ('kind', 'status', 'timestamp')
    search_fields = ('transaction_id', 'sender__mobile_number', 'receiver__mobile_number')
    readonly_fields = (
        'transaction_id', 'kind', 'status', 'sender', 'receiver', 'amount', 'fee',
        'timestamp', 'completed_at', 'receipt_path',
    )
    ordering = ('-timestamp',)

    def has_add_permission(self, request):
        """Transactions should only be created through the API."""
        return False

    def has_change_permission(self, request, obj=None):
        """Transactions are immutable."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Transactions cannot be deleted."""
        return False
