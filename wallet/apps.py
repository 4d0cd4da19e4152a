"""
Wallet app configuration.
"""

from django.apps import AppConfig


class WalletConfig(AppConfig):
    """Registers the account and ledger models."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wallet'
    verbose_name = 'pCash Accounts & Ledger'
