"""
Shared fixtures for the Wallet app tests.
"""

from decimal import Decimal
from django.contrib.auth.hashers import make_password

from wallet.models import Account

# bcrypt is deliberately slow; tests only need a working hasher.
FAST_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

PIN = '12345'


def make_account(name, mobile_number, role=Account.Role.USER,
                 status=Account.Status.ACTIVE, balance='0.00', email=None):
    """Create an account directly, bypassing registration rules."""
    return Account.objects.create(
        name=name,
        email=email or f'{name.lower()}@example.com',
        mobile_number=mobile_number,
        pin=make_password(PIN),
        role=role,
        status=status,
        balance=Decimal(balance),
    )
