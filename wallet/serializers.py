"""
DRF Serializers for the Wallet app.
"""

from decimal import Decimal
from rest_framework import serializers

from .models import Account, Transaction


PIN_REGEX = r'^\d{4,6}$'


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for the registration endpoint.

    Admin accounts cannot be self-registered.
    """

    name = serializers.CharField(max_length=150)
    photo_url = serializers.URLField(max_length=500, required=False, allow_blank=True)
    email = serializers.EmailField()
    mobile_number = serializers.RegexField(
        r'^\+?\d{6,15}$',
        max_length=20,
        error_messages={'invalid': 'Enter a valid mobile number.'}
    )
    pin = serializers.RegexField(
        PIN_REGEX,
        write_only=True,
        error_messages={'invalid': 'PIN must be 4 to 6 digits.'}
    )
    role = serializers.ChoiceField(
        choices=[Account.Role.USER, Account.Role.AGENT],
        default=Account.Role.USER,
        help_text='user or agent'
    )


class LoginSerializer(serializers.Serializer):
    email_or_mobile = serializers.CharField()
    pin = serializers.CharField(write_only=True)


class TokenSerializer(serializers.Serializer):
    token = serializers.CharField()


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, required=False)
    photo_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class TransferSerializer(serializers.Serializer):
    """
    Serializer for send money, cash out and cash in requests.

    Validates:
    - counterparty: email or mobile number of the other account
    - pin: the caller's PIN
    - amount: must be a positive decimal with max 2 decimal places
    """

    counterparty = serializers.CharField(
        help_text='Email or mobile number of the other account'
    )
    pin = serializers.CharField(write_only=True)
    amount = serializers.DecimalField(
        max_digits=19,
        decimal_places=2,
        min_value=Decimal('0.01'),
        help_text='Amount to transfer (must be > 0)'
    )


class AcceptSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(max_length=10)


class AccountSerializer(serializers.ModelSerializer):
    """Public view of an account. The PIN hash is never listed here."""

    class Meta:
        model = Account
        fields = (
            'id', 'name', 'photo_url', 'email', 'mobile_number',
            'balance', 'status', 'role', 'created_at', 'last_login_at',
        )
        read_only_fields = fields


class TransactionSerializer(serializers.ModelSerializer):
    sender_mobile = serializers.CharField(source='sender.mobile_number', read_only=True)
    receiver_mobile = serializers.CharField(source='receiver.mobile_number', read_only=True)
    sender_name = serializers.CharField(source='sender.name', read_only=True)
    receiver_name = serializers.CharField(source='receiver.name', read_only=True)
    type = serializers.CharField(source='kind', read_only=True)

    class Meta:
        model = Transaction
        fields = (
            'transaction_id', 'sender_mobile', 'sender_name',
            'receiver_mobile', 'receiver_name', 'amount', 'fee', 'type',
            'status', 'timestamp', 'completed_at', 'receipt_path',
        )
        read_only_fields = fields
