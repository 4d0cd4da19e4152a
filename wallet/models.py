"""
Data models for the Wallet app.

This module contains:
- Account: wallet holder (user, agent or admin) with PIN and balance
- Transaction: ledger of all money movements
"""

from decimal import Decimal
from django.db import models
from django.core.validators import MinValueValidator


class Account(models.Model):
    """
    A wallet holder identified by email and mobile number.

    Uses DecimalField for accurate currency representation.
    Balance constraint: must be >= 0.00, enforced by a database check.
    """

    class Role(models.TextChoices):
        USER = 'user', 'User'
        AGENT = 'agent', 'Agent'
        ADMIN = 'admin', 'Admin'

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        ACTIVE = 'active', 'Active'
        BLOCKED = 'blocked', 'Blocked'

    name = models.CharField(max_length=150)
    photo_url = models.URLField(max_length=500, blank=True, default='')
    email = models.EmailField(unique=True)
    mobile_number = models.CharField(max_length=20, unique=True)
    pin = models.CharField(
        max_length=128,
        help_text='Hashed PIN, never the plaintext'
    )
    balance = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='Current wallet balance (must be >= 0.00)'
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    last_login_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = 'Account'
        verbose_name_plural = 'Accounts'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(balance__gte=0),
                name='account_balance_non_negative',
            ),
        ]
        indexes = [
            models.Index(fields=['role'], name='account_role_idx'),
            models.Index(fields=['name'], name='account_name_idx'),
        ]

    def __str__(self) -> str:
        return f"Account({self.name} <{self.mobile_number}> {self.role}: {self.balance})"

    @property
    def is_authenticated(self) -> bool:
        # DRF's IsAuthenticated only looks at this attribute.
        return True

    @property
    def is_admin(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def is_agent(self) -> bool:
        return self.role == self.Role.AGENT


class Transaction(models.Model):
    """
    Ledger entry for a money movement.

    Rows are never deleted (PROTECT on both parties). The only permitted
    change after insert is pending -> completed for cash in / cash out.
    """

    class Kind(models.TextChoices):
        SEND_MONEY = 'Send Money', 'Send Money'
        CASH_IN = 'Cash In', 'Cash In'
        CASH_OUT = 'Cash Out', 'Cash Out'
        BONUS = 'Bonus', 'Bonus'

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        COMPLETED = 'completed', 'Completed'

    transaction_id = models.CharField(
        max_length=10,
        unique=True,
        help_text='Public alphanumeric transaction code'
    )
    sender = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name='sent_transactions',
        help_text='Account the money leaves'
    )
    receiver = models.ForeignKey(
        Account,
        on_delete=models.PROTECT,
        related_name='received_transactions',
        help_text='Account the money arrives in'
    )
    amount = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
    )
    fee = models.DecimalField(
        max_digits=19,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    kind = models.CharField(max_length=20, choices=Kind.choices)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
    )
    timestamp = models.DateTimeField(auto_now_add=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    receipt_path = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text='Path to the generated receipt file'
    )

    class Meta:
        verbose_name = 'Transaction'
        verbose_name_plural = 'Transactions'
        ordering = ['-timestamp', '-id']
        indexes = [
            models.Index(fields=['sender', 'timestamp'], name='tx_sender_time_idx'),
            models.Index(fields=['receiver', 'timestamp'], name='tx_receiver_time_idx'),
            models.Index(fields=['kind', 'status'], name='tx_kind_status_idx'),
        ]

    def __str__(self) -> str:
        return (
            f"Transaction {self.transaction_id} ({self.kind}, {self.status}): "
            f"{self.sender.mobile_number} -> {self.receiver.mobile_number} "
            f"{self.amount} + fee {self.fee}"
        )

    @property
    def total(self) -> Decimal:
        return self.amount + self.fee
