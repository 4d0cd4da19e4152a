"""
Management command to populate dummy data for testing.

Creates an admin, agents and users with balances and a few sample
transactions.
"""

from decimal import Decimal
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from wallet.models import Account, Transaction
from wallet.services import generate_transaction_id

DEFAULT_PIN = '12345'


class Command(BaseCommand):
    help = 'Populate the database with dummy accounts and transactions for testing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            Transaction.objects.all().delete()
            Account.objects.all().delete()
            self.stdout.write(self.style.SUCCESS('Cleared existing data'))

        self.stdout.write('Creating dummy data...')

        accounts_data = [
            {'name': 'Admin', 'email': 'admin@pcash.dev', 'mobile_number': '01700000000', 'role': 'admin', 'balance': '0.00'},
            {'name': 'Agent Rahim', 'email': 'rahim@pcash.dev', 'mobile_number': '01711111111', 'role': 'agent', 'balance': '10000.00'},
            {'name': 'Agent Karim', 'email': 'karim@pcash.dev', 'mobile_number': '01722222222', 'role': 'agent', 'balance': '10000.00'},
            {'name': 'Alice', 'email': 'alice@pcash.dev', 'mobile_number': '01833333333', 'role': 'user', 'balance': '1000.00'},
            {'name': 'Bob', 'email': 'bob@pcash.dev', 'mobile_number': '01844444444', 'role': 'user', 'balance': '500.00'},
            {'name': 'Charlie', 'email': 'charlie@pcash.dev', 'mobile_number': '01855555555', 'role': 'user', 'balance': '40.00'},
        ]

        accounts = {}
        for data in accounts_data:
            account, created = Account.objects.get_or_create(
                email=data['email'],
                defaults={
                    'name': data['name'],
                    'mobile_number': data['mobile_number'],
                    'role': data['role'],
                    'pin': make_password(DEFAULT_PIN),
                    'status': Account.Status.ACTIVE,
                },
            )
            account.balance = Decimal(data['balance'])
            account.save(update_fields=['balance'])
            accounts[data['mobile_number']] = account

            verb = 'Created' if created else 'Exists '
            self.stdout.write(f"  {verb} {account.role:<6} {account.name:<12} balance {account.balance}")

        self.stdout.write('\nCreating sample transactions...')

        sample_transactions = [
            ('01833333333', '01844444444', '200.00', '5.00', Transaction.Kind.SEND_MONEY, Transaction.Status.COMPLETED),
            ('01844444444', '01833333333', '60.00', '0.00', Transaction.Kind.SEND_MONEY, Transaction.Status.COMPLETED),
            ('01833333333', '01711111111', '100.00', '1.50', Transaction.Kind.CASH_OUT, Transaction.Status.PENDING),
            ('01722222222', '01844444444', '300.00', '0.00', Transaction.Kind.CASH_IN, Transaction.Status.PENDING),
        ]

        for sender, receiver, amount, fee, kind, status in sample_transactions:
            record = Transaction.objects.create(
                transaction_id=generate_transaction_id(),
                sender=accounts[sender],
                receiver=accounts[receiver],
                amount=Decimal(amount),
                fee=Decimal(fee),
                kind=kind,
                status=status,
                completed_at=timezone.now() if status == Transaction.Status.COMPLETED else None,
            )
            self.stdout.write(
                f"  {record.transaction_id} {kind:<10} {sender} -> {receiver}: {amount} ({status})"
            )

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS('=' * 50))
        self.stdout.write(self.style.SUCCESS('Dummy data created successfully!'))
        self.stdout.write(self.style.SUCCESS('=' * 50))
        self.stdout.write('')
        self.stdout.write(f'Test credentials (all use PIN: {DEFAULT_PIN}):')
        self.stdout.write('')
        self.stdout.write('  Mobile         Role     Balance')
        self.stdout.write('  -----------    ------   --------')
        for data in accounts_data:
            self.stdout.write(f"  {data['mobile_number']:<14} {data['role']:<8} {data['balance']}")
        self.stdout.write('')
