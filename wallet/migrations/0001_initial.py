import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Account',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=150)),
                ('photo_url', models.URLField(blank=True, default='', max_length=500)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('mobile_number', models.CharField(max_length=20, unique=True)),
                ('pin', models.CharField(help_text='Hashed PIN, never the plaintext', max_length=128)),
                ('balance', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Current wallet balance (must be >= 0.00)', max_digits=19, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('active', 'Active'), ('blocked', 'Blocked')], default='pending', max_length=10)),
                ('role', models.CharField(choices=[('user', 'User'), ('agent', 'Agent'), ('admin', 'Admin')], default='user', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('last_login_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Account',
                'verbose_name_plural': 'Accounts',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['role'], name='account_role_idx'), models.Index(fields=['name'], name='account_name_idx')],
                'constraints': [models.CheckConstraint(condition=models.Q(('balance__gte', 0)), name='account_balance_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='Transaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('transaction_id', models.CharField(help_text='Public alphanumeric transaction code', max_length=10, unique=True)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=19, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('fee', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=19, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('kind', models.CharField(choices=[('Send Money', 'Send Money'), ('Cash In', 'Cash In'), ('Cash Out', 'Cash Out'), ('Bonus', 'Bonus')], max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('completed', 'Completed')], default='pending', max_length=10)),
                ('timestamp', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('receipt_path', models.CharField(blank=True, default='', help_text='Path to the generated receipt file', max_length=255)),
                ('receiver', models.ForeignKey(help_text='Account the money arrives in', on_delete=django.db.models.deletion.PROTECT, related_name='received_transactions', to='wallet.account')),
                ('sender', models.ForeignKey(help_text='Account the money leaves', on_delete=django.db.models.deletion.PROTECT, related_name='sent_transactions', to='wallet.account')),
            ],
            options={
                'verbose_name': 'Transaction',
                'verbose_name_plural': 'Transactions',
                'ordering': ['-timestamp', '-id'],
                'indexes': [models.Index(fields=['sender', 'timestamp'], name='tx_sender_time_idx'), models.Index(fields=['receiver', 'timestamp'], name='tx_receiver_time_idx'), models.Index(fields=['kind', 'status'], name='tx_kind_status_idx')],
            },
        ),
    ]
