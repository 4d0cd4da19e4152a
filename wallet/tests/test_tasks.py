"""
Tests for the receipt generation task.
"""

import os
import shutil
import tempfile
from decimal import Decimal
from django.test import TestCase, override_settings

from wallet import services
from wallet.models import Transaction
from wallet.tasks import generate_transaction_receipt
from wallet.tests.utils import FAST_HASHERS, PIN, make_account


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class ReceiptTaskTest(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)
        settings_patch = override_settings(MEDIA_ROOT=self.media_root)
        settings_patch.enable()
        self.addCleanup(settings_patch.disable)

        self.sender = make_account('Sender', '01811111111', balance='500.00')
        self.receiver = make_account('Receiver', '01822222222')
        self.agent = make_account('Agent', '01733333333', role='agent')

    def test_receipt_written_for_completed_transaction(self):
        record = services.send_money(self.sender, '01822222222', PIN, Decimal('150.00'))

        path = generate_transaction_receipt(record.pk)

        self.assertTrue(path.startswith('receipts/receipt_' + record.transaction_id))
        self.assertTrue(os.path.exists(os.path.join(self.media_root, path)))
        record.refresh_from_db()
        self.assertEqual(record.receipt_path, path)

    def test_pending_transaction_skipped(self):
        record = services.cash_out_request(self.sender, '01733333333', PIN, Decimal('100.00'))

        self.assertEqual(generate_transaction_receipt(record.pk), '')
        record.refresh_from_db()
        self.assertEqual(record.receipt_path, '')

    def test_missing_transaction(self):
        self.assertEqual(generate_transaction_receipt(999999), '')
        self.assertFalse(Transaction.objects.exists())
