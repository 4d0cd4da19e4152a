"""
Celery tasks for the Wallet app.

This module contains background tasks triggered after a transaction
completes.
"""

import logging
import os
from datetime import datetime
from celery import shared_task
from django.conf import settings
from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def generate_transaction_receipt(self, pk: int) -> str:
    """
    Generate a PDF receipt for a completed transaction.

    The receipt is saved to media/receipts/{transaction_id}_{timestamp}.pdf

    Args:
        pk: Primary key of the Transaction to generate a receipt for.

    Returns:
        The path to the generated receipt file, or '' when the transaction
        is missing or still pending.
    """
    # Import here to avoid circular imports
    from wallet.models import Transaction

    try:
        transaction = Transaction.objects.select_related(
            'sender', 'receiver'
        ).get(pk=pk)
    except Transaction.DoesNotExist:
        return ''

    if transaction.status != Transaction.Status.COMPLETED:
        logger.warning('Skipping receipt for pending transaction %s', transaction.transaction_id)
        return ''

    receipts_dir = os.path.join(settings.MEDIA_ROOT, 'receipts')
    os.makedirs(receipts_dir, exist_ok=True)

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    filename = f"receipt_{transaction.transaction_id}_{timestamp}.pdf"
    filepath = os.path.join(receipts_dir, filename)
    relative_path = f"receipts/{filename}"

    c = canvas.Canvas(filepath, pagesize=letter)
    width, height = letter

    # Header
    c.setFont("Helvetica-Bold", 24)
    c.drawCentredString(width / 2, height - 1 * inch, f"{transaction.kind} Receipt")

    c.setLineWidth(2)
    c.line(1 * inch, height - 1.3 * inch, width - 1 * inch, height - 1.3 * inch)

    c.setFont("Helvetica", 12)
    y_position = height - 2 * inch
    line_height = 0.4 * inch

    completed_at = transaction.completed_at or transaction.timestamp
    details = [
        ("Transaction ID:", transaction.transaction_id),
        ("Type:", transaction.kind),
        ("Date & Time:", completed_at.strftime('%Y-%m-%d %H:%M:%S UTC')),
        ("", ""),
        ("From:", f"{transaction.sender.name} ({transaction.sender.mobile_number})"),
        ("To:", f"{transaction.receiver.name} ({transaction.receiver.mobile_number})"),
        ("", ""),
        ("Amount:", f"{transaction.amount:,.2f}"),
        ("Fee:", f"{transaction.fee:,.2f}"),
        ("Total:", f"{transaction.total:,.2f}"),
    ]

    for label, value in details:
        if label:
            c.setFont("Helvetica-Bold", 12)
            c.drawString(1.5 * inch, y_position, label)
            c.setFont("Helvetica", 12)
            c.drawString(3.5 * inch, y_position, value)
        y_position -= line_height

    # Footer
    c.setFont("Helvetica-Oblique", 10)
    c.drawCentredString(
        width / 2,
        1 * inch,
        "This is an automatically generated receipt. Please keep for your records."
    )

    c.save()

    transaction.receipt_path = relative_path
    transaction.save(update_fields=['receipt_path'])

    logger.info('Receipt for %s written to %s', transaction.transaction_id, relative_path)
    return relative_path
