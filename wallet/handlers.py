"""
DRF exception handler for the Wallet app.

Kept apart from wallet.exceptions: the authentication class imports the
error types while rest_framework.views is still loading.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def wallet_exception_handler(exc, context):
    """
    Render API errors as {"error": ...}.

    Store failures that escape a view become a 500 instead of leaking the
    driver message.
    """
    if isinstance(exc, DatabaseError):
        logger.exception('Store failure in %s', context.get('view').__class__.__name__)
        return Response(
            {'error': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data) == {'detail'}:
        data = data['detail']
    response.data = {'error': data}
    return response
