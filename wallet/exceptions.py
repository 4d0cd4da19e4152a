"""
Error types for the Wallet app.

Every business rule violation raised by the services is a WalletError,
which DRF renders with the status code carried by the class.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class WalletError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request could not be processed'
    default_code = 'wallet_error'


class Unauthenticated(WalletError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized access'
    default_code = 'unauthenticated'


class Forbidden(WalletError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden access'
    default_code = 'forbidden'


class DuplicateEmail(WalletError):
    default_detail = 'Email already exists'
    default_code = 'duplicate_email'


class DuplicateMobile(WalletError):
    default_detail = 'Mobile number already exists'
    default_code = 'duplicate_mobile'


class InvalidCredentials(WalletError):
    default_detail = 'Invalid credentials'
    default_code = 'invalid_credentials'


class AccountBlocked(WalletError):
    default_detail = 'Account is blocked'
    default_code = 'account_blocked'


class AccountNotActive(WalletError):
    default_detail = 'Account is not active yet'
    default_code = 'account_not_active'


class SelfTransferNotAllowed(WalletError):
    default_detail = 'Cannot transfer to yourself'
    default_code = 'self_transfer'


class WrongTransferChannel(WalletError):
    default_detail = 'This transfer is not allowed for the receiver'
    default_code = 'wrong_transfer_channel'


class InvalidAmount(WalletError):
    default_detail = 'Amount must be greater than zero'
    default_code = 'invalid_amount'


class BelowMinimumAmount(WalletError):
    default_detail = 'Amount is below the minimum'
    default_code = 'below_minimum_amount'


class InsufficientFunds(WalletError):
    default_detail = 'Insufficient funds'
    default_code = 'insufficient_funds'


class UserNotFound(WalletError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'User not found'
    default_code = 'user_not_found'


class ReceiverNotFound(UserNotFound):
    default_detail = 'Receiver not found'
    default_code = 'receiver_not_found'


class TransactionNotFound(WalletError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Transaction not found'
    default_code = 'transaction_not_found'
