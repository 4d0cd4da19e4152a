"""
Business logic for the Wallet app.

Views stay thin: they validate input, call one function from this module
and serialize the result. Every function that moves money does so inside
a single atomic transaction with the involved account rows locked via
SELECT FOR UPDATE, always in ascending primary key order so that two
transfers in opposite directions cannot deadlock.
"""

import logging
import random
import string
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password
from django.db import IntegrityError, transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from .authentication import decode_token, issue_token
from .exceptions import (
    AccountBlocked,
    AccountNotActive,
    BelowMinimumAmount,
    DuplicateEmail,
    DuplicateMobile,
    Forbidden,
    InsufficientFunds,
    InvalidAmount,
    InvalidCredentials,
    ReceiverNotFound,
    SelfTransferNotAllowed,
    TransactionNotFound,
    UserNotFound,
    WalletError,
    WrongTransferChannel,
)
from .models import Account, Transaction

logger = logging.getLogger(__name__)

TRANSACTION_ID_ALPHABET = string.ascii_uppercase + string.digits
TRANSACTION_ID_LENGTH = 10

CENTS = Decimal('0.01')


def _rule(name):
    return settings.WALLET_RULES[name]


# Lookups

def find_account(identifier: str) -> Optional[Account]:
    """Return the account whose email or mobile number equals `identifier`."""
    if not identifier:
        return None
    return Account.objects.filter(
        Q(email=identifier.strip().lower()) | Q(mobile_number=identifier.strip())
    ).first()


def generate_transaction_id() -> str:
    """
    Return a transaction code that no stored transaction uses yet.

    Retries until a free code is drawn. With 36**10 codes the loop almost
    never runs twice, but it has no upper bound.
    """
    while True:
        candidate = ''.join(
            random.choices(TRANSACTION_ID_ALPHABET, k=TRANSACTION_ID_LENGTH)
        )
        if not Transaction.objects.filter(transaction_id=candidate).exists():
            return candidate


# Registration and sessions

def register_account(
    name: str,
    email: str,
    mobile_number: str,
    pin: str,
    role: str = Account.Role.USER,
    photo_url: str = '',
) -> Account:
    """
    Create a pending account with a zero balance.

    Raises:
        DuplicateEmail: If the email is already registered.
        DuplicateMobile: If the mobile number is already registered.
    """
    email = email.strip().lower()
    mobile_number = mobile_number.strip()

    if Account.objects.filter(email=email).exists():
        raise DuplicateEmail()
    if Account.objects.filter(mobile_number=mobile_number).exists():
        raise DuplicateMobile()

    try:
        with transaction.atomic():
            account = Account.objects.create(
                name=name,
                photo_url=photo_url or '',
                email=email,
                mobile_number=mobile_number,
                pin=make_password(pin),
                role=role,
            )
    except IntegrityError:
        # Lost a race against a concurrent registration.
        if Account.objects.filter(email=email).exists():
            raise DuplicateEmail()
        raise DuplicateMobile()

    logger.info('Registered %s account %s (%s)', account.role, account.pk, account.mobile_number)
    return account


def login(email_or_mobile: str, pin: str):
    """
    Check the PIN and issue a token.

    A blocked account is refused even when the PIN is correct.

    Returns:
        (account, token) tuple.
    """
    account = find_account(email_or_mobile)
    if account is None:
        logger.warning('Login attempt for unknown identifier %r', email_or_mobile)
        raise InvalidCredentials()
    if account.status == Account.Status.BLOCKED:
        logger.warning('Login attempt for blocked account %s', account.pk)
        raise AccountBlocked()
    if not check_password(pin, account.pin):
        logger.warning('Wrong PIN for account %s', account.pk)
        raise InvalidCredentials()

    account.last_login_at = timezone.now()
    account.save(update_fields=['last_login_at'])
    return account, issue_token(account)


def check_session(token: str) -> Account:
    """Validate a token and return the live account it belongs to."""
    claims = decode_token(token)
    account = Account.objects.filter(
        Q(mobile_number=claims.get('mobile_number')) | Q(email=claims.get('email'))
    ).first()
    if account is None:
        raise UserNotFound()
    if account.status == Account.Status.BLOCKED:
        raise AccountBlocked()
    return account


def update_profile(account: Account, **changes) -> Account:
    """Update the editable profile fields (name, photo_url) that were given."""
    fields = [name for name in ('name', 'photo_url') if name in changes]
    for name in fields:
        setattr(account, name, changes[name])
    if fields:
        account.save(update_fields=fields)
    return account


# Fees

def send_money_fee(amount: Decimal) -> Decimal:
    if amount > _rule('SEND_MONEY_FEE_THRESHOLD'):
        return _rule('SEND_MONEY_FEE')
    return Decimal('0.00')


def cash_out_fee(amount: Decimal) -> Decimal:
    return (amount * _rule('CASH_OUT_FEE_RATE')).quantize(CENTS, rounding=ROUND_HALF_UP)


# Transfer helpers

def _to_amount(value) -> Decimal:
    amount = Decimal(str(value))
    if amount <= 0:
        raise InvalidAmount()
    return amount


def _ensure_active(account: Account) -> None:
    if account.status == Account.Status.BLOCKED:
        raise AccountBlocked()
    if account.status != Account.Status.ACTIVE:
        raise AccountNotActive()


def _verify_pin(account: Account, pin: str) -> None:
    if not check_password(pin, account.pin):
        raise InvalidCredentials('Invalid PIN')


def _find_counterparty(identifier: str) -> Account:
    account = find_account(identifier)
    if account is None:
        raise ReceiverNotFound()
    return account


def _check_agent_channel(account: Account, label: str) -> None:
    if account.role == Account.Role.USER:
        raise WrongTransferChannel(f'{label} is only possible through an agent')
    if account.role == Account.Role.ADMIN:
        raise WrongTransferChannel(f'{label} with an admin is not allowed')


def _lock_accounts(*account_ids) -> dict:
    """Lock the given account rows in ascending id order. Must run inside atomic()."""
    locked = Account.objects.select_for_update().filter(
        pk__in=sorted(set(account_ids))
    ).order_by('pk')
    return {account.pk: account for account in locked}


def _record(kind, sender, receiver, amount, fee=Decimal('0.00'),
            status=Transaction.Status.COMPLETED) -> Transaction:
    completed = status == Transaction.Status.COMPLETED
    return Transaction.objects.create(
        transaction_id=generate_transaction_id(),
        sender=sender,
        receiver=receiver,
        amount=amount,
        fee=fee,
        kind=kind,
        status=status,
        completed_at=timezone.now() if completed else None,
    )


# Transfers

def send_money(sender: Account, receiver_identifier: str, pin: str, amount) -> Transaction:
    """
    Move `amount` from sender to a plain user, charging the send fee.

    The sender is debited amount + fee, the receiver credited amount.
    Agents cannot be sent to directly; they are reached through cash out.
    """
    amount = _to_amount(amount)
    _ensure_active(sender)
    receiver = _find_counterparty(receiver_identifier)
    _verify_pin(sender, pin)

    if receiver.pk == sender.pk:
        raise SelfTransferNotAllowed()
    if receiver.role == Account.Role.AGENT:
        raise WrongTransferChannel('Use cash out to send money to an agent')

    minimum = _rule('MIN_SEND_AMOUNT')
    if amount < minimum:
        raise BelowMinimumAmount(f'Minimum amount to send is {minimum}')

    fee = send_money_fee(amount)
    with transaction.atomic():
        locked = _lock_accounts(sender.pk, receiver.pk)
        payer = locked[sender.pk]
        payee = locked[receiver.pk]

        if payer.balance < amount + fee:
            raise InsufficientFunds()

        payer.balance -= amount + fee
        payee.balance += amount
        payer.save(update_fields=['balance'])
        payee.save(update_fields=['balance'])

        record = _record(Transaction.Kind.SEND_MONEY, payer, payee, amount, fee)

    sender.balance = payer.balance
    logger.info(
        'Send money %s: %s -> %s amount=%s fee=%s',
        record.transaction_id, payer.mobile_number, payee.mobile_number, amount, fee
    )
    return record


def cash_out_request(sender: Account, agent_identifier: str, pin: str, amount) -> Transaction:
    """
    Record a pending cash out towards an agent.

    Funds are only checked here; they move when the agent accepts.
    """
    amount = _to_amount(amount)
    _ensure_active(sender)
    agent = _find_counterparty(agent_identifier)
    _verify_pin(sender, pin)

    if agent.pk == sender.pk:
        raise SelfTransferNotAllowed()
    _check_agent_channel(agent, 'Cash out')

    fee = cash_out_fee(amount)
    if sender.balance < amount + fee:
        raise InsufficientFunds()

    record = _record(
        Transaction.Kind.CASH_OUT, sender, agent, amount, fee,
        status=Transaction.Status.PENDING,
    )
    logger.info('Cash out requested %s: %s -> %s', record.transaction_id,
                sender.mobile_number, agent.mobile_number)
    return record


def cash_in_request(customer: Account, agent_identifier: str, pin: str, amount) -> Transaction:
    """
    Record a pending cash in from an agent.

    The agent is the paying side, so the ledger names the agent as sender
    and the requesting customer as receiver. No fee applies.
    """
    amount = _to_amount(amount)
    _ensure_active(customer)
    agent = _find_counterparty(agent_identifier)
    _verify_pin(customer, pin)

    if agent.pk == customer.pk:
        raise SelfTransferNotAllowed()
    _check_agent_channel(agent, 'Cash in')

    if agent.balance < amount:
        raise InsufficientFunds('Agent has insufficient funds')

    record = _record(
        Transaction.Kind.CASH_IN, agent, customer, amount,
        status=Transaction.Status.PENDING,
    )
    logger.info('Cash in requested %s: %s -> %s', record.transaction_id,
                agent.mobile_number, customer.mobile_number)
    return record


def pending_requests(agent: Account, kind: str) -> QuerySet:
    """
    Pending requests waiting for `agent` to accept.

    Cash out requests name the agent as receiver, cash in requests as sender.
    """
    qs = Transaction.objects.filter(
        kind=kind, status=Transaction.Status.PENDING
    ).select_related('sender', 'receiver')
    if kind == Transaction.Kind.CASH_OUT:
        return qs.filter(receiver=agent)
    return qs.filter(sender=agent)


def _accept(acceptor: Account, transaction_id: str, kind: str) -> Transaction:
    _ensure_active(acceptor)
    with transaction.atomic():
        try:
            record = Transaction.objects.select_for_update().get(
                transaction_id=transaction_id,
                kind=kind,
                status=Transaction.Status.PENDING,
            )
        except Transaction.DoesNotExist:
            raise TransactionNotFound()

        agent_id = record.receiver_id if kind == Transaction.Kind.CASH_OUT else record.sender_id
        if acceptor.pk != agent_id and not acceptor.is_admin:
            raise Forbidden('Only the requested agent can accept this transaction')

        locked = _lock_accounts(record.sender_id, record.receiver_id)
        payer = locked[record.sender_id]
        payee = locked[record.receiver_id]

        total = record.total
        if payer.balance < total:
            raise InsufficientFunds()

        payer.balance -= total
        payee.balance += total
        payer.save(update_fields=['balance'])
        payee.save(update_fields=['balance'])

        record.status = Transaction.Status.COMPLETED
        record.completed_at = timezone.now()
        record.save(update_fields=['status', 'completed_at'])

    logger.info('%s %s accepted by %s', kind, record.transaction_id, acceptor.pk)
    return record


def cash_out_accept(acceptor: Account, transaction_id: str):
    """
    Complete a pending cash out.

    Returns:
        (completed transaction, acceptor's remaining pending cash outs)
    """
    record = _accept(acceptor, transaction_id, Transaction.Kind.CASH_OUT)
    return record, pending_requests(acceptor, Transaction.Kind.CASH_OUT)


def cash_in_accept(acceptor: Account, transaction_id: str):
    """
    Complete a pending cash in.

    Returns:
        (completed transaction, acceptor's remaining pending cash ins)
    """
    record = _accept(acceptor, transaction_id, Transaction.Kind.CASH_IN)
    return record, pending_requests(acceptor, Transaction.Kind.CASH_IN)


# Administration

def grant_activation_bonus(admin: Account, account: Account) -> Optional[Transaction]:
    """
    Credit the one-time activation bonus for the account's role.

    Expects `account` to be locked by the caller's atomic block.
    """
    amount = _rule('ACTIVATION_BONUS').get(account.role)
    if not amount:
        return None

    account.balance += amount
    account.save(update_fields=['balance'])
    record = _record(Transaction.Kind.BONUS, admin, account, amount)
    logger.info('Bonus %s of %s granted to %s', record.transaction_id, amount, account.pk)
    return record


def set_account_status(admin: Account, account_id, action: str):
    """
    Activate or block an account.

    Activating a pending account pays the activation bonus in the same
    transaction; re-activating a blocked account does not.

    Returns:
        (account, bonus transaction or None)
    """
    if action not in ('activate', 'block'):
        raise WalletError(f'Unknown action {action!r}')
    if not admin.is_admin:
        raise Forbidden()
    _ensure_active(admin)

    with transaction.atomic():
        try:
            account = Account.objects.select_for_update().get(pk=account_id)
        except (Account.DoesNotExist, ValueError):
            raise UserNotFound()

        bonus = None
        if action == 'activate':
            if account.status == Account.Status.PENDING:
                bonus = grant_activation_bonus(admin, account)
            account.status = Account.Status.ACTIVE
        else:
            if account.pk == admin.pk:
                raise Forbidden('Admins cannot block themselves')
            account.status = Account.Status.BLOCKED
        account.save(update_fields=['status'])

    logger.info('Account %s set to %s by admin %s', account.pk, account.status, admin.pk)
    return account, bonus


def transactions_for(account: Account, kind: Optional[str] = None,
                     status: Optional[str] = None) -> QuerySet:
    """
    Transactions where `account` is sender or receiver, newest first.

    `kind` and `status` narrow the result when given.
    """
    qs =Transaction.objects.filter(
        Q(sender=account) | Q(receiver=account)
    ).select_related('sender', 'receiver')
    if kind:
        qs = qs.filter(kind=kind)
    if status:
        qs = qs.filter(status=status)
    return qs


def all_transactions() -> QuerySet:
    """The whole ledger, newest first."""
    return Transaction.objects.select_related('sender', 'receiver')


def search_accounts(name: str) -> QuerySet:
    """Accounts whose name contains `name`, case-insensitively."""
    return Account.objects.filter(name__icontains=name or '')
