"""
API Views for the Wallet app.

Views validate input, delegate to wallet.services and serialize the
result. Business rule violations surface as WalletError subclasses and
are rendered by wallet.handlers.wallet_exception_handler.
"""

from rest_framework import status
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated

from . import services
from .models import Account, Transaction
from .permissions import IsAdminRole
from .serializers import (
    AcceptSerializer,
    AccountSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RegisterSerializer,
    TokenSerializer,
    TransactionSerializer,
    TransferSerializer,
)
from .tasks import generate_transaction_receipt


def _dispatch_receipt(record: Transaction) -> None:
    generate_transaction_receipt.delay(record.pk)


class HealthView(APIView):
    """GET / - liveness check."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({'message': 'Server is running...'})


class RegisterView(APIView):
    """
    POST /userRegister

    Create a pending account. An admin must activate it before it can
    move money.

    Returns:
        - 201: Account created
        - 400: Validation error, duplicate email or mobile number
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = services.register_account(**serializer.validated_data)
        return Response(
            {'message': 'Registration successful', 'id': account.pk},
            status=status.HTTP_201_CREATED
        )


class LoginView(APIView):
    """
    POST /userLogin

    Exchange email-or-mobile plus PIN for a bearer token valid for one hour.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        _, token = services.login(
            serializer.validated_data['email_or_mobile'],
            serializer.validated_data['pin'],
        )
        return Response({'token': token})


class SessionCheckView(APIView):
    """
    POST /userCheck

    Validate the token sent in the body and return the live account.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = TokenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = services.check_session(serializer.validated_data['token'])
        return Response(AccountSerializer(account).data)


class LogoutView(APIView):
    """POST /logout - tokens are stateless, the client just drops it."""

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        return Response({'success': True})


class VerifyUserView(APIView):
    """
    GET /users/<email>

    Tell the caller whether their own email is registered.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request, email):
        if request.user.email != email.lower():
            return Response(
                {'error': 'forbidden access'},
                status=status.HTTP_403_FORBIDDEN
            )
        exists = Account.objects.filter(email=request.user.email).exists()
        return Response({'verifyUser': exists})


class AccountListView(APIView):
    """GET /users - all accounts (admin only)."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        accounts = Account.objects.all()
        return Response(AccountSerializer(accounts, many=True).data)


class AccountSearchView(APIView):
    """GET /users/search?name= - case-insensitive name search (admin only)."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        accounts = services.search_accounts(request.query_params.get('name', ''))
        return Response(AccountSerializer(accounts, many=True).data)


class AccountStatusView(APIView):
    """
    PUT /users/<account_id>/<action>

    Activate or block an account (admin only). Activating a pending
    account also pays its activation bonus.
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def put(self, request, account_id, action):
        account, bonus = services.set_account_status(request.user, account_id, action)
        if bonus is not None:
            _dispatch_receipt(bonus)

        return Response({
            'message': f'Account {account.status}',
            'account': AccountSerializer(account).data,
            'bonus': TransactionSerializer(bonus).data if bonus else None,
        })


class ProfileUpdateView(APIView):
    """POST /profile-update - change name or photo of the caller."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        account = services.update_profile(request.user, **serializer.validated_data)
        return Response(AccountSerializer(account).data)


class SendMoneyView(APIView):
    """
    POST /send-money

    Send money from the authenticated account to a plain user.

    Request body:
        - counterparty (str): receiver email or mobile number
        - pin (str): sender PIN
        - amount (decimal): at least 50; a fee of 5 applies above 100

    Returns:
        - 200: Transfer successful
        - 400: Rule violation (self transfer, agent receiver, minimum,
          insufficient funds, wrong PIN)
        - 401: Authentication required
        - 404: Receiver not found
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = services.send_money(
            request.user, data['counterparty'], data['pin'], data['amount']
        )
        _dispatch_receipt(record)

        return Response({
            'message': 'Send money successful',
            'transaction': TransactionSerializer(record).data,
            'balance': request.user.balance,
        })


class CashOutRequestView(APIView):
    """
    POST /cash-out-request

    Ask an agent to pay out cash. Nothing is debited until the agent
    accepts; the 1.5% fee is checked against the balance now.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = services.cash_out_request(
            request.user, data['counterparty'], data['pin'], data['amount']
        )
        return Response(
            {'message': 'Cash out request sent', 'transaction': TransactionSerializer(record).data},
            status=status.HTTP_201_CREATED
        )


class CashOutAcceptView(APIView):
    """
    POST /cash-out-accept

    The agent named in a pending cash out (or an admin) completes it.
    Responds with the agent's remaining pending cash out requests.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AcceptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record, pending = services.cash_out_accept(
            request.user, serializer.validated_data['transaction_id']
        )
        _dispatch_receipt(record)
        return Response(TransactionSerializer(pending, many=True).data)


class CashOutPendingView(APIView):
    """GET /cash-out-request-transactions - cash outs waiting for the caller."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        pending = services.pending_requests(request.user, Transaction.Kind.CASH_OUT)
        return Response(TransactionSerializer(pending, many=True).data)


class CashInRequestView(APIView):
    """
    POST /cash-in-request

    Ask an agent to load the caller's wallet. The agent appears as the
    sender of the resulting ledger entry.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = TransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        record = services.cash_in_request(
            request.user, data['counterparty'], data['pin'], data['amount']
        )
        return Response(
            {'message': 'Cash in request sent', 'transaction': TransactionSerializer(record).data},
            status=status.HTTP_201_CREATED
        )


class CashInAcceptView(APIView):
    """
    POST /cash-in-accept

    The agent named in a pending cash in (or an admin) completes it.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AcceptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        record, pending = services.cash_in_accept(
            request.user, serializer.validated_data['transaction_id']
        )
        _dispatch_receipt(record)
        return Response(TransactionSerializer(pending, many=True).data)


class CashInPendingView(APIView):
    """GET /cash-in-request-transactions - cash ins waiting for the caller."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        pending = services.pending_requests(request.user, Transaction.Kind.CASH_IN)
        return Response(TransactionSerializer(pending, many=True).data)


class MyTransactionsView(APIView):
    """
    GET /my-transactions?type=&status=

    Transactions where the caller is sender or receiver, newest first.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        transactions = services.transactions_for(
            request.user,
            kind=request.query_params.get('type'),
            status=request.query_params.get('status'),
        )
        return Response(TransactionSerializer(transactions, many=True).data)


class AllTransactionsView(APIView):
    """GET /all-transactions - the whole ledger (admin only)."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        transactions = services.all_transactions()
        return Response(TransactionSerializer(transactions, many=True).data)
