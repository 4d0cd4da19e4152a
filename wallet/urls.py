"""
URL configuration for the Wallet app.
"""

from django.urls import path
from .views import (
    HealthView,
    RegisterView,
    LoginView,
    SessionCheckView,
    LogoutView,
    VerifyUserView,
    AccountListView,
    AccountSearchView,
    AccountStatusView,
    ProfileUpdateView,
    SendMoneyView,
    CashOutRequestView,
    CashOutAcceptView,
    CashOutPendingView,
    CashInRequestView,
    CashInAcceptView,
    CashInPendingView,
    MyTransactionsView,
    AllTransactionsView,
)

app_name = 'wallet'

urlpatterns = [
    path('', HealthView.as_view(), name='health'),
    path('userRegister', RegisterView.as_view(), name='register'),
    path('userLogin', LoginView.as_view(), name='login'),
    path('userCheck', SessionCheckView.as_view(), name='user-check'),
    path('logout', LogoutView.as_view(), name='logout'),
    path('users', AccountListView.as_view(), name='users'),
    path('users/search', AccountSearchView.as_view(), name='user-search'),
    path('users/<int:account_id>/<str:action>', AccountStatusView.as_view(), name='user-status'),
    path('users/<str:email>', VerifyUserView.as_view(), name='verify-user'),
    path('profile-update', ProfileUpdateView.as_view(), name='profile-update'),
    path('send-money', SendMoneyView.as_view(), name='send-money'),
    path('cash-out-request', CashOutRequestView.as_view(), name='cash-out-request'),
    path('cash-out-accept', CashOutAcceptView.as_view(), name='cash-out-accept'),
    path('cash-out-request-transactions', CashOutPendingView.as_view(), name='cash-out-pending'),
    path('cash-in-request', CashInRequestView.as_view(), name='cash-in-request'),
    path('cash-in-accept', CashInAcceptView.as_view(), name='cash-in-accept'),
    path('cash-in-request-transactions', CashInPendingView.as_view(), name='cash-in-pending'),
    path('my-transactions', MyTransactionsView.as_view(), name='my-transactions'),
    path('all-transactions', AllTransactionsView.as_view(), name='all-transactions'),
]
