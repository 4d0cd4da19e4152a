"""
Bearer token authentication for the Wallet app.

Tokens are HS256 JWTs carrying the public identity of an account. The
account itself is re-read from the database on every request so that
role and status changes made after login take effect immediately.
"""

from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings
from rest_framework import authentication

from .exceptions import Unauthenticated
from .models import Account

ALGORITHM = 'HS256'


def issue_token(account: Account) -> str:
    """Sign a token with the account's public identity claims."""
    now = datetime.now(tz=timezone.utc)
    payload = {
        'name': account.name,
        'email': account.email,
        'mobile_number': account.mobile_number,
        'role': account.role,
        'iat': now,
        'exp': now + timedelta(seconds=settings.JWT_ACCESS_TOKEN_LIFETIME),
    }
    return jwt.encode(payload, settings.JWT_ACCESS_TOKEN_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Verify signature and expiry and return the claims.

    Raises:
        Unauthenticated: If the token is malformed, expired, or carries
            no identity.
    """
    if not token:
        raise Unauthenticated()
    try:
        claims = jwt.decode(
            token,
            settings.JWT_ACCESS_TOKEN_SECRET,
            algorithms=[ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise Unauthenticated('Token has expired')
    except jwt.InvalidTokenError:
        raise Unauthenticated()

    if not claims.get('email') and not claims.get('mobile_number'):
        raise Unauthenticated()
    return claims


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """
    Authenticate requests carrying `Authorization: Bearer <token>`.

    Requests without the header stay anonymous; the view's permission
    classes then answer 401.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = authentication.get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None
        if len(auth) != 2:
            raise Unauthenticated()

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise Unauthenticated()

        claims = decode_token(token)
        if claims.get('email'):
            lookup = {'email': claims['email']}
        else:
            lookup = {'mobile_number': claims['mobile_number']}
        try:
            account = Account.objects.get(**lookup)
        except Account.DoesNotExist:
            raise Unauthenticated()
        return account, claims

    def authenticate_header(self, request):
        return self.keyword
