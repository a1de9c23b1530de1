"""
JWT helpers for issuing and verifying access tokens.
"""
from datetime import timedelta

import jwt
from django.conf import settings
from django.utils import timezone


def generate_token(user):
    """
    Issue a signed access token for a user.

    The payload carries the user id and role so role checks do not need an
    extra query before the user is loaded.
    """
    now = timezone.now()
    payload = {
        'id': user.id,
        'role': user.role,
        'iat': now,
        'exp': now + timedelta(hours=settings.JWT_ACCESS_TOKEN_LIFETIME_HOURS),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token):
    """
    Verify a token's signature and expiry and return its payload.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, expired or badly signed
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
        options={'require': ['id', 'exp']},
    )
