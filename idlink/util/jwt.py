"""JWT session token utilities.

Tokens are issued by the platform's login flow. This service only needs
to verify them to learn which account is calling; create_token exists so
tests and local tooling can mint a session.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from idlink.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    account_id: str
    provider: str | None = None
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    account_id: str,
    settings: AuthSettings,
    provider: str | None = None,
    expires_in: timedelta = timedelta(days=30),
) -> str:
    """Create a JWT token for an account.

    Args:
        account_id: Account ID
        settings: Authentication settings
        provider: Provider the session was opened with
        expires_in: Token lifetime

    Returns:
        Encoded JWT token
    """
    payload = {
        "account_id": account_id,
        "provider": provider,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
