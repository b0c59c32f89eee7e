"""Session cookie authentication for routes."""

from fastapi import HTTPException, status

from idlink.domain.service import JWTService
from idlink.util.jwt import JWTError

AUTH_COOKIE = "auth_token"


def require_account_id(auth_token: str | None, jwt_service: JWTService) -> str:
    """Resolve the authenticated account id from the session cookie.

    Args:
        auth_token: JWT from the auth_token cookie
        jwt_service: JWT service from DI

    Returns:
        Account id carried by the token

    Raises:
        HTTPException: 401 if the cookie is missing or the token is invalid
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        payload = jwt_service.verify_token(auth_token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e

    return payload.account_id
