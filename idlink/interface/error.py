"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import HTTPException, status

from idlink.domain.error import (
    ConfigurationError,
    DecodeError,
    DomainError,
    NotFoundError,
    PreferencesValidationError,
    SignerError,
    ValidationError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP response the API returns for it.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, PreferencesValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(error), "errors": error.details},
        )
    if isinstance(error, (ValidationError, DecodeError)):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConfigurationError):
        logfire.error("Provider configuration missing", error=str(error))
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server configuration error: {error}",
        )
    if isinstance(error, SignerError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        )
    logfire.error("Unhandled domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )
