"""Domain layer errors.

Four families are kept apart so callers can map them to distinct outcomes:

- ValidationError: bad or missing input from the user (4xx).
- ConfigurationError: the deployment is missing provider settings (5xx).
- DecodeError: a link state token that is malformed, forged or expired.
- SignerError: the external signer is absent, incapable or refused.
"""

from typing import Any


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class UnsupportedProviderError(ValidationError):
    """Raised when linking is requested for a provider outside the allow-list."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")


class MissingIdentityError(ValidationError):
    """Raised when a Nostr profile update is attempted without a Nostr key."""

    def __init__(self, message: str = "Missing Nostr public key"):
        super().__init__(message)


class PreferencesValidationError(ValidationError):
    """Raised when an account preferences payload fails validation."""

    def __init__(self, message: str, details: list[dict[str, Any]] | None = None):
        self.details = details or []
        super().__init__(message)


class ProviderNotLinkedError(ValidationError):
    """Raised when a preference names a provider the account has not linked."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"Provider not linked to account: {provider}")


class ConfigurationError(DomainError):
    """Deployment configuration error. Fatal for the affected provider."""

    pass


class ConfigurationMissingError(ConfigurationError):
    """Raised when required provider configuration is absent."""

    def __init__(self, provider: str, setting: str):
        self.provider = provider
        self.setting = setting
        super().__init__(f"{provider} OAuth is not configured: missing {setting}")


class DecodeError(DomainError):
    """Base error for link state tokens that cannot be trusted."""

    pass


class MalformedTokenError(DecodeError):
    """Raised when a state token is not valid base64-encoded JSON."""

    pass


class UnknownFieldError(DecodeError):
    """Raised when a state token lacks required fields."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        super().__init__(f"State token missing required fields: {', '.join(fields)}")


class LinkStateMismatchError(DecodeError):
    """Raised when a state token was issued for a different account."""

    def __init__(self) -> None:
        super().__init__("Link state does not match the authenticated session")


class SignerError(DomainError):
    """Base error for delegated signing failures."""

    pass


class SignerUnavailableError(SignerError):
    """Raised when no signer capability is present."""

    def __init__(
        self, message: str = "Connect a Nostr (NIP-07) signer to publish profile changes"
    ):
        super().__init__(message)


class SignerCapabilityMissingError(SignerError):
    """Raised when the signer present does not expose a signing operation."""

    def __init__(self, message: str = "Nostr signer does not support signing events"):
        super().__init__(message)


class SigningRejectedError(SignerError):
    """Raised when the signer rejects the request or fails while signing."""

    pass


class SigningTimeoutError(SignerError):
    """Raised when the signer does not answer within the allowed time."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Signer did not respond within {timeout:g} seconds")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
