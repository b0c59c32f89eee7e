"""Initiate account link use case."""

from pydantic import BaseModel

from idlink.config import Settings
from idlink.domain.service import AccountLinkService
from idlink.domain.value import AccountId


class InitiateLinkRequest(BaseModel):
    """Initiate link request."""

    account_id: str  # From authenticated session
    provider: str  # Requested provider, validated by the link service


class InitiateLinkResponse(BaseModel):
    """Initiate link response."""

    authorization_url: str


class InitiateLinkUseCase:
    """Use case for starting the OAuth flow that links another identity."""

    def __init__(self, link_service: AccountLinkService, settings: Settings) -> None:
        """Initialize initiate link use case.

        Args:
            link_service: Account link domain service
            settings: Application settings (provider configuration)
        """
        self.link_service = link_service
        self.settings = settings

    async def execute(self, request: InitiateLinkRequest) -> InitiateLinkResponse:
        """Build the authorization URL for the requested provider.

        Raises:
            UnsupportedProviderError: If the provider cannot be linked
            ConfigurationMissingError: If the provider app is not configured
        """
        url = self.link_service.build_authorization_url(
            AccountId(request.account_id),
            request.provider,
            self.settings.link_provider_config(),
        )
        return InitiateLinkResponse(authorization_url=url)
