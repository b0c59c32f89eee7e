"""Account linking domain service."""

from urllib.parse import urlencode

import logfire

from idlink.domain.error import ConfigurationMissingError, UnsupportedProviderError
from idlink.domain.service.link_state import encode_link_state
from idlink.domain.value import (
    LINKABLE_PROVIDERS,
    AccountId,
    LinkAction,
    LinkProviderConfig,
    ProviderKind,
)

from .base import Service

# Route on this platform that completes the link after the provider redirect
LINK_CALLBACK_PATH = "/account/oauth-callback"


class AccountLinkService(Service):
    """Builds provider authorization URLs for linking a secondary identity.

    The caller must already hold an authenticated session; the route
    rejects anonymous requests before reaching this service.
    """

    def build_authorization_url(
        self,
        account_id: AccountId | str,
        provider_kind: str,
        config: LinkProviderConfig,
    ) -> str:
        """Build the provider authorization URL for a link attempt.

        Args:
            account_id: Authenticated account starting the link
            provider_kind: Requested provider (validated against the allow-list)
            config: Provider client configuration

        Returns:
            Authorization URL to redirect the user to

        Raises:
            UnsupportedProviderError: If the provider cannot be linked
            ConfigurationMissingError: If client id or redirect base is absent
        """
        provider = self._resolve_provider(provider_kind)

        if not config.client_id:
            raise ConfigurationMissingError(provider.value, "client id")
        if not config.redirect_base_url:
            raise ConfigurationMissingError(provider.value, "redirect base URL")

        with logfire.span(
            "account_link_service.build_authorization_url",
            account_id=str(account_id),
            provider=provider.value,
        ):
            state = encode_link_state(account_id, LinkAction.LINK, provider)
            params = {
                "client_id": config.client_id,
                "redirect_uri": self.callback_url(config),
                "scope": config.scope,
                "state": state,
            }
            auth_url = f"{config.authorize_url}?{urlencode(params)}"

            logfire.info(
                "Account link authorization initiated",
                account_id=str(account_id),
                provider=provider.value,
                redirect_uri=params["redirect_uri"],
            )
            return auth_url

    @staticmethod
    def callback_url(config: LinkProviderConfig) -> str:
        """Platform callback the provider redirects back to."""
        base = (config.redirect_base_url or "").rstrip("/")
        return f"{base}{LINK_CALLBACK_PATH}"

    @staticmethod
    def _resolve_provider(provider_kind: str) -> ProviderKind:
        try:
            provider = ProviderKind(provider_kind)
        except ValueError:
            raise UnsupportedProviderError(str(provider_kind)) from None
        if provider not in LINKABLE_PROVIDERS:
            raise UnsupportedProviderError(provider.value)
        return provider
