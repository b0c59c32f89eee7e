"""Unit tests for AccountLinkService."""

from urllib.parse import parse_qs, urlsplit

import pytest

from idlink.domain.error import (
    ConfigurationError,
    ConfigurationMissingError,
    UnsupportedProviderError,
)
from idlink.domain.service import AccountLinkService, decode_link_state
from idlink.domain.value import LinkAction, LinkProviderConfig, ProviderKind


@pytest.fixture
def link_service() -> AccountLinkService:
    return AccountLinkService()


@pytest.fixture
def config() -> LinkProviderConfig:
    return LinkProviderConfig(
        client_id="cid", redirect_base_url="https://app.example.org/"
    )


class TestBuildAuthorizationUrl:
    """Tests for build_authorization_url."""

    def test_url_carries_client_redirect_scope_and_state(self, link_service, config):
        url = link_service.build_authorization_url("acct-1", "github", config)

        parts = urlsplit(url)
        query = parse_qs(parts.query)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://github.com/login/oauth/authorize"
        )
        assert query["client_id"] == ["cid"]
        assert query["redirect_uri"] == [
            "https://app.example.org/account/oauth-callback"
        ]
        assert query["scope"] == ["user:email"]

    def test_state_decodes_to_link_request(self, link_service, config):
        """The state parameter should round-trip to the requesting account."""
        url = link_service.build_authorization_url("acct-1", "github", config)

        state = decode_link_state(parse_qs(urlsplit(url).query)["state"][0])

        assert state.account_id == "acct-1"
        assert state.action == LinkAction.LINK
        assert state.target_provider_kind == ProviderKind.GITHUB

    def test_missing_redirect_base(self, link_service):
        """A client id without a redirect base is a configuration error."""
        config = LinkProviderConfig(client_id="cid", redirect_base_url=None)

        with pytest.raises(ConfigurationMissingError) as exc_info:
            link_service.build_authorization_url("acct-1", "github", config)

        assert exc_info.value.setting == "redirect base URL"
        assert isinstance(exc_info.value, ConfigurationError)

    def test_missing_client_id(self, link_service):
        config = LinkProviderConfig(redirect_base_url="https://app.example.org")

        with pytest.raises(ConfigurationMissingError) as exc_info:
            link_service.build_authorization_url("acct-1", "github", config)

        assert exc_info.value.setting == "client id"

    @pytest.mark.parametrize("provider", ["nostr", "email", "anonymous", "myspace", ""])
    def test_unsupported_provider(self, link_service, config, provider):
        """Only allow-listed providers can be linked."""
        with pytest.raises(UnsupportedProviderError):
            link_service.build_authorization_url("acct-1", provider, config)

    def test_unsupported_provider_checked_before_configuration(self, link_service):
        """An unknown provider is a user error even when nothing is configured."""
        with pytest.raises(UnsupportedProviderError):
            link_service.build_authorization_url(
                "acct-1", "myspace", LinkProviderConfig()
            )
