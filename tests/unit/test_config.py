"""Unit tests for Settings."""

from idlink.config import AuthSettings, GitHubOAuthSettings, Settings


class TestLinkProviderConfig:
    """Tests for Settings.link_provider_config."""

    def test_main_app_used_without_link_app(self):
        settings = Settings(
            environment="test",
            auth=AuthSettings(github=GitHubOAuthSettings(client_id="main")),
        )

        config = settings.link_provider_config()

        assert config.client_id == "main"
        assert config.redirect_base_url == "http://localhost:8000"

    def test_link_app_preferred(self):
        settings = Settings(
            environment="test",
            auth=AuthSettings(
                github=GitHubOAuthSettings(client_id="main"),
                github_link=GitHubOAuthSettings(client_id="linker"),
            ),
        )

        assert settings.link_provider_config().client_id == "linker"


class TestGitHubOAuthSettings:
    """Tests for GitHubOAuthSettings."""

    def test_client_secret_not_held(self):
        """An existing env file with a client secret still loads."""
        app = GitHubOAuthSettings(client_id="cid", client_secret="s3cret")

        assert app.client_id == "cid"
        assert not hasattr(app, "client_secret")
        assert "client_secret" not in app.model_dump()
