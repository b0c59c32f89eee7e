"""GitHub infrastructure providers."""

from dishka import Scope, provide

from idlink.adapter.github import GitHubProfileClient, RealGitHubProfileClient
from idlink.config import Settings
from idlink.util.di.base import ProviderBase


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_profile_client(self, settings: Settings) -> GitHubProfileClient:
        """Provide GitHub profile client.

        No OAuth credentials are needed here: profiles are fetched with
        each linked identity's own access token.
        """
        return RealGitHubProfileClient(
            user_api_url=settings.auth.github.user_api_url
        )
