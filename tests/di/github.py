"""Mock GitHub providers for testing."""

from dishka import Scope, provide

from idlink.adapter.github import GitHubProfileClient, MockGitHubProfileClient
from idlink.util.di.infrastructure.github import GitHubProvider


class MockGitHubProvider(GitHubProvider):
    """Mock GitHub provider using the in-memory profile client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_github_profile_client(self) -> GitHubProfileClient:
        """Provide mock GitHub profile client."""
        return MockGitHubProfileClient()
