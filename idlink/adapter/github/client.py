"""GitHub profile client.

Fetches the profile of a linked GitHub account with the access token
stored when the account was linked.
"""

import httpx
import logfire

from idlink.adapter.error import ProviderError
from idlink.domain.model import ProfileFragment


class GitHubProfileError(ProviderError):
    """GitHub profile fetch error."""

    pass


class GitHubProfileClient:
    """Base class for GitHub profile clients.

    Provides type distinction for dependency injection.
    """

    async def fetch_profile(self, access_token: str) -> ProfileFragment:
        """Fetch the authenticated GitHub user's profile.

        Args:
            access_token: OAuth access token of the linked account

        Returns:
            Profile fragment built from the GitHub user

        Raises:
            GitHubProfileError: If the request fails
        """
        raise NotImplementedError


class RealGitHubProfileClient(GitHubProfileClient):
    """GitHub REST API client."""

    def __init__(
        self,
        user_api_url: str = "https://api.github.com/user",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GitHub profile client.

        Args:
            user_api_url: Endpoint returning the authenticated user
            transport: httpx transport override (tests use httpx.MockTransport)
        """
        self.user_api_url = user_api_url
        self.transport = transport

    async def fetch_profile(self, access_token: str) -> ProfileFragment:
        """Fetch the authenticated GitHub user's profile.

        Args:
            access_token: OAuth access token of the linked account

        Returns:
            Profile fragment built from the GitHub user

        Raises:
            GitHubProfileError: If the request fails
        """
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.get(
                    self.user_api_url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("GitHub profile HTTP error", error=str(e))
            raise GitHubProfileError(f"HTTP error fetching GitHub profile: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "GitHub profile request failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GitHubProfileError(
                f"GitHub profile request failed: {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logfire.error("GitHub profile body is not JSON", error=str(e))
            raise GitHubProfileError(f"Invalid GitHub profile response: {e}") from e

        if not isinstance(data, dict):
            logfire.error("GitHub profile body is not an object")
            raise GitHubProfileError(
                "Invalid GitHub profile response: expected a JSON object"
            )

        logfire.info("GitHub profile fetched", login=data.get("login"))
        return ProfileFragment.from_github_user(data)


class MockGitHubProfileClient(GitHubProfileClient):
    """Mock GitHub profile client for testing.

    Returns deterministic profiles keyed by access token without making
    real API calls. Unknown tokens fail like a revoked token would.
    """

    def __init__(self, profiles: dict[str, dict] | None = None) -> None:
        """Initialize mock client.

        Args:
            profiles: GitHub user objects by access token
        """
        self.profiles = profiles if profiles is not None else {
            "mock-github-token": {
                "login": "mockuser",
                "name": "Mock GitHub User",
                "email": "mock@github.com",
                "avatar_url": "https://avatars.githubusercontent.com/u/1",
                "bio": "Mock bio",
                "blog": "https://mock.example.com",
            }
        }

    async def fetch_profile(self, access_token: str) -> ProfileFragment:
        """Return the mock profile for a token."""
        data = self.profiles.get(access_token)
        if data is None:
            raise GitHubProfileError("GitHub profile request failed: 401")
        return ProfileFragment.from_github_user(data)
