"""GitHub profile adapter."""

from .client import (
    GitHubProfileClient,
    GitHubProfileError,
    MockGitHubProfileClient,
    RealGitHubProfileClient,
)

__all__ = [
    "GitHubProfileClient",
    "GitHubProfileError",
    "MockGitHubProfileClient",
    "RealGitHubProfileClient",
]
