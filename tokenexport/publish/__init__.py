"""Publishing generated output to remote repositories."""

from .github import GitHubPublisher, PushResult, RepoCoordinates, parse_repo_url, target_path

__all__ = ['GitHubPublisher', 'PushResult', 'RepoCoordinates', 'parse_repo_url', 'target_path']
