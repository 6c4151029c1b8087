"""GitHub contents API publisher: create or update one file per call."""

import base64
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from tokenexport.exceptions import TransportFailure


logger = logging.getLogger(__name__)

# https://github.com/owner/repo, optionally with .git or a trailing path
GITHUB_URL_PATTERN = re.compile(r"github\.com/([^/\s]+)/([^/\s?#]+)", re.IGNORECASE)


@dataclass(frozen=True)
class RepoCoordinates:
    owner: str
    repo: str


@dataclass
class PushResult:
    """Outcome reported back to the user."""
    success: bool
    message: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {'success': self.success, 'message': self.message}
        if self.url:
            result['url'] = self.url
        return result


def parse_repo_url(repo_url: str) -> RepoCoordinates:
    """
    Extract owner and repository from a GitHub URL.

    Raises:
        ValueError: If the URL does not name a GitHub repository
    """
    match = GITHUB_URL_PATTERN.search(repo_url or "")
    if not match:
        raise ValueError("Invalid GitHub repository URL")
    repo = match.group(2)
    if repo.endswith('.git'):
        repo = repo[:-len('.git')]
    return RepoCoordinates(owner=match.group(1), repo=repo)


def target_path(path: Optional[str], filename: str) -> str:
    """Join a directory and a filename, dropping empty and duplicate slashes."""
    parts = [part for part in (path or "").split('/') if part]
    parts.append(filename)
    return '/'.join(parts)


class GitHubPublisher:
    """
    Pushes generated output to a repository through the contents API.

    A single create-or-update request per file, preceded by a lookup of the
    existing blob sha. No retries.
    """

    BASE_URL = "https://api.github.com"

    def __init__(self, token: str, client: Optional[httpx.Client] = None, timeout: float = 15.0):
        self.token = token
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }

    def close(self):
        if self._client is not None:
            self._client.close()

    def push_file(
        self,
        repo_url: str,
        branch: str,
        path: Optional[str],
        filename: str,
        content: str,
        commit_message: Optional[str] = None
    ) -> str:
        """
        Create or update ``path/filename`` on ``branch``.

        Returns:
            The html_url of the written file

        Raises:
            ValueError: If the repository URL is invalid
            TransportFailure: If GitHub rejects the request or is unreachable
        """
        coords = parse_repo_url(repo_url)
        file_path = target_path(path, filename)
        url = f"{self.BASE_URL}/repos/{coords.owner}/{coords.repo}/contents/{file_path}"
        client = self._get_client()

        sha = self._existing_sha(client, url, branch)

        body: Dict[str, Any] = {
            'message': commit_message or f"Update {filename} from tokenexport",
            'content': base64.b64encode(content.encode('utf-8')).decode('ascii'),
        }
        if branch:
            body['branch'] = branch
        if sha:
            body['sha'] = sha

        logger.info(f"Pushing {file_path} to {coords.owner}/{coords.repo}@{branch or 'default'}")
        try:
            resp = client.put(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise TransportFailure(f"GitHub request failed: {e}") from e

        if resp.status_code not in (200, 201):
            raise TransportFailure(f"GitHub API error: {_error_message(resp)}", resp.status_code)

        html_url = resp.json().get('content', {}).get('html_url', '')
        logger.info(f"Pushed {file_path}: {html_url}")
        return html_url

    def _existing_sha(self, client: httpx.Client, url: str, branch: Optional[str]) -> Optional[str]:
        """Blob sha of the current file, or None if it does not exist yet."""
        params = {'ref': branch} if branch else None
        try:
            resp = client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            raise TransportFailure(f"GitHub request failed: {e}") from e

        if resp.status_code == 200:
            return resp.json().get('sha')
        logger.debug(f"No existing file at {url} (status {resp.status_code})")
        return None

    def push(self, repo_url: str, branch: str, path: Optional[str], filename: str, content: str,
             commit_message: Optional[str] = None) -> PushResult:
        """Like push_file, but reports failure as a PushResult."""
        try:
            html_url = self.push_file(repo_url, branch, path, filename, content, commit_message)
        except (ValueError, TransportFailure) as e:
            logger.error(f"Failed to push {filename} to GitHub: {e}")
            return PushResult(success=False, message=f"Failed to push to GitHub: {e}")
        return PushResult(
            success=True,
            message=f"Successfully pushed {filename} to GitHub",
            url=html_url,
        )


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if isinstance(data, dict) and data.get('message'):
        return str(data['message'])
    return f"HTTP {resp.status_code}"
