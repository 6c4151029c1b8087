"""Figma REST API source for local variables."""

import logging
import re
from typing import Any, Dict, Optional

import httpx

from tokenexport.exceptions import TransportFailure
from tokenexport.snapshot.loader import SnapshotLoader
from tokenexport.snapshot.types import Snapshot


logger = logging.getLogger(__name__)

# https://www.figma.com/file/FILEID/Title or /design/FILEID/...
FIGMA_URL_PATTERN = re.compile(
    r"https?://(?:www\.)?figma\.com/(?:file|design|proto|board)/([a-zA-Z0-9]+)",
    re.IGNORECASE,
)


def extract_file_key(file_ref: str) -> str:
    """Accept a bare file key or a Figma file URL."""
    match = FIGMA_URL_PATTERN.search(file_ref)
    if match:
        return match.group(1)
    return file_ref.strip()


class FigmaSnapshotSource:
    """Fetches ``GET /v1/files/:key/variables/local`` once per load."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, file_ref: str, access_token: str,
                 client: Optional[httpx.Client] = None, timeout: float = 20.0):
        self.file_key = extract_file_key(file_ref)
        self.access_token = access_token
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
        return self._client

    def fetch(self) -> Dict[str, Any]:
        """
        Fetch the raw variables payload.

        Raises:
            TransportFailure: On network errors or non-200 responses
        """
        url = f"{self.BASE_URL}/files/{self.file_key}/variables/local"
        headers = {"X-Figma-Token": self.access_token, "Accept": "application/json"}

        logger.info(f"Fetching variables for Figma file {self.file_key}")
        try:
            resp = self._get_client().get(url, headers=headers)
        except httpx.HTTPError as e:
            raise TransportFailure(f"Figma request failed: {e}") from e

        if resp.status_code == 403:
            raise TransportFailure(
                "Figma access denied. Check your token and file permissions.", resp.status_code
            )
        if resp.status_code == 404:
            raise TransportFailure(f"Figma file {self.file_key} not found.", resp.status_code)
        if resp.status_code == 429:
            raise TransportFailure("Figma rate limit reached. Try again later.", resp.status_code)
        if resp.status_code != 200:
            raise TransportFailure(f"Figma API returned {resp.status_code}", resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise TransportFailure(f"Figma returned invalid JSON: {e}") from e

    def close(self):
        if self._client is not None:
            self._client.close()

    def load_snapshot(self) -> Snapshot:
        return SnapshotLoader().parse(self.fetch())
