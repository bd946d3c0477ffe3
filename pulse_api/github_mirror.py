"""
GitHub contents API mirror.
Commits the articles document and uploaded images to a repository.
"""
import base64
import logging
from typing import Any, Dict, Optional

import requests

from pulse_api.exceptions import MirrorError
from pulse_api.image_utils import strip_data_url_prefix
from pulse_api.remote_mirror import DOCUMENT_PATH, RemoteMirror

# Configure logging
logger = logging.getLogger(__name__)


class GitHubMirror(RemoteMirror):
    """Mirror backed by a GitHub repository via the contents API."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        branch: str = "main",
        api_url: str = "https://api.github.com",
        raw_host: str = "raw.githubusercontent.com",
        timeout: int = 30
    ):
        """
        Initialize GitHub mirror.

        Args:
            token: GitHub token with contents write permission
            owner: Repository owner
            repo: Repository name
            branch: Branch to commit to and to build raw URLs from
            api_url: REST API base URL
            raw_host: Host serving raw file content
            timeout: Request timeout in seconds
        """
        self.token = token
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.api_url = api_url.rstrip("/")
        self.raw_host = raw_host
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def contents_url(self, path: str) -> str:
        """Contents API URL for a repository path."""
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/contents/{path}"

    def raw_url(self, path: str) -> str:
        """Public raw content URL for a repository path."""
        return f"https://{self.raw_host}/{self.owner}/{self.repo}/{self.branch}/{path}"

    def get_file_sha(self, path: str) -> Optional[str]:
        """
        Fetch the blob SHA of an existing file.

        Any failure is treated as "file does not exist".

        Args:
            path: Repository path

        Returns:
            SHA string, or None if the file could not be fetched
        """
        try:
            response = requests.get(
                self.contents_url(path),
                headers=self._headers(),
                params={"ref": self.branch},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json().get("sha")
        except (requests.RequestException, ValueError) as e:
            logger.debug("No existing SHA for %s: %s", path, e)
            return None

    def put_file(self, path: str, content_b64: str, message: str) -> Dict[str, Any]:
        """
        Create or update a file in the repository.

        The current SHA is looked up first; when present the request updates
        the file, otherwise it creates it.

        Args:
            path: Repository path
            content_b64: Base64 encoded file content
            message: Commit message

        Returns:
            Contents API response data

        Raises:
            MirrorError: If the GitHub API returns an error or is unreachable
        """
        body = {
            "message": message,
            "content": content_b64,
            "branch": self.branch,
        }
        sha = self.get_file_sha(path)
        if sha:
            body["sha"] = sha

        try:
            response = requests.put(
                self.contents_url(path),
                headers=self._headers(),
                json=body,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.HTTPError as e:
            try:
                error_msg = e.response.json().get("message", str(e))
            except ValueError:
                error_msg = str(e)
            logger.error(
                "GitHub API HTTP %s error for %s: %s",
                e.response.status_code, path, error_msg
            )
            raise MirrorError(f"GitHub rejected write to {path}: {error_msg}") from e
        except requests.RequestException as e:
            logger.error("GitHub API unreachable while writing %s: %s", path, e)
            raise MirrorError(f"GitHub unreachable while writing {path}") from e

    def push_document(self, content: bytes, message: str) -> None:
        """Commit the articles document to articles.json."""
        content_b64 = base64.b64encode(content).decode("ascii")
        self.put_file(DOCUMENT_PATH, content_b64, message)
        logger.info("Committed to GitHub: %s", message)

    def push_image(self, image_data: str, filename: str) -> str:
        """Commit an image under images/<filename> and return its raw URL."""
        path = self.image_path(filename)
        self.put_file(path, strip_data_url_prefix(image_data), f"Upload image: {filename}")
        logger.info("Uploaded image to GitHub: %s", path)
        return self.raw_url(path)
