"""
Local disk implementation of article storage.

Stores articles as a JSON array on the local filesystem and forwards every
write to a remote mirror. Default location: ./articles.json
"""
import json
import logging
import os
from typing import Dict, List, Optional

from pulse_api.article_store import ArticleStore
from pulse_api.exceptions import PersistenceError
from pulse_api.file_utils import dump_json, load_json_file, save_json_file
from pulse_api.remote_mirror import RemoteMirror

# Configure logging
logger = logging.getLogger(__name__)


class LocalDiskArticleStore(ArticleStore):
    """
    Local disk implementation of article storage.

    The local write always happens first. A failed mirror push is not rolled
    back, so the local file and the mirror can diverge.
    """

    def __init__(
        self,
        state_dir: str = ".",
        filename: str = "articles.json",
        mirror: Optional[RemoteMirror] = None
    ):
        """
        Initialize local disk article store.

        Args:
            state_dir: Directory holding the articles file (default: ".")
            filename: Name of the articles file (default: "articles.json")
            mirror: Remote mirror receiving a copy of every write, or None
        """
        self.state_dir = state_dir
        self.filename = filename
        self.mirror = mirror
        os.makedirs(self.state_dir, exist_ok=True)

    def _get_filepath(self) -> str:
        """Get the full file path for storage."""
        return os.path.join(self.state_dir, self.filename)

    def load(self) -> List[Dict]:
        """
        Load articles from the local JSON file.

        Returns:
            List of article dicts, or an empty list if the file is missing or unreadable.
        """
        filepath = self._get_filepath()
        try:
            data = load_json_file(filepath, [])
        except json.JSONDecodeError as e:
            logger.error("Malformed JSON in %s: %s", filepath, e)
            raise PersistenceError(f"Malformed JSON in {filepath}") from e
        except OSError as e:
            logger.warning("Could not read %s, starting with empty array: %s", filepath, e)
            return []

        if not isinstance(data, list):
            raise PersistenceError(f"Expected a JSON array in {filepath}")
        return data

    def save(self, articles: List[Dict], change_description: str) -> None:
        """
        Write articles to disk, then push the same payload to the mirror.

        Args:
            articles: The full collection to store.
            change_description: Commit message for the mirror.
        """
        filepath = self._get_filepath()
        try:
            save_json_file(filepath, articles, ensure_dir=False)
        except OSError as e:
            logger.error("Error saving %s: %s", filepath, e)
            raise PersistenceError(f"Could not write {filepath}") from e

        if self.mirror is not None:
            self.mirror.push_document(dump_json(articles).encode('utf-8'), change_description)
