"""
Abstract interface for article storage.

The whole collection is read and written as one document; callers load it,
mutate it in memory and save it back within a single request.
"""
from abc import ABC, abstractmethod
from typing import Dict, List


class ArticleStore(ABC):
    """Abstract base class for article storage backends."""

    @abstractmethod
    def load(self) -> List[Dict]:
        """
        Load the full article collection.

        Returns:
            List of article dicts, newest first. Empty if nothing is stored yet.

        Raises:
            PersistenceError: If the stored document is not valid JSON.
        """

    @abstractmethod
    def save(self, articles: List[Dict], change_description: str) -> None:
        """
        Replace the stored collection and mirror it.

        Args:
            articles: The full collection to store.
            change_description: Human-readable description used as the commit message.

        Raises:
            PersistenceError: If the local write fails.
            MirrorError: If the local write succeeded but the mirror push failed.
        """
