"""
Exception types raised by the article store, the remote mirrors and the service.
"""


class ArticleNotFoundError(Exception):
    """Raised when no article with the requested id exists."""

    def __init__(self, article_id: str):
        super().__init__(f"Article not found: {article_id}")
        self.article_id = article_id


class PersistenceError(Exception):
    """Raised when the local articles file cannot be parsed or written."""


class MirrorError(Exception):
    """Raised when a push to the remote mirror fails."""
