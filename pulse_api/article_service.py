"""
Article service for the Innovation Pulse article API.
Implements list/get/create/update/delete and standalone image upload.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from pulse_api.article_store import ArticleStore
from pulse_api.config import DEFAULT_CATEGORY, DEFAULT_CATEGORY_IMAGES, Config
from pulse_api.exceptions import ArticleNotFoundError
from pulse_api.file_utils import get_epoch_millis, get_utc_timestamp
from pulse_api.image_utils import (
    new_article_image_filename,
    standalone_image_filename,
    updated_article_image_filename,
)
from pulse_api.remote_mirror import RemoteMirror

# Configure logging
logger = logging.getLogger(__name__)


class ArticleService:
    """Applies article operations to the store and the remote mirror."""

    def __init__(self, store: ArticleStore, mirror: RemoteMirror, config: Config):
        """
        Initialize article service.

        Args:
            store: Article store the collection is loaded from and saved to
            mirror: Remote mirror that receives uploaded images
            config: Configuration providing the category image table
        """
        self.store = store
        self.mirror = mirror
        self.category_images = config.category_images
        self.default_category = config.default_category

    def default_image_for(self, category: Optional[str]) -> str:
        """
        Get the default image URL for a category.

        Unknown categories fall back to the default category's image, and
        then to the built-in technology image, so the result is never empty.
        """
        for key in (category, self.default_category):
            image = self.category_images.get(key) if isinstance(key, str) else None
            if isinstance(image, str) and image.strip():
                return image
        return DEFAULT_CATEGORY_IMAGES[DEFAULT_CATEGORY]

    @staticmethod
    def _custom_image_url(data: Dict[str, Any]) -> Optional[str]:
        """Return the custom image URL if one was supplied and is not blank."""
        custom_url = data.get("customImageUrl")
        if isinstance(custom_url, str) and custom_url.strip():
            return custom_url
        return None

    @staticmethod
    def _find_index(articles: List[Dict], article_id: str) -> int:
        for i, article in enumerate(articles):
            if article.get("id") == article_id:
                return i
        raise ArticleNotFoundError(article_id)

    def list_articles(self) -> List[Dict]:
        """Return the full collection, newest first."""
        return self.store.load()

    def get_article(self, article_id: str) -> Dict:
        """
        Get a single article by id.

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        articles = self.store.load()
        return articles[self._find_index(articles, article_id)]

    def create_article(self, data: Dict[str, Any]) -> Dict:
        """
        Create an article and put it at the front of the collection.

        Image precedence: customImageUrl, then uploaded imageData, then the
        category default.

        Args:
            data: Request body with title, category, excerpt, content and
                optional customImageUrl / imageData

        Returns:
            The stored article
        """
        category = data.get("category")
        image_url = self.default_image_for(category)

        custom_url = self._custom_image_url(data)
        image_data = data.get("imageData")
        if custom_url:
            image_url = custom_url
        elif image_data:
            filename = new_article_image_filename(image_data, get_epoch_millis())
            image_url = self.mirror.push_image(image_data, filename)

        article = {
            "id": uuid.uuid4().hex,
            "title": data.get("title"),
            "category": category,
            "excerpt": data.get("excerpt"),
            "content": data.get("content"),
            "image": image_url,
            "date": get_utc_timestamp(),
            "views": 0
        }

        articles = self.store.load()
        articles.insert(0, article)
        self.store.save(articles, f"Added new article: {article['title']}")
        logger.info("Created article %s", article["id"])
        return article

    def update_article(self, article_id: str, data: Dict[str, Any]) -> Dict:
        """
        Replace an article's title, category, excerpt and content.

        Fields missing from the body are stored as null. The image is only
        replaced when a custom URL or new image data is supplied.

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        articles = self.store.load()
        index = self._find_index(articles, article_id)

        image_url = articles[index].get("image")
        custom_url = self._custom_image_url(data)
        image_data = data.get("imageData")
        if custom_url:
            image_url = custom_url
        elif image_data:
            filename = updated_article_image_filename(image_data, article_id)
            image_url = self.mirror.push_image(image_data, filename)

        article = dict(articles[index])
        article.update({
            "title": data.get("title"),
            "category": data.get("category"),
            "excerpt": data.get("excerpt"),
            "content": data.get("content"),
            "image": image_url,
            "date": get_utc_timestamp()
        })
        articles[index] = article

        self.store.save(articles, f"Updated article: {article['title']}")
        logger.info("Updated article %s", article_id)
        return article

    def delete_article(self, article_id: str) -> Dict:
        """
        Remove an article from the collection.

        Returns:
            The removed article

        Raises:
            ArticleNotFoundError: If no article has this id
        """
        articles = self.store.load()
        index = self._find_index(articles, article_id)
        deleted = articles.pop(index)

        self.store.save(articles, f"Deleted article: {deleted.get('title')}")
        logger.info("Deleted article %s", article_id)
        return deleted

    def upload_image(self, image_data: str, filename: Optional[str] = None) -> str:
        """
        Upload an image without touching the article collection.

        Args:
            image_data: Base64 payload or data URL
            filename: Target filename, defaults to image-<epoch-millis>.jpg

        Returns:
            Public URL of the uploaded image

        Raises:
            ValueError: If no image data was supplied
        """
        if not image_data:
            raise ValueError("imageData is required")
        return self.mirror.push_image(
            image_data, filename or standalone_image_filename(get_epoch_millis())
        )

    @staticmethod
    def health() -> Dict[str, str]:
        """Return a fixed status payload with the current time."""
        return {"status": "ok", "timestamp": get_utc_timestamp()}
