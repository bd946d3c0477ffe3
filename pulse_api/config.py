"""
Configuration management for the Innovation Pulse article API.
Loads environment variables and provides access to configuration settings.
"""
import json
import logging
import os
from typing import Dict, Optional
from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "technology"

DEFAULT_CATEGORY_IMAGES = {
    "ai": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800&h=600&fit=crop",
    "technology": "https://images.unsplash.com/photo-1518770660439-4636190af475?w=800&h=600&fit=crop",
    "security": "https://images.unsplash.com/photo-1563013544-824ae1b704d3?w=800&h=600&fit=crop",
    "energy": "https://images.unsplash.com/photo-1508514177221-188b1cf16e9d?w=800&h=600&fit=crop",
    "business": "https://images.unsplash.com/photo-1450101499163-c8848c66ca85?w=800&h=600&fit=crop",
}


class Config:
    """Configuration settings loaded from environment variables."""

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        """
        Initialize configuration by loading environment variables.

        Args:
            overrides: Optional values that take precedence over the environment
                (used to build explicit configurations in tests and scripts)
        """
        load_dotenv()
        self._config = dict(overrides or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value by key.

        Args:
            key: Configuration key name
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if key in self._config:
            return self._config[key]
        return os.getenv(key, default)

    @property
    def github_token(self) -> str:
        """Get GitHub API token used to commit to the mirror repository."""
        return self.get("GITHUB_TOKEN", "")

    @property
    def repo_owner(self) -> str:
        """Get owner of the mirror repository."""
        return self.get("REPO_OWNER", "your-username")

    @property
    def repo_name(self) -> str:
        """Get name of the mirror repository."""
        return self.get("REPO_NAME", "innovation-pulse-backend")

    @property
    def repo_branch(self) -> str:
        """Get branch used for commits and raw image URLs."""
        return self.get("REPO_BRANCH", "main")

    @property
    def github_api_url(self) -> str:
        """Get GitHub REST API base URL."""
        return self.get("GITHUB_API_URL", "https://api.github.com").rstrip("/")

    @property
    def github_raw_host(self) -> str:
        """Get host serving raw repository content."""
        return self.get("GITHUB_RAW_HOST", "raw.githubusercontent.com")

    @property
    def port(self) -> int:
        """Get API server port."""
        return int(self.get("PORT", "3000"))

    @property
    def host(self) -> str:
        """Get API server host."""
        return self.get("HOST", "0.0.0.0")

    @property
    def state_dir(self) -> str:
        """Get directory holding the local articles.json file."""
        return self.get("STATE_DIR", ".")

    @property
    def mirror_storage_type(self) -> str:
        """Get remote mirror backend ('github', 'tigris' or 'none')."""
        return self.get("MIRROR_STORAGE_TYPE", "github").lower()

    @property
    def tigris_bucket_name(self) -> str:
        """Get Tigris bucket used by the object storage mirror."""
        return self.get("TIGRIS_BUCKET_NAME", "")

    @property
    def aws_access_key_id(self) -> str:
        """Get access key ID for the Tigris mirror."""
        return self.get("AWS_ACCESS_KEY_ID", "")

    @property
    def aws_secret_access_key(self) -> str:
        """Get secret access key for the Tigris mirror."""
        return self.get("AWS_SECRET_ACCESS_KEY", "")

    @property
    def aws_endpoint_url_s3(self) -> str:
        """Get S3 endpoint URL for the Tigris mirror."""
        return self.get("AWS_ENDPOINT_URL_S3", "https://fly.storage.tigris.dev")

    @property
    def aws_region(self) -> str:
        """Get region for the Tigris mirror."""
        return self.get("AWS_REGION", "auto")

    @property
    def tigris_public_url(self) -> str:
        """Get public base URL for objects in the Tigris bucket."""
        default = f"https://{self.tigris_bucket_name}.fly.storage.tigris.dev"
        return self.get("TIGRIS_PUBLIC_URL", default).rstrip("/")

    @property
    def local_image_base_url(self) -> str:
        """Get base URL for images stored by the local-only mirror."""
        default = f"http://localhost:{self.port}/images"
        return self.get("LOCAL_IMAGE_BASE_URL", default).rstrip("/")

    @property
    def log_level(self) -> str:
        """Get log level for the API logger."""
        return self.get("LOG_LEVEL", "INFO").upper()

    @property
    def category_images(self) -> Dict[str, str]:
        """
        Get the default image URL for each article category.

        Reads CATEGORY_IMAGES as a JSON object merged over the built-in table.
        Entries whose value is not a non-empty string are ignored.
        Returns the built-in table if JSON parsing fails or the variable is unset.
        """
        images = dict(DEFAULT_CATEGORY_IMAGES)
        images_json = self.get("CATEGORY_IMAGES")

        if images_json:
            try:
                overrides = json.loads(images_json)
            except json.JSONDecodeError:
                logger.warning("CATEGORY_IMAGES is not valid JSON, using defaults")
                return images
            if isinstance(overrides, dict):
                for category, url in overrides.items():
                    if isinstance(url, str) and url.strip():
                        images[category] = url
                    else:
                        logger.warning("Ignoring empty CATEGORY_IMAGES entry for %s", category)

        return images

    @property
    def default_category(self) -> str:
        """Get the category whose image is used for unknown categories."""
        return self.get("DEFAULT_CATEGORY", DEFAULT_CATEGORY)
