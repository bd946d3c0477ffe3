"""
Local-only mirror for development without remote credentials.

Documents are not pushed anywhere; images are written under <state_dir>/images.
"""
import logging
import os

from pulse_api.exceptions import MirrorError
from pulse_api.image_utils import decode_image_data
from pulse_api.remote_mirror import IMAGES_DIR, RemoteMirror

# Configure logging
logger = logging.getLogger(__name__)


class LocalOnlyMirror(RemoteMirror):
    """Mirror that keeps everything on the local filesystem."""

    def __init__(self, state_dir: str = ".", image_base_url: str = "http://localhost:3000/images"):
        """
        Initialize local-only mirror.

        Args:
            state_dir: Directory under which images/ is created
            image_base_url: Base URL images are served from
        """
        self.images_dir = os.path.join(state_dir, IMAGES_DIR)
        self.image_base_url = image_base_url.rstrip("/")

    def push_document(self, content: bytes, message: str) -> None:
        """Nothing to mirror; the local file is the only copy."""
        logger.info("Mirror disabled, kept local change: %s", message)

    def push_image(self, image_data: str, filename: str) -> str:
        """
        Write the image to disk and return the URL it is served from.

        Raises:
            MirrorError: If the filename would be written outside images/
        """
        self.image_path(filename)
        images_dir = os.path.realpath(self.images_dir)
        target = os.path.realpath(os.path.join(images_dir, filename))
        if os.path.dirname(target) != images_dir:
            raise MirrorError(f"Invalid image filename: {filename!r}")

        os.makedirs(images_dir, exist_ok=True)
        with open(target, 'wb') as f:
            f.write(decode_image_data(image_data))
        return f"{self.image_base_url}/{filename}"
