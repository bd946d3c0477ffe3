"""
Abstract interface for remote mirror backends.

A mirror receives a verbatim copy of the articles document after every write,
plus any uploaded images. Implementations push to the GitHub contents API,
to Tigris/S3-compatible object storage, or nowhere (local development).
"""
from abc import ABC, abstractmethod

from pulse_api.image_utils import validate_image_filename

DOCUMENT_PATH = "articles.json"
IMAGES_DIR = "images"


class RemoteMirror(ABC):
    """Abstract base class for remote mirror backends."""

    @abstractmethod
    def push_document(self, content: bytes, message: str) -> None:
        """
        Push the serialized articles document to the mirror.

        Args:
            content: UTF-8 encoded JSON document, exactly as written to disk.
            message: Human-readable description of the change.

        Raises:
            MirrorError: If the remote write fails.
        """

    @abstractmethod
    def push_image(self, image_data: str, filename: str) -> str:
        """
        Upload an image to the mirror under images/<filename>.

        Args:
            image_data: Base64 payload, optionally prefixed with a data URL header.
            filename: Target filename. An existing file with the same name is overwritten.

        Returns:
            Publicly resolvable URL of the uploaded image.

        Raises:
            MirrorError: If the remote write fails.
        """

    @staticmethod
    def image_path(filename: str) -> str:
        """
        Repository path for an uploaded image.

        Raises:
            MirrorError: If the filename would leave the images directory
        """
        return f"{IMAGES_DIR}/{validate_image_filename(filename)}"
