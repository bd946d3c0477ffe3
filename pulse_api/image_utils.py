"""
Helpers for base64 image payloads sent by the editor.
"""
import base64
import binascii
import os
import re

from pulse_api.exceptions import MirrorError

DATA_URL_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")


def strip_data_url_prefix(image_data: str) -> str:
    """
    Remove a leading data URL prefix (e.g. "data:image/png;base64,").

    Args:
        image_data: Raw base64 string or data URL

    Returns:
        Bare base64 payload
    """
    return DATA_URL_PREFIX.sub("", image_data, count=1)


def decode_image_data(image_data: str) -> bytes:
    """
    Decode an image payload into raw bytes.

    Raises:
        MirrorError: If the payload is not valid base64
    """
    try:
        return base64.b64decode(strip_data_url_prefix(image_data), validate=False)
    except (binascii.Error, ValueError) as e:
        raise MirrorError("Image data is not valid base64") from e


def validate_image_filename(filename: str) -> str:
    """
    Ensure an image filename names a single file inside the images directory.

    Raises:
        MirrorError: If the name is empty, contains a path separator or is a dot entry
    """
    if (
        not isinstance(filename, str)
        or not filename
        or filename in (".", "..")
        or "/" in filename
        or "\\" in filename
        or os.path.basename(filename) != filename
    ):
        raise MirrorError(f"Invalid image filename: {filename!r}")
    return filename


def image_extension(image_data: str) -> str:
    """Return 'png' if the payload declares a PNG data URL, else 'jpg'."""
    return "png" if "data:image/png" in image_data else "jpg"


def new_article_image_filename(image_data: str, epoch_millis: int) -> str:
    """Filename for an image uploaded while creating an article."""
    return f"article-{epoch_millis}.{image_extension(image_data)}"


def updated_article_image_filename(image_data: str, article_id: str) -> str:
    """Filename for an image uploaded while updating an article."""
    return f"article-{article_id}-updated.{image_extension(image_data)}"


def standalone_image_filename(epoch_millis: int) -> str:
    """Fallback filename for the upload-image endpoint."""
    return f"image-{epoch_millis}.jpg"
