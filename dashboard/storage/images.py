"""
==============================================================================
Image Storage Module
==============================================================================

Object storage for product images, backed by a local directory that the
application serves under MEDIA_URL_PREFIX.

    upload(bytes) ──▶ <media_directory>/products/Blue_Widget_1700000000000_3f9c2a7e.jpg
                 ◀── /media/products/Blue_Widget_1700000000000_3f9c2a7e.jpg

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dashboard.config import get_settings
from dashboard.core import exceptions
from dashboard.utils.validators import ImageUploadValidator, StorageKeyBuilder


# Module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """Image received from an operator, not yet stored."""

    data: bytes
    filename: Optional[str] = None
    content_type: Optional[str] = None


class ImageStorage:
    """
    Stores product images and resolves their public URLs.

    Attributes:
        root: Directory holding stored objects
        url_prefix: Public URL prefix for stored objects
    """

    def __init__(
        self,
        root: Optional[Path] = None,
        url_prefix: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.root = Path(root) if root is not None else settings.media_path
        self.url_prefix = (url_prefix or settings.media_url_prefix).rstrip("/")
        self._validator = ImageUploadValidator(max_bytes or settings.max_image_bytes)
        self._keys = StorageKeyBuilder()

    def validate(self, image: UploadedImage) -> None:
        """
        Raises:
            AppException: INVALID_IMAGE if the payload is rejected
        """
        is_valid, error = self._validator.validate(image.data, image.content_type)
        if not is_valid:
            raise exceptions.invalid_image(error)

    def upload(self, image: UploadedImage, product_name: str) -> str:
        """
        Validate and store an image.

        Args:
            image: Uploaded image payload
            product_name: Name used to build the storage key

        Returns:
            Public URL of the stored image

        Raises:
            AppException: INVALID_IMAGE if the payload is rejected
            AppException: INTERNAL_ERROR if the file cannot be written
        """
        self.validate(image)

        key = self._keys.build(product_name, self._validator.extension_for(image.content_type))
        path = self.root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(image.data)
        except OSError as e:
            logger.error(f"❌ Failed to store image {key}: {e}")
            raise exceptions.internal_error("Could not store the product image") from e

        logger.info(f"📷 Stored image {key} ({len(image.data)} bytes)")
        return f"{self.url_prefix}/{key}"

    def delete(self, url: Optional[str]) -> bool:
        """
        Remove a stored image by its public URL.

        URLs outside this storage are ignored.

        Returns:
            True if a file was removed
        """
        path = self.path_for(url)
        if path is None or not path.is_file():
            return False

        path.unlink()
        logger.info(f"🗑️ Removed image {path.relative_to(self.root)}")
        return True

    def path_for(self, url: Optional[str]) -> Optional[Path]:
        """Resolve a public URL to a path inside the storage root."""
        if not url or not url.startswith(self.url_prefix + "/"):
            return None

        key = url[len(self.url_prefix) + 1:]
        root = self.root.resolve()
        path = (root / key).resolve()
        if root not in path.parents:
            return None
        return path
