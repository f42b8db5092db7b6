"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for operator input that Pydantic schemas don't cover.

This module implements:
- ImageUploadValidator: Validates uploaded product images
- StorageKeyBuilder: Builds object-storage keys for product images

==============================================================================
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Optional, Tuple


class ImageUploadValidator:
    """
    Validator for product image uploads.

    Example:
        >>> validator = ImageUploadValidator(max_bytes=1024)
        >>> validator.validate(b"", "image/png")
        (False, 'Image file is empty')
    """

    ALLOWED_CONTENT_TYPES = {
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
        "image/gif": "gif",
    }

    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes

    def validate(self, data: bytes, content_type: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Validate an image payload.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not data:
            return False, "Image file is empty"

        if content_type not in self.ALLOWED_CONTENT_TYPES:
            allowed = ", ".join(sorted(self.ALLOWED_CONTENT_TYPES))
            return False, f"Unsupported content type '{content_type}'. Allowed: {allowed}"

        if len(data) > self.max_bytes:
            return False, f"Image exceeds {self.max_bytes} bytes"

        return True, None

    def extension_for(self, content_type: str) -> str:
        return self.ALLOWED_CONTENT_TYPES.get(content_type, "jpg")


class StorageKeyBuilder:
    """
    Builds storage keys of the form products/<Name_With_Underscores>_<millis>_<suffix>.<ext>.

    The random suffix keeps two uploads of the same name within one
    millisecond from sharing a file.
    """

    PREFIX = "products"
    UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")

    def build(
        self,
        product_name: str,
        extension: str,
        now_ms: Optional[int] = None,
        suffix: Optional[str] = None
    ) -> str:
        stem = re.sub(r"\s+", "_", product_name.strip())
        stem = self.UNSAFE.sub("", stem) or "product"
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        if suffix is None:
            suffix = uuid.uuid4().hex[:8]
        return f"{self.PREFIX}/{stem}_{now_ms}_{suffix}.{extension}"
