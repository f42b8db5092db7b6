"""
==============================================================================
Storage Package
==============================================================================

Object storage for uploaded product images.

==============================================================================
"""

from .images import ImageStorage, UploadedImage

__all__ = ["ImageStorage", "UploadedImage"]
