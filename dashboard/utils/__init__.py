"""
==============================================================================
Utilities Package
==============================================================================

Modules:
--------
- validators: Image upload validation and storage key construction

==============================================================================
"""

from .validators import ImageUploadValidator, StorageKeyBuilder

__all__ = [
    "ImageUploadValidator",
    "StorageKeyBuilder",
]
