"""
==============================================================================
Product Service Module
==============================================================================

Catalog management: listing, creation, editing, visibility, deletion and
fuzzy search.

This module implements:
- EditMode / ProductEditor: the single product form used for both creating
  and editing a product
- ProductService: Catalog operations that publish a fresh snapshot to the
  CatalogFeed after every write

Write Flow:
----------
    ┌──────────────┐     ┌──────────────┐     ┌──────────────┐
    │ ProductDraft │────▶│ProductEditor │────▶│   Product    │
    │  (+ image)   │     │  validate /  │     │   (ORM row)  │
    └──────────────┘     │    apply     │     └──────┬───────┘
                         └──────────────┘            │ commit
                                                     ▼
                                              ┌──────────────┐
                                              │ CatalogFeed  │
                                              │  .publish()  │
                                              └──────────────┘

==============================================================================
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from dashboard.config import get_settings
from dashboard.core import exceptions
from dashboard.core.context import OperatorContext
from dashboard.catalog.feed import CatalogFeed
from dashboard.catalog.models import CatalogSnapshot, ProductRecord
from dashboard.db.models import Product, ProductCategory, utcnow
from dashboard.schemas.product import ProductDraft
from dashboard.search.matcher import ProductMatcher
from dashboard.storage.images import ImageStorage, UploadedImage


# Module logger
logger = logging.getLogger(__name__)


CATEGORY_ALL = "all"


class EditMode(str, enum.Enum):
    CREATE = "create"
    EDIT = "edit"


class ProductEditor:
    """
    Applies an operator's ProductDraft to a Product row.

    CREATE requires a name, a description and an image, and fills in
    defaults for everything else. EDIT only touches the fields that were
    supplied.

    Example:
        >>> editor = ProductEditor(EditMode.EDIT)
        >>> editor.apply(product, ProductDraft(price=12.5))
    """

    REQUIRED_ON_CREATE = ("name", "description")

    DEFAULTS: Dict[str, Any] = {
        "category": ProductCategory.LIGHTING_GROUP,
        "price": 0.0,
        "stock_quantity": 0,
        "show": True,
    }

    def __init__(self, mode: EditMode) -> None:
        self.mode = EditMode(mode)

    def changes(self, draft: ProductDraft) -> Dict[str, Any]:
        """Fields supplied by the operator, with text fields trimmed."""
        values = draft.model_dump(exclude_unset=True, exclude_none=True)

        for field in ("name", "description"):
            if field in values:
                values[field] = values[field].strip()

        return values

    def validate(self, draft: ProductDraft, has_image: bool) -> Dict[str, Any]:
        """
        Check a draft against the rules of this mode.

        Returns:
            The field values that apply() will write

        Raises:
            AppException: INVALID_PRODUCT for missing or bad fields
            AppException: IMAGE_REQUIRED when creating without an image
        """
        values = self.changes(draft)

        if self.mode is EditMode.CREATE:
            for field in self.REQUIRED_ON_CREATE:
                if not values.get(field):
                    raise exceptions.invalid_product(f"{field} is required", field)
            if not has_image:
                raise exceptions.image_required()
            values = {**self.DEFAULTS, **values}
        elif "name" in values and not values["name"]:
            raise exceptions.invalid_product("name cannot be blank", "name")

        if "category" in values:
            try:
                values["category"] = ProductCategory(values["category"])
            except ValueError:
                raise exceptions.invalid_product(
                    f"unknown category '{values['category']}'", "category"
                )

        if values.get("price", 0) < 0:
            raise exceptions.invalid_product("price must be non-negative", "price")

        if values.get("stock_quantity", 0) < 0:
            raise exceptions.invalid_product("stock quantity must be non-negative", "stock_quantity")

        return values

    def apply(
        self,
        product: Product,
        draft: ProductDraft,
        image_url: Optional[str] = None
    ) -> Product:
        """
        Write a validated draft onto `product` and stamp its timestamps.

        Raises:
            AppException: As validate()
        """
        has_image = image_url is not None or (self.mode is EditMode.EDIT and bool(product.image))
        values = self.validate(draft, has_image)

        for field, value in values.items():
            setattr(product, field, value)

        if image_url is not None:
            product.image = image_url

        now = utcnow()
        if self.mode is EditMode.CREATE:
            product.created_on = now
        product.updated_on = now

        return product


class ProductService:
    """
    Catalog operations for an authenticated operator.

    Attributes:
        _db: Database session
        _feed: Feed receiving a snapshot after every write (optional)
        _storage: Image storage for uploads
        _matcher: Fuzzy name matcher used by search()

    Example:
        >>> service = ProductService(db, feed, storage)
        >>> product = service.create_product(actor, draft, image)
        >>> service.search("widget")
    """

    def __init__(
        self,
        db: Session,
        feed: Optional[CatalogFeed] = None,
        storage: Optional[ImageStorage] = None,
        matcher: Optional[ProductMatcher] = None
    ) -> None:
        self._db = db
        self._feed = feed
        self._storage = storage or ImageStorage()
        self._matcher = matcher or ProductMatcher(get_settings().search_similarity_threshold)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def list_products(
        self,
        category: Optional[Union[ProductCategory, str]] = None
    ) -> List[Product]:
        """
        List the catalog in display order.

        Args:
            category: Category to filter by; None or "all" lists everything

        Raises:
            AppException: INVALID_PRODUCT for an unknown category
        """
        query = self._db.query(Product)

        if category is not None and str(category) != CATEGORY_ALL:
            try:
                selected = ProductCategory(category)
            except ValueError:
                raise exceptions.invalid_product(f"unknown category '{category}'", "category")
            query = query.filter(Product.category == selected)

        return query.order_by(Product.created_on.asc(), Product.id.asc()).all()

    def get_product(self, product_id: str) -> Product:
        """
        Raises:
            AppException: PRODUCT_NOT_FOUND if absent
        """
        product = self._db.query(Product).filter(Product.id == product_id).first()

        if not product:
            raise exceptions.product_not_found(product_id)

        return product

    def snapshot(self) -> List[ProductRecord]:
        """The ordered catalog as immutable records."""
        return [ProductRecord.model_validate(product) for product in self.list_products()]

    def search(self, query: str) -> List[ProductRecord]:
        """Fuzzy name search over the current catalog, in catalog order."""
        if not query or not query.strip():
            return []
        return self._matcher.match(query, self.snapshot())

    # =========================================================================
    # WRITES
    # =========================================================================

    def create_product(
        self,
        actor: OperatorContext,
        draft: ProductDraft,
        image: Optional[UploadedImage]
    ) -> Product:
        """
        Create a product with its image.

        Raises:
            AppException: INVALID_PRODUCT, IMAGE_REQUIRED or INVALID_IMAGE
        """
        editor = ProductEditor(EditMode.CREATE)
        values = editor.validate(draft, has_image=image is not None)
        self._storage.validate(image)

        image_url = self._storage.upload(image, values["name"])

        product = Product()
        try:
            editor.apply(product, draft, image_url)
            self._db.add(product)
            self._db.commit()
        except Exception:
            self._db.rollback()
            self._storage.delete(image_url)
            raise

        self._db.refresh(product)
        logger.info(f"✅ Product created: {product.name} ({product.id}) by {actor}")

        self.publish()
        return product

    def update_product(
        self,
        actor: OperatorContext,
        product_id: str,
        draft: ProductDraft,
        image: Optional[UploadedImage] = None
    ) -> Product:
        """
        Apply the supplied fields and optionally replace the image.

        Raises:
            AppException: PRODUCT_NOT_FOUND, INVALID_PRODUCT or INVALID_IMAGE
        """
        product = self.get_product(product_id)
        editor = ProductEditor(EditMode.EDIT)
        values = editor.validate(draft, has_image=True)

        old_image = product.image
        new_image = None
        if image is not None:
            new_image = self._storage.upload(image, values.get("name", product.name))

        try:
            editor.apply(product, draft, new_image)
            self._db.commit()
        except Exception:
            self._db.rollback()
            if new_image:
                self._storage.delete(new_image)
            raise

        if new_image and old_image != new_image:
            self._storage.delete(old_image)

        self._db.refresh(product)
        logger.info(f"✏️ Product updated: {product.name} ({product.id}) by {actor}")

        self.publish()
        return product

    def toggle_visibility(self, actor: OperatorContext, product_id: str) -> Product:
        """Flip the product's `show` flag."""
        product = self.get_product(product_id)

        product.show = not product.show
        product.updated_on = utcnow()
        self._db.commit()
        self._db.refresh(product)

        state = "shown" if product.show else "hidden"
        logger.info(f"👁️ Product {state}: {product.name} ({product.id}) by {actor}")

        self.publish()
        return product

    def delete_product(self, actor: OperatorContext, product_id: str) -> bool:
        """Remove a product and its stored image."""
        product = self.get_product(product_id)
        image_url = product.image
        name = product.name

        self._db.delete(product)
        self._db.commit()

        self._storage.delete(image_url)
        logger.info(f"🗑️ Product deleted: {name} ({product_id}) by {actor}")

        self.publish()
        return True

    # =========================================================================
    # FEED
    # =========================================================================

    def publish(self) -> Optional[CatalogSnapshot]:
        """Push the current catalog to the feed, if one is attached."""
        if self._feed is None:
            return None
        return self._feed.publish(self.snapshot())
