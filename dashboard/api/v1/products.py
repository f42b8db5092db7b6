"""
==============================================================================
Product Catalog Endpoints
==============================================================================

Endpoints for browsing, editing and searching the product catalog.

Create and edit take multipart forms so the product image can travel with
the fields; every write publishes a new catalog snapshot to live search.

==============================================================================
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.db.models import ProductCategory
from dashboard.catalog.feed import CatalogFeed
from dashboard.core.context import OperatorContext
from dashboard.core.dependencies import (
    get_catalog_feed,
    get_image_storage,
    get_operator_context,
)
from dashboard.services.product_service import CATEGORY_ALL, ProductService
from dashboard.storage.images import ImageStorage, UploadedImage
from dashboard.schemas.common import MessageResponse
from dashboard.schemas.product import (
    CategoryInfo,
    CategoryListResponse,
    ProductDetail,
    ProductDraft,
    ProductListResponse,
    ProductResponse,
    ProductSearchResponse,
)


router = APIRouter(prefix="/products", tags=["Products"])


async def _read_upload(image: Optional[UploadFile]) -> Optional[UploadedImage]:
    if image is None or not image.filename:
        return None
    data = await image.read()
    return UploadedImage(data=data, filename=image.filename, content_type=image.content_type)


def _draft(**fields) -> ProductDraft:
    # Only submitted form fields count as set
    return ProductDraft(**{name: value for name, value in fields.items() if value is not None})


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, db: Session, feed: CatalogFeed, storage: ImageStorage):
        self._service = ProductService(db, feed, storage)

    def list_products(self, category: Optional[str]) -> ProductListResponse:
        products = self._service.list_products(category)
        selected = None if category in (None, CATEGORY_ALL) else ProductCategory(category)

        return ProductListResponse(
            category=selected,
            total=len(products),
            products=[ProductDetail.model_validate(p) for p in products]
        )

    @staticmethod
    def get_categories() -> CategoryListResponse:
        return CategoryListResponse(
            default=ProductCategory.default(),
            categories=[
                CategoryInfo(value=category, label=category.display_name)
                for category in ProductCategory
            ]
        )

    def search(self, query: str) -> ProductSearchResponse:
        matched = self._service.search(query)

        return ProductSearchResponse(
            query=query,
            total=len(matched),
            products=[ProductDetail.model_validate(p) for p in matched]
        )

    def get_product(self, product_id: str) -> ProductResponse:
        product = self._service.get_product(product_id)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def create(
        self,
        actor: OperatorContext,
        draft: ProductDraft,
        image: Optional[UploadedImage]
    ) -> ProductResponse:
        product = self._service.create_product(actor, draft, image)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def update(
        self,
        actor: OperatorContext,
        product_id: str,
        draft: ProductDraft,
        image: Optional[UploadedImage]
    ) -> ProductResponse:
        product = self._service.update_product(actor, product_id, draft, image)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def toggle_visibility(self, actor: OperatorContext, product_id: str) -> ProductResponse:
        product = self._service.toggle_visibility(actor, product_id)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def delete(self, actor: OperatorContext, product_id: str) -> MessageResponse:
        self._service.delete_product(actor, product_id)
        return MessageResponse(message=f"Product {product_id} deleted")


def get_controller(
    db: Session = Depends(get_db),
    feed: CatalogFeed = Depends(get_catalog_feed),
    storage: ImageStorage = Depends(get_image_storage)
) -> ProductController:
    return ProductController(db, feed, storage)


@router.get("", response_model=ProductListResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Category value, or 'all'"),
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """List the catalog, optionally filtered by category."""
    return controller.list_products(category)


@router.get("/categories", response_model=CategoryListResponse)
async def get_categories(actor: OperatorContext = Depends(get_operator_context)):
    """Get all product categories."""
    return ProductController.get_categories()


@router.get("/search", response_model=ProductSearchResponse)
async def search_products(
    q: str = Query("", max_length=200),
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Fuzzy search by product name; results keep catalog order."""
    return controller.search(q)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: str,
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Get a single product."""
    return controller.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    name: Optional[str] = Form(None, max_length=200),
    description: Optional[str] = Form(None),
    category: Optional[ProductCategory] = Form(None),
    price: Optional[float] = Form(None, ge=0),
    stock_quantity: Optional[int] = Form(None, ge=0),
    show: Optional[bool] = Form(None),
    image: Optional[UploadFile] = File(None),
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Create a product. Name, description and image are required."""
    draft = _draft(
        name=name,
        description=description,
        category=category,
        price=price,
        stock_quantity=stock_quantity,
        show=show,
    )
    return controller.create(actor, draft, await _read_upload(image))


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    name: Optional[str] = Form(None, max_length=200),
    description: Optional[str] = Form(None),
    category: Optional[ProductCategory] = Form(None),
    price: Optional[float] = Form(None, ge=0),
    stock_quantity: Optional[int] = Form(None, ge=0),
    show: Optional[bool] = Form(None),
    image: Optional[UploadFile] = File(None),
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Update the submitted fields and optionally replace the image."""
    draft = _draft(
        name=name,
        description=description,
        category=category,
        price=price,
        stock_quantity=stock_quantity,
        show=show,
    )
    return controller.update(actor, product_id, draft, await _read_upload(image))


@router.post("/{product_id}/toggle-visibility", response_model=ProductResponse)
async def toggle_visibility(
    product_id: str,
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Show or hide a product in the storefront."""
    return controller.toggle_visibility(actor, product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    actor: OperatorContext = Depends(get_operator_context),
    controller: ProductController = Depends(get_controller)
):
    """Delete a product and its image."""
    return controller.delete(actor, product_id)
