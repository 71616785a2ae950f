"""Product API routes"""

import logging

from fastapi import APIRouter, Depends

from ..database.categories import CategoryDatabase
from ..database.products import ProductDatabase
from ..dependencies import get_category_db, get_product_db
from ..exceptions import NotFoundError
from ..models.product import (
    Product,
    ProductCreateRequest,
    ProductUpdateRequest,
    StockAdjustmentRequest,
)
from ..security.auth_middleware import require_admin
from ..security.models import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"image_url"}


def _require_category(category_db: CategoryDatabase, category_id: str) -> None:
    if not category_db.get_category(category_id):
        raise NotFoundError("Category", category_id)


@router.get("", response_model=list[Product])
def list_products(product_db: ProductDatabase = Depends(get_product_db)):
    """List all products"""
    return product_db.list_products()


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, product_db: ProductDatabase = Depends(get_product_db)):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise NotFoundError("Product", product_id)
    return product


@router.post("", response_model=Product, status_code=201)
def create_product(
    request: ProductCreateRequest,
    _admin: Identity = Depends(require_admin),
    product_db: ProductDatabase = Depends(get_product_db),
    category_db: CategoryDatabase = Depends(get_category_db),
):
    """Create a product in an existing category"""
    _require_category(category_db, request.category_id)
    product = product_db.create_product(request)
    logger.info(f"Product {product.id} created with stock {product.stock}")
    return product


@router.put("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    _admin: Identity = Depends(require_admin),
    product_db: ProductDatabase = Depends(get_product_db),
    category_db: CategoryDatabase = Depends(get_category_db),
):
    """Update product details; stock is changed through the stock endpoint"""
    changes = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    if changes.get("category_id"):
        _require_category(category_db, changes["category_id"])

    if not changes:
        return get_product(product_id, product_db)

    product = product_db.update_product(product_id, changes)
    if not product:
        raise NotFoundError("Product", product_id)
    return product


@router.post("/{product_id}/stock", response_model=Product)
def adjust_stock(
    product_id: str,
    request: StockAdjustmentRequest,
    admin: Identity = Depends(require_admin),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Add or remove stock; removals never take stock below zero"""
    product = product_db.adjust_stock(product_id, request.delta)
    logger.info(f"Stock for product {product_id} adjusted by {request.delta} by {admin.user_id}")
    return product


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    _admin: Identity = Depends(require_admin),
    product_db: ProductDatabase = Depends(get_product_db),
):
    if not product_db.delete_product(product_id):
        raise NotFoundError("Product", product_id)
    return {"detail": "Product removed"}
