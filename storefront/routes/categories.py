"""Category API routes"""

from fastapi import APIRouter, Depends

from ..database.categories import CategoryDatabase
from ..dependencies import get_category_db
from ..exceptions import ConflictError, NotFoundError
from ..models.category import Category, CategoryRequest
from ..security.auth_middleware import require_admin
from ..security.models import Identity

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", response_model=list[Category])
def list_categories(category_db: CategoryDatabase = Depends(get_category_db)):
    """List all categories"""
    return category_db.list_categories()


@router.get("/{category_id}", response_model=Category)
def get_category(category_id: str, category_db: CategoryDatabase = Depends(get_category_db)):
    category = category_db.get_category(category_id)
    if not category:
        raise NotFoundError("Category", category_id)
    return category


@router.post("", response_model=Category, status_code=201)
def create_category(
    request: CategoryRequest,
    _admin: Identity = Depends(require_admin),
    category_db: CategoryDatabase = Depends(get_category_db),
):
    if category_db.get_category_by_name(request.name):
        raise ConflictError("Category already exists")
    return category_db.create_category(request.name)


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    request: CategoryRequest,
    _admin: Identity = Depends(require_admin),
    category_db: CategoryDatabase = Depends(get_category_db),
):
    existing = category_db.get_category_by_name(request.name)
    if existing and existing.id != category_id:
        raise ConflictError("Category already exists")

    category = category_db.rename_category(category_id, request.name)
    if not category:
        raise NotFoundError("Category", category_id)
    return category


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    _admin: Identity = Depends(require_admin),
    category_db: CategoryDatabase = Depends(get_category_db),
):
    if not category_db.delete_category(category_id):
        raise NotFoundError("Category", category_id)
    return {"detail": "Category removed"}
