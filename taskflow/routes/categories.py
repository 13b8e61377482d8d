from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..auth.security import ADMIN_ROLES, require_authenticated, require_role
from ..schemas.team import Category, CategoryCreate, CategoryUpdate
from ..storage import StorageProvider, get_storage


router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=List[Category])
def list_categories(storage: StorageProvider = Depends(get_storage), _=Depends(require_authenticated)):
    return storage.list_categories()


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role(*ADMIN_ROLES)),
):
    return storage.create_category(payload.model_dump())


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    category = storage.update_category(category_id, payload.model_dump(exclude_unset=True))
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    storage: StorageProvider = Depends(get_storage),
    _=Depends(require_role("admin")),
):
    if not storage.delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
