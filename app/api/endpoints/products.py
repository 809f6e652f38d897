from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.api import deps
from app.core import catalog
from app.core.ownership import get_owned_entity
from app.db.session import get_db
from app.models.catalog import Product
from app.models.user import User
from app.schemas import ProductCreate, ProductUpdate, ProductResponse, ProductDeactivated

router = APIRouter()

# GET /api/products?merchant_id=1 (active only)
@router.get("", response_model=List[ProductResponse])
def list_products(
    merchant_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.list_entities(db, current_user, Product, merchant_id)

@router.get("/{product_id}", response_model=ProductResponse)
def read_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return get_owned_entity(db, current_user, Product, product_id)

@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.create_entity(db, current_user, Product, product_in)

# Price edits never touch existing order items (they hold their own copy)
@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.update_entity(db, current_user, Product, product_id, product_in)

@router.delete("/{product_id}", response_model=ProductDeactivated)
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    product = catalog.deactivate_entity(db, current_user, Product, product_id)
    return {"message": "Product deactivated", "product": product}
