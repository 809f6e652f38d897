from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.api import deps
from app.core import catalog
from app.core.ownership import get_owned_entity
from app.db.session import get_db
from app.models.catalog import Customer
from app.models.user import User
from app.schemas import CustomerCreate, CustomerUpdate, CustomerResponse, CustomerDeactivated

router = APIRouter()

@router.get("", response_model=List[CustomerResponse])
def list_customers(
    merchant_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.list_entities(db, current_user, Customer, merchant_id)

@router.get("/{customer_id}", response_model=CustomerResponse)
def read_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return get_owned_entity(db, current_user, Customer, customer_id)

@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_in: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.create_entity(db, current_user, Customer, customer_in)

@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: int,
    customer_in: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return catalog.update_entity(db, current_user, Customer, customer_id, customer_in)

@router.delete("/{customer_id}", response_model=CustomerDeactivated)
def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    customer = catalog.deactivate_entity(db, current_user, Customer, customer_id)
    return {"message": "Customer deactivated", "customer": customer}
