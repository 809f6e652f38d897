import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.api import deps
from app.core.ownership import get_owned_merchant
from app.db.session import get_db
from app.models.merchant import Merchant
from app.models.user import User
from app.schemas import MerchantCreate, MerchantUpdate, MerchantResponse, MerchantDeactivated

router = APIRouter()
logger = logging.getLogger(__name__)

# Only the caller's own active businesses
@router.get("", response_model=List[MerchantResponse])
def list_my_merchants(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return db.query(Merchant).filter(
        Merchant.owner_id == current_user.id,
        Merchant.active()
    ).order_by(Merchant.id).all()

@router.get("/{merchant_id}", response_model=MerchantResponse)
def read_merchant(
    merchant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return get_owned_merchant(db, current_user, merchant_id)

@router.post("", response_model=MerchantResponse, status_code=status.HTTP_201_CREATED)
def create_merchant(
    merchant_in: MerchantCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    new_merchant = Merchant(
        owner_id=current_user.id,
        name=merchant_in.name,
        description=merchant_in.description or None,
        is_active=True
    )
    db.add(new_merchant)
    db.commit()
    db.refresh(new_merchant)
    return new_merchant

@router.put("/{merchant_id}", response_model=MerchantResponse)
def update_merchant(
    merchant_id: int,
    merchant_in: MerchantUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    merchant = get_owned_merchant(db, current_user, merchant_id)

    # Fields left out (or null) keep their current value
    update_data = merchant_in.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is not None:
            setattr(merchant, field, value)

    db.commit()
    db.refresh(merchant)
    return merchant

# Soft delete (is_active = false)
@router.delete("/{merchant_id}", response_model=MerchantDeactivated)
def delete_merchant(
    merchant_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    merchant = get_owned_merchant(db, current_user, merchant_id)
    merchant.deactivate()
    db.commit()
    db.refresh(merchant)
    logger.info("Merchant %s deactivated by user %s", merchant.id, current_user.id)
    return {"message": "Merchant deactivated", "merchant": merchant}
