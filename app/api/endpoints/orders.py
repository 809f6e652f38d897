from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core import order_engine
from app.db.session import get_db
from app.models.user import User
from app.schemas import (
    OrderCreate, OrderResponse, OrderDetailResponse,
    OrderCreatedResponse, OrderPaidResponse,
)

router = APIRouter()

# GET /api/orders?merchant_id=1&branch_id=1 (newest first)
@router.get("", response_model=List[OrderResponse])
def list_orders(
    merchant_id: Optional[int] = None,
    branch_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    return order_engine.list_orders(db, current_user, merchant_id, branch_id)

@router.get("/{order_id}", response_model=OrderDetailResponse)
def read_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    order, items = order_engine.get_order_detail(db, current_user, order_id)
    return {"order": order, "items": items}

@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_in: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    order, items = order_engine.create_order(db, current_user, order_in)
    return {"message": "Order created", "order": order, "items": items}

@router.patch("/{order_id}/pay", response_model=OrderPaidResponse)
def pay_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user)
):
    order, changed = order_engine.pay_order(db, current_user, order_id)
    message = "Order marked as paid" if changed else "Order is already paid"
    return {"message": message, "order": order}
