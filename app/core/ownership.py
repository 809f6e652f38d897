"""
Ownership guard.

A user may act on a merchant's resources only when the merchant exists, is
active and has `owner_id` equal to the user. Branches, products, customers
and orders inherit that rule through their `merchant_id`.
"""
from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models.merchant import Merchant
from app.models.user import User

T = TypeVar("T")


def authorize(db: Session, user_id: int, merchant_id: Optional[int]) -> bool:
    if merchant_id is None:
        return False
    found = db.query(Merchant.id).filter(
        Merchant.id == merchant_id,
        Merchant.owner_id == user_id,
        Merchant.active(),
    ).first()
    return found is not None


def require_merchant_access(db: Session, user: User, merchant_id: Optional[int]) -> None:
    if not authorize(db, user.id, merchant_id):
        raise ForbiddenError("You do not have access to this merchant")


def get_owned_merchant(db: Session, user: User, merchant_id: int) -> Merchant:
    merchant = db.query(Merchant).filter(
        Merchant.id == merchant_id,
        Merchant.active(),
    ).first()
    if merchant is None:
        raise NotFoundError("Merchant not found")
    if merchant.owner_id != user.id:
        raise ForbiddenError("You do not have access to this merchant")
    return merchant


def get_owned_entity(db: Session, user: User, model: Type[T], entity_id: int) -> T:
    """
    Load an active merchant-scoped row by id and check it belongs to `user`.

    404 when the row (or its merchant) is absent or inactive, 403 when its
    merchant is owned by someone else.
    """
    row = (
        db.query(model, Merchant.owner_id)
        .join(Merchant, model.merchant_id == Merchant.id)
        .filter(model.id == entity_id, model.active(), Merchant.active())
        .first()
    )
    label = model.__name__
    if row is None:
        raise NotFoundError(f"{label} not found")

    entity, owner_id = row
    if owner_id != user.id:
        raise ForbiddenError(f"You do not have access to this {label.lower()}")
    return entity
