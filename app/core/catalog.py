"""
Shared CRUD for merchant-scoped catalog entities (branches, products,
customers). Every operation goes through the ownership guard first.
"""
import logging
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core import ownership
from app.core.exceptions import MissingFieldError
from app.models.user import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_entity(db: Session, user: User, model: Type[T], data: BaseModel) -> T:
    values = data.model_dump()
    ownership.require_merchant_access(db, user, values.get("merchant_id"))

    entity = model(**values, is_active=True)
    db.add(entity)
    db.commit()
    db.refresh(entity)
    return entity


def list_entities(db: Session, user: User, model: Type[T], merchant_id: Optional[int]) -> List[T]:
    if not merchant_id:
        raise MissingFieldError("merchant_id query parameter is required")
    ownership.require_merchant_access(db, user, merchant_id)

    return db.query(model).filter(
        model.merchant_id == merchant_id,
        model.active(),
    ).order_by(model.id).all()


def update_entity(db: Session, user: User, model: Type[T], entity_id: int, data: BaseModel) -> T:
    entity = ownership.get_owned_entity(db, user, model, entity_id)

    # Partial update: missing or null fields keep their value
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(entity, field, value)

    db.commit()
    db.refresh(entity)
    return entity


def deactivate_entity(db: Session, user: User, model: Type[T], entity_id: int) -> T:
    entity = ownership.get_owned_entity(db, user, model, entity_id)
    entity.deactivate()
    db.commit()
    db.refresh(entity)
    logger.info("%s %s deactivated by user %s", model.__name__, entity.id, user.id)
    return entity
