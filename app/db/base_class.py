from typing import Any
from sqlalchemy import Boolean, Column, DateTime, func
from sqlalchemy.orm import as_declarative, declared_attr

@as_declarative()
class Base:
    id: Any
    __name__: str

    # Default table name from the class name; models set __tablename__ explicitly
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


class LifecycleMixin:
    """
    Active / Inactive lifecycle shared by every entity.

    Rows are never physically removed: `deactivate()` is the only delete path
    and `active()` is the filter every normal read goes through.
    """

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @classmethod
    def active(cls):
        return cls.is_active.is_(True)

    def deactivate(self) -> None:
        self.is_active = False
