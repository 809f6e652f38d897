from sqlalchemy import Column, String, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.db.base_class import Base, LifecycleMixin

class Merchant(LifecycleMixin, Base):
    __tablename__ = "merchants"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)

    # Relationship: string names avoid circular imports
    owner = relationship("User", back_populates="merchants")
    branches = relationship("Branch", back_populates="merchant")
    products = relationship("Product", back_populates="merchant")
    customers = relationship("Customer", back_populates="merchant")
