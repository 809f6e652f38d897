from sqlalchemy import Column, String, Integer, ForeignKey, DECIMAL, Text
from sqlalchemy.orm import relationship
from app.db.base_class import Base, LifecycleMixin

# Physical location of a merchant
class Branch(LifecycleMixin, Base):
    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)

    name = Column(String(150), nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)

    merchant = relationship("Merchant", back_populates="branches")

# Sellable product; price is copied into order_items at sale time
class Product(LifecycleMixin, Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)

    name = Column(String(150), nullable=False)
    sku = Column(String(64), nullable=True)
    price = Column(DECIMAL(12, 2), nullable=False)
    description = Column(Text, nullable=True)

    merchant = relationship("Merchant", back_populates="products")

class Customer(LifecycleMixin, Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)

    full_name = Column(String(150), nullable=False)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    merchant = relationship("Merchant", back_populates="customers")
