import enum
from sqlalchemy import Column, Integer, ForeignKey, DECIMAL, DateTime, Text, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.base_class import Base, LifecycleMixin

class OrderStatus(str, enum.Enum):
    pending = "pending"
    paid = "paid"

class Order(LifecycleMixin, Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    # Sum of items.total_price at creation, never recomputed
    total_amount = Column(DECIMAL(12, 2), nullable=False, default=0)
    status = Column(SAEnum(OrderStatus), nullable=False, default=OrderStatus.pending)
    notes = Column(Text, nullable=True)

    merchant = relationship("Merchant")
    branch = relationship("Branch")
    customer = relationship("Customer")
    creator = relationship("User")
    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")

class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    # Snapshot of products.price when the order was created
    unit_price = Column(DECIMAL(12, 2), nullable=False)
    total_price = Column(DECIMAL(12, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    order = relationship("Order", back_populates="items")
    product = relationship("Product")
