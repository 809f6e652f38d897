import enum
from sqlalchemy import Column, String, Integer, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.db.base_class import Base, LifecycleMixin

# Enum lives next to User
class UserRole(str, enum.Enum):
    owner = "owner"
    admin = "admin"

class User(LifecycleMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.owner)

    # Relationship: businesses owned by this user
    merchants = relationship("Merchant", back_populates="owner")
