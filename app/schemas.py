from typing import Optional, List, Any, Annotated
from pydantic import BaseModel, Field, PlainSerializer, field_validator
from datetime import datetime, date
from decimal import Decimal
from app.models.user import UserRole
from app.models.order import OrderStatus

# Money travels as a decimal string with two places ("30.00")
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: f"{Decimal(v):.2f}", return_type=str, when_used="json"),
]

# Order item quantities are stored in a 32-bit INTEGER column
MAX_QUANTITY = 2**31 - 1

# --- Auth Schemas ---
class LoginRequest(BaseModel):
    # Optional so that missing fields answer 400 with a specific message
    email: Optional[str] = None
    password: Optional[str] = None

# --- User Schemas ---
class UserCreate(BaseModel):
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)

class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[UserRole] = None

class UserResponse(BaseModel):
    id: int
    full_name: str
    email: str
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LoginResponse(BaseModel):
    message: str
    user: UserResponse
    token: str

class UserDeactivated(BaseModel):
    message: str
    user: UserResponse

# --- Merchant Schemas ---
class MerchantCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None

class MerchantUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

class MerchantResponse(BaseModel):
    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class MerchantDeactivated(BaseModel):
    message: str
    merchant: MerchantResponse

# --- Branch Schemas ---
class BranchBase(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = None
    phone: Optional[str] = None

class BranchCreate(BranchBase):
    merchant_id: int
    name: str = Field(min_length=1)

class BranchUpdate(BranchBase):
    name: Optional[str] = None

class BranchResponse(BranchBase):
    id: int
    merchant_id: int
    name: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BranchDeactivated(BaseModel):
    message: str
    branch: BranchResponse

# --- Product Schemas ---
class ProductCreate(BaseModel):
    merchant_id: int
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    sku: Optional[str] = None
    description: Optional[str] = None

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    description: Optional[str] = None

class ProductResponse(BaseModel):
    id: int
    merchant_id: int
    name: str
    sku: Optional[str] = None
    price: Money
    description: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ProductDeactivated(BaseModel):
    message: str
    product: ProductResponse

# --- Customer Schemas ---
class CustomerBase(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None

class CustomerCreate(CustomerBase):
    merchant_id: int
    full_name: str = Field(min_length=1)

class CustomerUpdate(CustomerBase):
    full_name: Optional[str] = None

class CustomerResponse(CustomerBase):
    id: int
    merchant_id: int
    full_name: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CustomerDeactivated(BaseModel):
    message: str
    customer: CustomerResponse

# --- Order Schemas ---
class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, le=MAX_QUANTITY)

    @field_validator('quantity', mode='before')
    @classmethod
    def coerce_quantity(cls, v: Any) -> int:
        # absent, non-numeric or non-positive quantities count as 1
        try:
            qty = int(v)
        except (TypeError, ValueError, OverflowError):
            return 1
        return qty if qty > 0 else 1

class OrderCreate(BaseModel):
    merchant_id: Optional[int] = None
    branch_id: Optional[int] = None
    customer_id: Optional[int] = None
    items: Optional[List[OrderItemCreate]] = None
    notes: Optional[str] = None

class OrderResponse(BaseModel):
    id: int
    merchant_id: int
    branch_id: Optional[int] = None
    customer_id: Optional[int] = None
    created_by: int
    total_amount: Money
    status: OrderStatus
    notes: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class OrderItemResponse(BaseModel):
    id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: Money
    total_price: Money
    created_at: Optional[datetime] = None

class OrderDetailResponse(BaseModel):
    order: OrderResponse
    items: List[OrderItemResponse] = []

class OrderCreatedResponse(OrderDetailResponse):
    message: str

class OrderPaidResponse(BaseModel):
    message: str
    order: OrderResponse

# --- Report Schemas ---
class DailySalesResponse(BaseModel):
    merchant_id: int
    merchant_name: str
    date: date
    total_orders: int
    total_sales: Money

class SalesRangeRow(BaseModel):
    sale_date: date
    total_orders: int
    total_sales: Money

class TopProductRow(BaseModel):
    product_id: int
    product_name: str
    total_quantity: int
    total_revenue: Money

class MerchantSalesSummary(BaseModel):
    merchant_id: int
    merchant_name: str
    total_orders: int
    total_sales: Money

class OwnerDailySummaryResponse(BaseModel):
    date: date
    total_orders: int
    total_sales: Money
    merchants: List[MerchantSalesSummary] = []
