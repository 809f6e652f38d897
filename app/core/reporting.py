"""
Read-only sales reports.

Only paid, active orders of active merchants owned by the caller are counted.
An order's sales date is the date part of its `created_at`, read in the
configured server timezone.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Date, and_, desc, func
from sqlalchemy.orm import Session

from app.core import ownership
from app.core.config import get_local_today, settings
from app.core.exceptions import BadRequestError, MissingFieldError, NotFoundError
from app.models.catalog import Product
from app.models.merchant import Merchant
from app.models.order import Order, OrderItem, OrderStatus
from app.models.user import User

ZERO = Decimal("0.00")


def parse_date(value: Optional[str], field: str = "date") -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise BadRequestError(f"{field} must be a date in YYYY-MM-DD format")


def parse_range(from_value: Optional[str], to_value: Optional[str]) -> tuple:
    if not from_value or not to_value:
        raise MissingFieldError("from and to are required (YYYY-MM-DD)")
    start = parse_date(from_value, "from")
    end = parse_date(to_value, "to")
    if start > end:
        raise BadRequestError("from must not be after to")
    return start, end


def _money(value) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


def _sales_date(db: Session):
    """
    Calendar date of an order in `settings.TIMEZONE`, the same zone the
    default "today" is taken from.

    PostgreSQL stores `created_at` as timestamptz and converts it explicitly.
    SQLite keeps naive UTC timestamps, so there TIMEZONE should stay UTC.
    """
    created_at = Order.created_at
    if db.get_bind().dialect.name == "postgresql":
        created_at = func.timezone(settings.TIMEZONE, Order.created_at)
    return func.date(created_at, type_=Date)


def _paid_orders():
    return [Order.status == OrderStatus.paid, Order.active()]


def _merchant_totals(db: Session, day: date, *filters):
    """Order count and sales per merchant for one day; merchants with no sales get zeros."""
    return (
        db.query(
            Merchant.id.label("merchant_id"),
            Merchant.name.label("merchant_name"),
            func.count(Order.id).label("total_orders"),
            func.coalesce(func.sum(Order.total_amount), 0).label("total_sales"),
        )
        .outerjoin(
            Order,
            and_(Order.merchant_id == Merchant.id, _sales_date(db) == day, *_paid_orders()),
        )
        .filter(Merchant.active(), *filters)
        .group_by(Merchant.id, Merchant.name)
        .order_by(Merchant.id)
        .all()
    )


def _top_products(db: Session, start: date, end: date, *filters) -> List[dict]:
    total_quantity = func.sum(OrderItem.quantity).label("total_quantity")
    total_revenue = func.coalesce(func.sum(OrderItem.total_price), 0).label("total_revenue")
    rows = (
        db.query(
            Product.id.label("product_id"),
            Product.name.label("product_name"),
            total_quantity,
            total_revenue,
        )
        .select_from(OrderItem)
        .join(Order, Order.id == OrderItem.order_id)
        .join(Merchant, Merchant.id == Order.merchant_id)
        .join(Product, Product.id == OrderItem.product_id)
        .filter(
            Merchant.active(),
            _sales_date(db) >= start,
            _sales_date(db) <= end,
            *_paid_orders(),
            *filters,
        )
        .group_by(Product.id, Product.name)
        .order_by(desc(total_quantity), desc(total_revenue))
        .all()
    )
    return [
        {
            "product_id": row.product_id,
            "product_name": row.product_name,
            "total_quantity": int(row.total_quantity or 0),
            "total_revenue": _money(row.total_revenue),
        }
        for row in rows
    ]


def daily_sales(db: Session, user: User, merchant_id: Optional[int], day: Optional[date] = None) -> dict:
    if not merchant_id:
        raise MissingFieldError("merchant_id is required")
    merchant = ownership.get_owned_merchant(db, user, merchant_id)
    day = day or get_local_today()

    row = _merchant_totals(db, day, Merchant.id == merchant.id)[0]
    return {
        "merchant_id": row.merchant_id,
        "merchant_name": row.merchant_name,
        "date": day,
        "total_orders": int(row.total_orders),
        "total_sales": _money(row.total_sales),
    }


def sales_range(db: Session, user: User, merchant_id: Optional[int], start: date, end: date) -> List[dict]:
    if not merchant_id:
        raise MissingFieldError("merchant_id is required")
    merchant = ownership.get_owned_merchant(db, user, merchant_id)

    sale_date = _sales_date(db).label("sale_date")
    rows = (
        db.query(
            sale_date,
            func.count(Order.id).label("total_orders"),
            func.coalesce(func.sum(Order.total_amount), 0).label("total_sales"),
        )
        .filter(
            Order.merchant_id == merchant.id,
            _sales_date(db) >= start,
            _sales_date(db) <= end,
            *_paid_orders(),
        )
        .group_by(sale_date)
        .order_by(sale_date)
        .all()
    )
    return [
        {
            "sale_date": str(row.sale_date),
            "total_orders": int(row.total_orders),
            "total_sales": _money(row.total_sales),
        }
        for row in rows
    ]


def top_products(db: Session, user: User, merchant_id: Optional[int], start: date, end: date) -> List[dict]:
    if not merchant_id:
        raise MissingFieldError("merchant_id is required")
    merchant = ownership.get_owned_merchant(db, user, merchant_id)
    return _top_products(db, start, end, Merchant.id == merchant.id)


def owner_daily_summary(db: Session, user: User, day: Optional[date] = None) -> dict:
    day = day or get_local_today()
    rows = _merchant_totals(db, day, Merchant.owner_id == user.id)
    if not rows:
        raise NotFoundError("No active merchant found for this owner")

    merchants = [
        {
            "merchant_id": row.merchant_id,
            "merchant_name": row.merchant_name,
            "total_orders": int(row.total_orders),
            "total_sales": _money(row.total_sales),
        }
        for row in rows
    ]
    return {
        "date": day,
        "total_orders": sum(m["total_orders"] for m in merchants),
        "total_sales": sum((m["total_sales"] for m in merchants), ZERO),
        "merchants": merchants,
    }


def owner_top_products(db: Session, user: User, day: Optional[date] = None) -> List[dict]:
    day = day or get_local_today()
    return _top_products(db, day, day, Merchant.owner_id == user.id)
