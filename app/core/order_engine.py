"""
Order creation and payment.

`create_order` validates a requested order against the merchant's catalog and
writes the order plus its items in a single transaction. Item prices are
copied from the product rows at that moment and never revisited, so later
price edits leave historical orders untouched.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core import ownership
from app.core.exceptions import (
    BadRequestError,
    CommerceError,
    InvalidReferenceError,
    MissingFieldError,
    TransactionError,
)
from app.models.catalog import Branch, Customer, Product
from app.models.order import Order, OrderItem, OrderStatus
from app.models.user import User
from app.schemas import OrderCreate

logger = logging.getLogger(__name__)

# Largest value a DECIMAL(12,2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


@dataclass
class LineItem:
    product_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal


def _check_branch(db: Session, branch_id: int, merchant_id: int) -> None:
    found = db.query(Branch.id).filter(
        Branch.id == branch_id,
        Branch.merchant_id == merchant_id,
        Branch.active(),
    ).first()
    if found is None:
        raise InvalidReferenceError("branch", "Invalid branch for this merchant")


def _check_customer(db: Session, customer_id: int, merchant_id: int) -> None:
    found = db.query(Customer.id).filter(
        Customer.id == customer_id,
        Customer.merchant_id == merchant_id,
        Customer.active(),
    ).first()
    if found is None:
        raise InvalidReferenceError("customer", "Invalid customer for this merchant")


def _load_prices(db: Session, product_ids: List[int], merchant_id: int) -> dict:
    """
    Current price of every requested product, keyed by id.

    Rows are read under a shared lock so a product cannot be deactivated or
    repriced between this check and the item inserts.
    """
    wanted = set(product_ids)
    rows = (
        db.query(Product.id, Product.price)
        .filter(
            Product.id.in_(sorted(wanted)),
            Product.merchant_id == merchant_id,
            Product.active(),
        )
        .with_for_update(read=True)
        .all()
    )
    if len(rows) < len(wanted):
        raise InvalidReferenceError(
            "product",
            "Some products do not exist, are inactive or belong to another merchant",
        )
    return {row.id: Decimal(row.price) for row in rows}


def price_lines(order_in: OrderCreate, prices: dict) -> Tuple[List[LineItem], Decimal]:
    """Snapshot unit prices and compute line totals plus the order total."""
    lines = []
    total = Decimal("0.00")
    for item in order_in.items:
        unit_price = prices[item.product_id]
        line_total = unit_price * item.quantity
        lines.append(LineItem(item.product_id, item.quantity, unit_price, line_total))
        total += line_total
    if total > MAX_AMOUNT:
        raise BadRequestError("Order total exceeds the maximum allowed amount")
    return lines, total


def load_items(db: Session, order_id: int) -> List[dict]:
    rows = (
        db.query(OrderItem, Product.name)
        .join(Product, OrderItem.product_id == Product.id)
        .filter(OrderItem.order_id == order_id)
        .order_by(OrderItem.id)
        .all()
    )
    return [
        {
            "id": item.id,
            "product_id": item.product_id,
            "product_name": product_name,
            "quantity": item.quantity,
            "unit_price": item.unit_price,
            "total_price": item.total_price,
            "created_at": item.created_at,
        }
        for item, product_name in rows
    ]


def create_order(db: Session, user: User, order_in: OrderCreate) -> Tuple[Order, List[dict]]:
    if not order_in.merchant_id:
        raise MissingFieldError("merchant_id is required")
    if not order_in.items:
        raise MissingFieldError("items is required and must contain at least one product")

    ownership.require_merchant_access(db, user, order_in.merchant_id)

    merchant_id = order_in.merchant_id
    try:
        if order_in.branch_id:
            _check_branch(db, order_in.branch_id, merchant_id)
        if order_in.customer_id:
            _check_customer(db, order_in.customer_id, merchant_id)

        prices = _load_prices(db, [i.product_id for i in order_in.items], merchant_id)
        lines, total_amount = price_lines(order_in, prices)

        order = Order(
            merchant_id=merchant_id,
            branch_id=order_in.branch_id or None,
            customer_id=order_in.customer_id or None,
            created_by=user.id,
            total_amount=total_amount,
            status=OrderStatus.pending,
            notes=order_in.notes or None,
        )
        db.add(order)
        db.flush()  # assigns order.id

        for line in lines:
            db.add(OrderItem(
                order_id=order.id,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price,
            ))
        db.flush()

        items = load_items(db, order.id)
        db.commit()
    except CommerceError as e:
        db.rollback()
        logger.warning(
            "Order rejected for merchant %s by user %s: %s", merchant_id, user.id, e.detail
        )
        raise
    except Exception:
        db.rollback()
        logger.exception("Order transaction failed for merchant %s", merchant_id)
        raise TransactionError("Error creating order")

    db.refresh(order)
    logger.info(
        "Order %s created for merchant %s (%s items, total %s)",
        order.id, merchant_id, len(items), order.total_amount,
    )
    return order, items


def pay_order(db: Session, user: User, order_id: int) -> Tuple[Order, bool]:
    """
    Move an order from pending to paid.

    Returns the order and whether it changed. Paying an already paid order is a
    no-op and leaves updated_at as it was.
    """
    order = ownership.get_owned_entity(db, user, Order, order_id)
    if order.status == OrderStatus.paid:
        return order, False

    order.status = OrderStatus.paid
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to mark order %s as paid", order_id)
        raise TransactionError("Error marking order as paid")

    db.refresh(order)
    logger.info("Order %s marked as paid", order.id)
    return order, True


def get_order_detail(db: Session, user: User, order_id: int) -> Tuple[Order, List[dict]]:
    order = ownership.get_owned_entity(db, user, Order, order_id)
    return order, load_items(db, order.id)


def list_orders(
    db: Session, user: User, merchant_id: Optional[int], branch_id: Optional[int] = None
) -> List[Order]:
    if not merchant_id:
        raise MissingFieldError("merchant_id is required")
    ownership.require_merchant_access(db, user, merchant_id)

    query = db.query(Order).filter(Order.merchant_id == merchant_id, Order.active())
    if branch_id:
        query = query.filter(Order.branch_id == branch_id)
    return query.order_by(Order.id.desc()).all()
