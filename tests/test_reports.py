from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from sqlalchemy.dialects import postgresql

from app.core import reporting
from app.models import Merchant, Order, OrderItem, OrderStatus
from conftest import make_product


def make_order(db, merchant, user, lines, when, status=OrderStatus.paid):
    """Insert an order dated `when` with (product, quantity) lines."""
    total = sum((p.price * q for p, q in lines), Decimal("0.00"))
    order = Order(
        merchant_id=merchant.id,
        created_by=user.id,
        total_amount=total,
        status=status,
        created_at=when,
    )
    db.add(order)
    db.flush()
    for product, quantity in lines:
        db.add(OrderItem(
            order_id=order.id,
            product_id=product.id,
            quantity=quantity,
            unit_price=product.price,
            total_price=product.price * quantity,
        ))
    db.commit()
    return order


DAY = datetime(2024, 3, 10, 12, 0, 0)
NEXT_DAY = datetime(2024, 3, 11, 9, 30, 0)


def test_daily_sales_without_orders(client, merchant, headers):
    response = client.get(
        f"/api/reports/daily-sales?merchant_id={merchant.id}&date=2024-03-10", headers=headers
    )

    assert response.status_code == 200
    assert response.json() == {
        "merchant_id": merchant.id,
        "merchant_name": "Cafe Central",
        "date": "2024-03-10",
        "total_orders": 0,
        "total_sales": "0.00",
    }


def test_daily_sales_counts_only_paid_orders(client, db, owner, merchant, product, headers):
    make_order(db, merchant, owner, [(product, 3)], DAY)
    make_order(db, merchant, owner, [(product, 1)], DAY)
    make_order(db, merchant, owner, [(product, 5)], DAY, status=OrderStatus.pending)
    make_order(db, merchant, owner, [(product, 2)], NEXT_DAY)

    body = client.get(
        f"/api/reports/daily-sales?merchant_id={merchant.id}&date=2024-03-10", headers=headers
    ).json()

    assert body["total_orders"] == 2
    assert body["total_sales"] == "40.00"


def test_daily_sales_validation(client, merchant, other_merchant, headers):
    assert client.get("/api/reports/daily-sales", headers=headers).status_code == 400
    assert client.get(
        f"/api/reports/daily-sales?merchant_id={merchant.id}&date=10-03-2024", headers=headers
    ).status_code == 400
    assert client.get(
        f"/api/reports/daily-sales?merchant_id={other_merchant.id}", headers=headers
    ).status_code == 403


def test_sales_range_groups_by_day(client, db, owner, merchant, product, headers):
    make_order(db, merchant, owner, [(product, 1)], NEXT_DAY)
    make_order(db, merchant, owner, [(product, 2)], DAY)
    make_order(db, merchant, owner, [(product, 1)], DAY)
    make_order(db, merchant, owner, [(product, 9)], datetime(2024, 3, 20, 8, 0, 0))

    response = client.get(
        f"/api/reports/sales-range?merchant_id={merchant.id}&from=2024-03-10&to=2024-03-11",
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json() == [
        {"sale_date": "2024-03-10", "total_orders": 2, "total_sales": "30.00"},
        {"sale_date": "2024-03-11", "total_orders": 1, "total_sales": "10.00"},
    ]


def test_sales_range_validation(client, merchant, headers):
    base = f"/api/reports/sales-range?merchant_id={merchant.id}"

    assert client.get(f"{base}&from=2024-03-10", headers=headers).status_code == 400
    assert client.get(f"{base}&from=2024-03-12&to=2024-03-10", headers=headers).status_code == 400
    assert client.get(f"{base}&from=yesterday&to=2024-03-10", headers=headers).status_code == 400


def test_top_products_order(client, db, owner, merchant, product, headers):
    scone = make_product(db, merchant, name="Scone", price="4.00")
    cake = make_product(db, merchant, name="Cake", price="25.00")
    make_order(db, merchant, owner, [(product, 2), (scone, 5)], DAY)
    make_order(db, merchant, owner, [(cake, 2)], NEXT_DAY)
    make_order(db, merchant, owner, [(cake, 10)], DAY, status=OrderStatus.pending)

    response = client.get(
        f"/api/reports/top-products?merchant_id={merchant.id}&from=2024-03-10&to=2024-03-11",
        headers=headers,
    )

    assert response.status_code == 200
    rows = response.json()
    assert [r["product_name"] for r in rows] == ["Scone", "Cake", "Latte"]
    assert rows[0] == {
        "product_id": scone.id,
        "product_name": "Scone",
        "total_quantity": 5,
        "total_revenue": "20.00",
    }
    # Equal quantities fall back to revenue
    assert rows[1]["total_revenue"] == "50.00"
    assert rows[2]["total_revenue"] == "20.00"


def test_owner_daily_summary(client, db, owner, merchant, product, other_merchant, headers):
    second = Merchant(owner_id=owner.id, name="Cafe Norte")
    db.add(second)
    db.commit()
    tea = make_product(db, second, name="Tea", price="3.50")
    make_order(db, merchant, owner, [(product, 2)], DAY)
    make_order(db, second, owner, [(tea, 2)], DAY)
    foreign = make_product(db, other_merchant, name="Foreign")
    make_order(db, other_merchant, owner, [(foreign, 7)], DAY)

    response = client.get("/api/reports/owner/daily-summary?date=2024-03-10", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["date"] == "2024-03-10"
    assert body["total_orders"] == 2
    assert body["total_sales"] == "27.00"
    assert [(m["merchant_name"], m["total_sales"]) for m in body["merchants"]] == [
        ("Cafe Central", "20.00"),
        ("Cafe Norte", "7.00"),
    ]


def test_owner_daily_summary_without_merchants(client, headers):
    response = client.get("/api/reports/owner/daily-summary", headers=headers)
    assert response.status_code == 404


def test_owner_top_products(client, db, owner, merchant, product, other_merchant, headers):
    muffin = make_product(db, merchant, name="Muffin", price="3.00")
    make_order(db, merchant, owner, [(product, 1), (muffin, 4)], DAY)
    make_order(db, merchant, owner, [(product, 9)], NEXT_DAY)
    foreign = make_product(db, other_merchant, name="Foreign")
    make_order(db, other_merchant, owner, [(foreign, 50)], DAY)

    response = client.get("/api/reports/owner/top-products?date=2024-03-10", headers=headers)

    assert response.status_code == 200
    assert [(r["product_name"], r["total_quantity"]) for r in response.json()] == [
        ("Muffin", 4),
        ("Latte", 1),
    ]


def test_sales_date_uses_configured_timezone_on_postgres(monkeypatch):
    monkeypatch.setattr(reporting.settings, "TIMEZONE", "America/Mexico_City")
    pg = postgresql.dialect()
    fake_session = SimpleNamespace(get_bind=lambda: SimpleNamespace(dialect=pg))

    sql = str(reporting._sales_date(fake_session).compile(
        dialect=pg, compile_kwargs={"literal_binds": True}
    ))

    assert sql == "date(timezone('America/Mexico_City', orders.created_at))"


def test_sales_date_on_sqlite_reads_stored_value(db):
    sql = str(reporting._sales_date(db).compile(bind=db.get_bind()))

    assert sql == "date(orders.created_at)"
