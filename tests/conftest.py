"""
Pytest fixtures for the back-office API.

Every test gets a fresh in-memory SQLite schema, a TestClient wired to it
through the get_db override, and helpers to create owners, merchants and
catalog rows directly through the ORM.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token, get_password_hash
from app.db.base_class import Base
from app.db.session import get_db
from app.main import app
from app.models import Branch, Customer, Merchant, Product, User, UserRole

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope='function')
def db():
    """Fresh schema for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope='function')
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_user(db, email, password="secret123", role=UserRole.owner, is_active=True):
    user = User(
        full_name=email.split("@")[0].title(),
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token(subject=user.id, email=user.email, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope='function')
def owner(db):
    """Owner U of the main tenant."""
    return make_user(db, "owner@example.com")


@pytest.fixture(scope='function')
def other_owner(db):
    """Owner of a second, unrelated tenant."""
    return make_user(db, "other@example.com")


@pytest.fixture(scope='function')
def admin(db):
    return make_user(db, "admin@example.com", role=UserRole.admin)


@pytest.fixture(scope='function')
def headers(owner):
    return auth_headers(owner)


@pytest.fixture(scope='function')
def other_headers(other_owner):
    return auth_headers(other_owner)


@pytest.fixture(scope='function')
def merchant(db, owner):
    merchant = Merchant(owner_id=owner.id, name="Cafe Central", description="Coffee shop")
    db.add(merchant)
    db.commit()
    db.refresh(merchant)
    return merchant


@pytest.fixture(scope='function')
def other_merchant(db, other_owner):
    merchant = Merchant(owner_id=other_owner.id, name="Other Shop")
    db.add(merchant)
    db.commit()
    db.refresh(merchant)
    return merchant


def make_product(db, merchant, name="Latte", price="10.00", is_active=True):
    product = Product(
        merchant_id=merchant.id,
        name=name,
        price=Decimal(price),
        is_active=is_active,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture(scope='function')
def product(db, merchant):
    return make_product(db, merchant)


@pytest.fixture(scope='function')
def branch(db, merchant):
    branch = Branch(merchant_id=merchant.id, name="Downtown", city="Monterrey")
    db.add(branch)
    db.commit()
    db.refresh(branch)
    return branch


@pytest.fixture(scope='function')
def customer(db, merchant):
    customer = Customer(merchant_id=merchant.id, full_name="Ana Lopez", phone="555-0100")
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer
