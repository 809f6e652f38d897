# app/init_tables.py
import logging
import os

from app.core.config import configure_logging
from app.core.security import get_password_hash
from app.db.session import engine, SessionLocal
from app.db.base_class import Base
from app.models import User, UserRole  # registers every model on Base.metadata

logger = logging.getLogger(__name__)


def init_db():
    logger.info("Creating database tables...")
    # Creates missing tables only; existing tables are left alone
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")


def create_admin(email: str, password: str, full_name: str = "Administrator"):
    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email).first():
            logger.info("Admin %s already exists", email)
            return
        db.add(User(
            full_name=full_name,
            email=email,
            password_hash=get_password_hash(password),
            role=UserRole.admin,
            is_active=True,
        ))
        db.commit()
        logger.info("Admin %s created", email)
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    init_db()
    # Optional bootstrap admin, e.g. ADMIN_EMAIL=a@b.c ADMIN_PASSWORD=... python -m app.init_tables
    if os.getenv("ADMIN_EMAIL") and os.getenv("ADMIN_PASSWORD"):
        create_admin(os.environ["ADMIN_EMAIL"], os.environ["ADMIN_PASSWORD"])
