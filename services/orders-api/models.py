"""Database models for the orders API."""
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """User model."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Order(Base):
    """Order model.

    ``email`` names the customer. The link to ``users.email`` is only
    declared when the schema is created with the email foreign key on
    (see ``Database.schema_metadata``).
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    status = Column(String, default="pending", server_default="pending")
    order_date = Column(DateTime, default=_utcnow, index=True, nullable=False)
