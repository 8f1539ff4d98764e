"""Dependency injection for services."""
from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from database import Database
from services.order_service import OrderService
from services.user_service import UserService


def get_database(request: Request) -> Database:
    """Get the database resource from app state."""
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency for getting a database session for one request.

    Yields:
        Database session
    """
    yield from get_database(request).get_session()


def get_user_service() -> UserService:
    """Get user service instance."""
    return UserService()


def get_order_service() -> OrderService:
    """Get order service instance."""
    return OrderService()
