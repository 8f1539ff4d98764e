"""Pydantic schemas for request/response validation."""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for creating a user.

    Fields are optional here so presence is checked by the service and
    reported with the API's own messages.
    """
    name: Optional[str] = None
    email: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class UsersListResponse(BaseModel):
    """Schema for users list response."""
    users: List[UserResponse]


class UserCreatedResponse(BaseModel):
    """Schema for user creation response."""
    message: str
    id: int


class OrderCreate(BaseModel):
    """Schema for placing an order."""
    product: Optional[str] = None
    last_name: Optional[str] = None
    first_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    # Numbers and numeric strings are both accepted; see validation.parse_quantity
    quantity: Optional[Any] = None


class OrderResponse(BaseModel):
    """Schema for order response."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    product: str
    last_name: str
    first_name: str
    email: str
    phone: str
    address: str
    quantity: int
    status: str
    order_date: datetime


class OrdersListResponse(BaseModel):
    """Schema for orders list response."""
    orders: List[OrderResponse]


class OrderCreatedResponse(BaseModel):
    """Schema for order creation response."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    order_id: int = Field(alias="orderId")


class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
