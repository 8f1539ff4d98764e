"""Orders API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import error_message
from dependencies import get_db, get_order_service
from schemas import ErrorResponse, OrderCreate, OrderCreatedResponse, OrdersListResponse
from services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrdersListResponse, responses={500: {"model": ErrorResponse}})
def list_orders(
    db: Session = Depends(get_db),
    order_service: OrderService = Depends(get_order_service)
):
    """List every order, most recent first."""
    try:
        orders = order_service.list_orders(db)
    except SQLAlchemyError as e:
        logger.error("Failed to list orders", extra={"error": error_message(e)})
        raise HTTPException(status_code=500, detail=error_message(e))

    return {"orders": orders}


@router.post(
    "",
    status_code=201,
    response_model=OrderCreatedResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def place_order(
    payload: Optional[OrderCreate] = None,
    db: Session = Depends(get_db),
    order_service: OrderService = Depends(get_order_service)
):
    """Place an order. It starts out with status "pending"."""
    try:
        order = order_service.place_order(db, payload or OrderCreate())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("Error inserting order", extra={"error": error_message(e)})
        raise HTTPException(
            status_code=500,
            detail=f"Server error while saving order: {error_message(e)}"
        )

    return {"message": "Order placed successfully!", "orderId": order.id}
