"""Order management service."""
import logging
from typing import List

from sqlalchemy.orm import Session
from opentelemetry import trace

from models import Order
from monitoring import orders_placed_counter, order_quantity_histogram, validation_failures_counter
from schemas import OrderCreate
from validation import ORDER_FIELDS, ORDER_FIELDS_REQUIRED, FieldValidationError, parse_quantity, require_fields

logger = logging.getLogger(__name__)


class OrderService:
    """Service for managing orders."""

    def __init__(self):
        self.tracer = trace.get_tracer(__name__)

    def list_orders(self, db: Session) -> List[Order]:
        """
        Get every order, newest first.

        Orders placed at the same instant come back in descending id order.

        Args:
            db: Database session

        Returns:
            All order rows sorted by order date, most recent first

        Raises:
            SQLAlchemyError: If the datastore read fails
        """
        orders = db.query(Order).order_by(Order.order_date.desc(), Order.id.desc()).all()
        trace.get_current_span().set_attribute("db.rows_returned", len(orders))
        return orders

    def place_order(self, db: Session, payload: OrderCreate) -> Order:
        """
        Validate and insert a new order with status "pending".

        The customer email is stored as given; it is not matched against
        existing users.

        Args:
            db: Database session
            payload: Order fields

        Returns:
            The persisted order

        Raises:
            FieldValidationError: If a field is missing or quantity is not a positive number
            SQLAlchemyError: If the insert fails
        """
        try:
            require_fields(payload.model_dump(), ORDER_FIELDS, ORDER_FIELDS_REQUIRED)
            quantity = parse_quantity(payload.quantity)
        except FieldValidationError as e:
            validation_failures_counter.add(1, {"resource": "orders", "reason": e.reason})
            raise

        order = Order(
            product=payload.product,
            last_name=payload.last_name,
            first_name=payload.first_name,
            email=payload.email,
            phone=payload.phone,
            address=payload.address,
            quantity=quantity,
            status="pending",
        )
        with self.tracer.start_as_current_span("db.insert.order") as db_span:
            db_span.set_attribute("db.operation", "INSERT")
            db_span.set_attribute("db.table", "orders")
            try:
                db.add(order)
                db.commit()
            except Exception:
                db.rollback()
                raise
            db.refresh(order)
            db_span.set_attribute("order.id", order.id)

        orders_placed_counter.add(1)
        order_quantity_histogram.record(quantity)
        logger.info("Order placed", extra={"order_id": order.id, "quantity": quantity})
        return order
