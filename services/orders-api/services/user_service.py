"""User management service."""
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from opentelemetry import trace

from database import is_unique_violation
from models import User
from monitoring import users_created_counter, duplicate_email_counter, validation_failures_counter
from schemas import UserCreate
from validation import USER_FIELDS, USER_FIELDS_REQUIRED, FieldValidationError, require_fields

logger = logging.getLogger(__name__)


class DuplicateEmailError(Exception):
    """A user with this email already exists."""

    def __init__(self, email: str):
        super().__init__("Email already registered.")
        self.email = email


class UserService:
    """Service for managing users."""

    def __init__(self):
        self.tracer = trace.get_tracer(__name__)

    def list_users(self, db: Session) -> List[User]:
        """
        Get every user.

        Args:
            db: Database session

        Returns:
            All user rows, in no particular order

        Raises:
            SQLAlchemyError: If the datastore read fails
        """
        users = db.query(User).all()
        trace.get_current_span().set_attribute("db.rows_returned", len(users))
        return users

    def create_user(self, db: Session, payload: UserCreate) -> User:
        """
        Insert a new user.

        Args:
            db: Database session
            payload: Requested name and email

        Returns:
            The persisted user

        Raises:
            FieldValidationError: If name or email is missing or empty
            DuplicateEmailError: If the email is already registered
            SQLAlchemyError: For any other datastore failure
        """
        try:
            require_fields(payload.model_dump(), USER_FIELDS, USER_FIELDS_REQUIRED)
        except FieldValidationError as e:
            validation_failures_counter.add(1, {"resource": "users", "reason": e.reason})
            raise

        user = User(name=payload.name, email=payload.email)
        with self.tracer.start_as_current_span("db.insert.user") as db_span:
            db_span.set_attribute("db.operation", "INSERT")
            db_span.set_attribute("db.table", "users")
            try:
                db.add(user)
                db.commit()
            except IntegrityError as e:
                db.rollback()
                if is_unique_violation(e):
                    duplicate_email_counter.add(1)
                    logger.info("Rejected duplicate email", extra={"email": payload.email})
                    raise DuplicateEmailError(payload.email) from e
                raise
            except Exception:
                db.rollback()
                raise
            db.refresh(user)
            db_span.set_attribute("user.id", user.id)

        users_created_counter.add(1)
        logger.info("User created", extra={"user_id": user.id})
        return user
