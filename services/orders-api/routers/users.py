"""Users API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import error_message
from dependencies import get_db, get_user_service
from schemas import ErrorResponse, UserCreate, UserCreatedResponse, UsersListResponse
from services.user_service import DuplicateEmailError, UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UsersListResponse, responses={500: {"model": ErrorResponse}})
def list_users(
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service)
):
    """List every user."""
    try:
        users = user_service.list_users(db)
    except SQLAlchemyError as e:
        logger.error("Failed to list users", extra={"error": error_message(e)})
        raise HTTPException(status_code=500, detail=error_message(e))

    return {"users": users}


@router.post(
    "",
    status_code=201,
    response_model=UserCreatedResponse,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }
)
def create_user(
    payload: Optional[UserCreate] = None,
    db: Session = Depends(get_db),
    user_service: UserService = Depends(get_user_service)
):
    """Register a user. The email must not be registered yet."""
    try:
        user = user_service.create_user(db, payload or UserCreate())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DuplicateEmailError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("Failed to create user", extra={"error": error_message(e)})
        raise HTTPException(status_code=500, detail=error_message(e))

    return {"message": "User added successfully", "id": user.id}
