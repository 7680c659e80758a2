"""Admin API routes, protected by the ``x-admin-key`` header."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wishcard.database import get_db
from wishcard.dependencies import require_admin
from wishcard.schemas import ErrorResponse, LoginRequest, SuccessResponse, UserResponse, WishResponse
from wishcard.services import admin
from wishcard.services.wishes import to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

_key_errors = {
    401: {"model": ErrorResponse, "description": "Invalid admin key"},
    403: {"model": ErrorResponse, "description": "Admin key not configured"},
}


@router.post(
    "/login",
    response_model=SuccessResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid admin"}},
)
async def admin_login(payload: LoginRequest):
    """Check the static admin credentials."""
    admin.check_admin_credentials(payload.email, payload.password)
    return SuccessResponse()


@router.get(
    "/users",
    response_model=List[UserResponse],
    responses=_key_errors,
    dependencies=[Depends(require_admin)],
)
async def users(db: Session = Depends(get_db)):
    try:
        return admin.list_users(db)
    except SQLAlchemyError:
        logger.exception("Admin users error")
        raise HTTPException(status_code=500, detail="Failed")


@router.get(
    "/wishes",
    response_model=List[WishResponse],
    response_model_exclude_none=True,
    responses=_key_errors,
    dependencies=[Depends(require_admin)],
)
async def wishes(db: Session = Depends(get_db)):
    try:
        return [to_response(w) for w in admin.list_wishes(db)]
    except SQLAlchemyError:
        logger.exception("Admin wishes error")
        raise HTTPException(status_code=500, detail="Failed")


@router.delete(
    "/wish/{wish_id}",
    response_model=SuccessResponse,
    responses=_key_errors,
    dependencies=[Depends(require_admin)],
)
async def delete(wish_id: str, db: Session = Depends(get_db)):
    """Delete a wish and its photo file."""
    try:
        admin.delete_wish(db, wish_id)
    except SQLAlchemyError:
        logger.exception("Admin delete wish error")
        raise HTTPException(status_code=500, detail="Failed to delete")
    return SuccessResponse()
