"""Registration and login API routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wishcard.database import get_db
from wishcard.schemas import ErrorResponse, LoginRequest, RegisterRequest, SuccessResponse, TokenResponse
from wishcard.services import auth

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/register",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing fields, short password or existing user"}},
)
async def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new user."""
    try:
        auth.register(db, payload.name, payload.email, payload.password)
    except SQLAlchemyError:
        logger.exception("Register error")
        raise HTTPException(status_code=500, detail="Register failed")
    return SuccessResponse()


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid login"}},
)
async def login(payload: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access token."""
    try:
        token = auth.login(db, payload.email, payload.password)
    except SQLAlchemyError:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail="Login failed")
    return TokenResponse(token=token)
