"""Wish API routes."""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wishcard.config import settings
from wishcard.database import get_db
from wishcard.dependencies import Principal, get_current_user
from wishcard.schemas import ErrorResponse, LinkResponse, WishResponse
from wishcard.services.wishes import create_wish, get_wish, list_user_wishes, to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["wishes"])


@router.post(
    "/wish",
    response_model=LinkResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid image"},
        401: {"model": ErrorResponse, "description": "Invalid token"},
        403: {"model": ErrorResponse, "description": "Login required"},
        413: {"model": ErrorResponse, "description": "File too large"},
    }
)
async def create(
    principal: Annotated[Principal, Depends(get_current_user)],
    sender: Annotated[Optional[str], Form(alias="from")] = None,
    recipient: Annotated[Optional[str], Form(alias="to")] = None,
    message: Annotated[Optional[str], Form()] = None,
    photo: Annotated[Optional[UploadFile], File()] = None,
    db: Session = Depends(get_db),
):
    """Create a wish for the logged-in user and return its share link."""
    try:
        wish = create_wish(db, principal.user_id, sender, recipient, message, photo)
    except SQLAlchemyError:
        logger.exception("Create wish error")
        raise HTTPException(status_code=500, detail="Wish create failed")
    return LinkResponse(link=settings.share_link(wish.slug))


@router.get(
    "/wish/{wish_id}",
    response_model=WishResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse, "description": "Wish not found"}},
)
async def view(wish_id: str, db: Session = Depends(get_db)):
    """Get a wish by id. Public."""
    try:
        wish = get_wish(db, wish_id)
    except SQLAlchemyError:
        logger.exception("Get wish error")
        raise HTTPException(status_code=500, detail="Failed to get wish")
    return to_response(wish)


@router.get(
    "/my-wishes",
    response_model=List[WishResponse],
    response_model_exclude_none=True,
)
async def my_wishes(
    principal: Annotated[Principal, Depends(get_current_user)],
    db: Session = Depends(get_db),
):
    """List the caller's wishes, newest first."""
    try:
        wishes = list_user_wishes(db, principal.user_id)
    except SQLAlchemyError:
        logger.exception("My wishes error")
        raise HTTPException(status_code=500, detail="Failed to fetch wishes")
    return [to_response(w) for w in wishes]
