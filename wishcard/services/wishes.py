"""Wish creation and lookup."""

import logging
from typing import List, Optional

from fastapi import HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from wishcard.models import Wish
from wishcard.schemas import WishResponse
from wishcard.services.image import delete_image, get_image_path, save_image, validate_image

logger = logging.getLogger(__name__)


def to_response(wish: Wish) -> WishResponse:
    """Convert a stored wish to its public shape.

    A photo whose file has been swept from disk is reported as no photo.
    """
    photo = wish.photo if get_image_path(wish.photo) is not None else None
    return WishResponse(
        id=wish.slug,
        sender=wish.sender,
        recipient=wish.recipient,
        message=wish.message,
        photo=photo,
        user_id=wish.user_id,
        created_at=wish.created_at,
    )


def store_photo(photo: Optional[UploadFile]) -> Optional[str]:
    """Validate and persist an optional upload, returning its stored name."""
    # Browsers send an empty part when no file was picked
    if photo is None or not photo.filename:
        return None

    is_valid, error_msg = validate_image(photo)
    if not is_valid:
        if "too large" in error_msg.lower():
            raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=error_msg)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)

    try:
        return save_image(photo)
    except ValueError as e:
        logger.error(f"Failed to store upload: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Wish create failed")


def create_wish(
    db: Session,
    user_id: int,
    sender: Optional[str],
    recipient: Optional[str],
    message: Optional[str],
    photo: Optional[UploadFile] = None,
) -> Wish:
    """Persist a new wish owned by ``user_id``, with an optional photo."""
    filename = store_photo(photo)

    wish = Wish(
        sender=sender,
        recipient=recipient,
        message=message,
        photo=filename,
        user_id=user_id,
    )
    db.add(wish)
    try:
        db.commit()
    except Exception:
        db.rollback()
        if filename:
            delete_image(filename)
        raise
    db.refresh(wish)

    logger.info(f"Created wish {wish.slug} for user {user_id}")
    return wish


def get_wish(db: Session, slug: str) -> Wish:
    """Get a wish by its public identifier."""
    wish = db.query(Wish).filter(Wish.slug == slug).first()
    if wish is None:
        logger.debug(f"Wish not found: {slug}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Wish not found")
    return wish


def list_user_wishes(db: Session, user_id: int) -> List[Wish]:
    """All wishes owned by a user, newest first."""
    return (
        db.query(Wish)
        .filter(Wish.user_id == user_id)
        .order_by(Wish.created_at.desc(), Wish.id.desc())
        .all()
    )
