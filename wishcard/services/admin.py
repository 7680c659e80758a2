"""Admin operations gated by a shared secret."""

import hmac
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from wishcard.config import settings
from wishcard.models import User, Wish
from wishcard.services.image import delete_image

logger = logging.getLogger(__name__)


def _matches(given: Optional[str], expected: Optional[str]) -> bool:
    if not given or not expected:
        return False
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def verify_admin_key(key: Optional[str]) -> None:
    """Check a request-supplied admin key against the configured one.

    Fails closed when no key is configured on the server.
    """
    if not settings.ADMIN_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin key not configured on server",
        )
    if not _matches(key, settings.ADMIN_KEY):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin key")


def check_admin_credentials(email: Optional[str], password: Optional[str]) -> None:
    email_ok = _matches((email or "").strip(), settings.ADMIN_EMAIL)
    password_ok = _matches(password, settings.ADMIN_PASS)
    if not (email_ok and password_ok):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid admin")


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.id).all()


def list_wishes(db: Session) -> List[Wish]:
    return db.query(Wish).order_by(Wish.created_at.desc(), Wish.id.desc()).all()


def delete_wish(db: Session, slug: str) -> bool:
    """Delete a wish and, best effort, its photo file.

    Returns:
        True if a wish was deleted, False if none matched
    """
    wish = db.query(Wish).filter(Wish.slug == slug).first()
    if wish is None:
        logger.debug(f"Admin delete of unknown wish {slug}")
        return False

    photo = wish.photo
    db.delete(wish)
    db.commit()

    if photo and not delete_image(photo):
        logger.info(f"Photo {photo} of wish {slug} was already gone")

    logger.info(f"Admin deleted wish {slug}")
    return True
