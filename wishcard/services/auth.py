"""Authentication service: password hashing, registration, login and tokens."""

import logging
import time
from typing import Any, Optional

import bcrypt
import jwt
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wishcard.config import settings
from wishcard.models import User

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid login"
BCRYPT_MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def _password_bytes(plain_password: Optional[str]) -> bytes:
    # bcrypt only uses the first 72 bytes; newer releases reject longer input
    return (plain_password or "").encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(plain_password: str) -> str:
    password = _password_bytes(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(plain_password: Optional[str], password_hash: Optional[str]) -> bool:
    password = _password_bytes(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_access_token(user_id: int) -> str:
    issued_at = int(time.time())
    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + settings.TOKEN_EXPIRE_HOURS * 60 * 60,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")
    try:
        return jwt.decode(
            raw,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc


def register(db: Session, name: Optional[str], email: Optional[str], password: Optional[str]) -> User:
    """Create a new user.

    Raises:
        HTTPException: 400 when a field is missing, the password is too
            short, or the email is already registered
    """
    name = (name or "").strip()
    email = normalize_email(email)
    if not name or not email or not password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields required")

    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters",
        )

    if db.query(User).filter(User.email == email).first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    user = User(name=name, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user


def login(db: Session, email: Optional[str], password: Optional[str]) -> str:
    """Check credentials and issue an access token.

    Unknown email and wrong password produce the same error.
    """
    email = normalize_email(email)
    user = db.query(User).filter(User.email == email).first() if email else None

    if user is None or not verify_password(password, user.password_hash):
        logger.debug("Rejected login attempt")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_LOGIN)

    return build_access_token(user.id)


def verify_token(token: Optional[str]) -> int:
    """Resolve a token to the user id it was issued for."""
    if not token or not token.strip():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Login required")

    try:
        payload = decode_access_token(token)
    except AuthSecurityError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return int(subject)
