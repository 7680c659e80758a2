"""SQLAlchemy models for users and wishes."""

from datetime import datetime

from nanoid import generate
from sqlalchemy import Column, DateTime, Integer, String, Text

from wishcard.database import Base

# Alphanumeric only so slugs are safe in query strings
SLUG_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
SLUG_LENGTH = 12


def generate_slug() -> str:
    """Generate a random public identifier for a wish."""
    return generate(SLUG_ALPHABET, SLUG_LENGTH)


class User(Base):
    """A registered account. Passwords are stored as bcrypt hashes only."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String(128), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class Wish(Base):
    """A greeting card created by a user and shared by its slug."""

    __tablename__ = "wishes"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String(32), unique=True, index=True, nullable=False, default=generate_slug)
    sender = Column(Text, nullable=True)
    recipient = Column(Text, nullable=True)
    message = Column(Text, nullable=True)
    photo = Column(String(255), nullable=True)
    # Owner reference, not enforced as a foreign key
    user_id = Column(Integer, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Wish(slug='{self.slug}', from='{self.sender}', to='{self.recipient}')>"
