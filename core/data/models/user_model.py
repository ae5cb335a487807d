"""SQLAlchemy ORM model for storefront users."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String

from .base import Base, utcnow


class UserModel(Base):
    """SQLAlchemy ORM model for users table."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    telegram_id = Column(BigInteger, unique=True, nullable=False, index=True)
    username = Column(String(255), nullable=True)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    joined_at = Column(DateTime(timezone=True), default=utcnow)
    last_active = Column(DateTime(timezone=True), default=utcnow)
