"""SQLAlchemy ORM model for purchased product grants."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class PurchaseGrantModel(Base):
    """One row per (user, product, order) that has been paid for."""

    __tablename__ = "purchased_product_grants"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", "order_id", name="uq_grants_user_product_order"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    granted_at = Column(DateTime(timezone=True), default=utcnow)

    product = relationship("ProductModel", lazy="joined")
