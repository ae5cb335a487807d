"""SQLAlchemy ORM model for payment invoices."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from .base import Base, utcnow


class InvoiceModel(Base):
    """SQLAlchemy ORM model for invoices table."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    external_invoice_id = Column(String(255), unique=True, nullable=False, index=True)
    currency = Column(String(20), nullable=False)
    amount_usd = Column(Numeric(10, 2), nullable=False)
    crypto_amount = Column(Numeric(18, 8), nullable=True)
    status = Column(String(20), nullable=False, default="new", index=True)
    invoice_url = Column(Text, nullable=True)
    qr_code_url = Column(Text, nullable=True)
    wallet_hash = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
