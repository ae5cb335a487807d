"""Static mappers for domain entities ↔ database models."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.entities import Invoice, Order, OrderItem, Product, PurchaseGrant, User
from core.domain.enums import InvoiceStatus, OrderStatus
from core.domain.value_objects import Money

from .models import (
    InvoiceModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
    PurchaseGrantModel,
    UserModel,
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def to_money(value) -> Money:
    return Money(amount=Decimal(str(value if value is not None else 0)))


class ProductMapper:
    """Static mapper for Product ↔ ProductModel transformation."""

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            name=model.name,
            description=model.description,
            price=to_money(model.price),
            stock=model.stock,
            image_url=model.image_url,
            download_link=model.download_link,
            is_active=bool(model.is_active),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Product) -> ProductModel:
        return ProductModel(
            name=entity.name,
            description=entity.description,
            price=entity.price.amount,
            stock=entity.stock,
            image_url=entity.image_url,
            download_link=entity.download_link,
            is_active=entity.is_active,
        )


class UserMapper:

    @staticmethod
    def to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            telegram_id=model.telegram_id,
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            joined_at=as_utc(model.joined_at),
            last_active=as_utc(model.last_active),
        )


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance

        Returns:
            OrderItem domain entity
        """
        return OrderItem(
            id=model.id,
            product_id=model.product_id,
            product_name=model.product_name,
            quantity=model.quantity,
            unit_price=to_money(model.unit_price),
            line_total=to_money(model.line_total),
        )

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity

        Returns:
            OrderItemModel instance (order id is set through the relationship)
        """
        return OrderItemModel(
            product_id=entity.product_id,
            product_name=entity.product_name,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            line_total=entity.line_total.amount,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested items).

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        items = [OrderItemMapper.to_domain(item_model) for item_model in model.items]

        return Order(
            id=model.id,
            user_id=model.user_id,
            items=items,
            total_price=to_money(model.total_price),
            status=OrderStatus(model.status),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance with item models attached
        """
        return OrderModel(
            user_id=entity.user_id,
            total_price=entity.total_price.amount,
            status=entity.status.value,
            items=[OrderItemMapper.to_persistence(item) for item in entity.items],
        )


class InvoiceMapper:

    @staticmethod
    def to_domain(model: InvoiceModel) -> Invoice:
        return Invoice(
            id=model.id,
            order_id=model.order_id,
            external_invoice_id=model.external_invoice_id,
            currency=model.currency,
            amount_usd=to_money(model.amount_usd),
            crypto_amount=(
                Decimal(str(model.crypto_amount)) if model.crypto_amount is not None else None
            ),
            status=InvoiceStatus(model.status),
            invoice_url=model.invoice_url,
            qr_code_url=model.qr_code_url,
            wallet_hash=model.wallet_hash,
            created_at=as_utc(model.created_at),
            paid_at=as_utc(model.paid_at),
            expires_at=as_utc(model.expires_at),
        )

    @staticmethod
    def to_persistence(entity: Invoice) -> InvoiceModel:
        return InvoiceModel(
            order_id=entity.order_id,
            external_invoice_id=entity.external_invoice_id,
            currency=entity.currency,
            amount_usd=entity.amount_usd.amount,
            crypto_amount=entity.crypto_amount,
            status=entity.status.value,
            invoice_url=entity.invoice_url,
            qr_code_url=entity.qr_code_url,
            wallet_hash=entity.wallet_hash,
            paid_at=entity.paid_at,
            expires_at=entity.expires_at,
        )


class GrantMapper:

    @staticmethod
    def to_domain(model: PurchaseGrantModel) -> PurchaseGrant:
        product = model.product
        return PurchaseGrant(
            user_id=model.user_id,
            product_id=model.product_id,
            order_id=model.order_id,
            granted_at=as_utc(model.granted_at),
            product_name=product.name if product is not None else None,
            download_link=product.download_link if product is not None else None,
        )
