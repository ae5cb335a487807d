"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..enums import OrderStatus
from ..exceptions import ValidationError
from ..value_objects import Money
from .product import Product


@dataclass(frozen=True)
class RequestedLine:
    """A (product, quantity) pair as requested by the customer."""
    product_id: int
    quantity: int


def normalize_lines(lines: Iterable[RequestedLine]) -> List[RequestedLine]:
    """
    Validate requested lines and merge repeated products.

    Quantities of a product requested more than once are summed; the order
    of first appearance is preserved.

    Raises:
        ValidationError: If there are no lines or a quantity is not positive
    """
    merged: Dict[int, int] = {}
    for line in lines:
        if line.quantity <= 0:
            raise ValidationError(
                f"Quantity for product {line.product_id} must be positive, got {line.quantity}"
            )
        merged[line.product_id] = merged.get(line.product_id, 0) + line.quantity

    if not merged:
        raise ValidationError("Order must contain at least one item")

    return [RequestedLine(product_id=pid, quantity=qty) for pid, qty in merged.items()]


def reservation_order(lines: Iterable[Tuple[Product, int]]) -> List[Tuple[Product, int]]:
    """Order lines by product id, the order in which stock rows are locked."""
    return sorted(lines, key=lambda line: line[0].id)


@dataclass
class OrderItem:
    """
    Line item within an order.

    Unit price is captured when the order is placed and never recomputed
    from the current product price.
    """
    product_id: int
    quantity: int
    unit_price: Money
    line_total: Money
    product_name: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def snapshot(cls, product: Product, quantity: int) -> "OrderItem":
        """Price a line from the product as it is right now."""
        return cls(
            product_id=product.id,
            quantity=quantity,
            unit_price=product.price,
            line_total=product.price * quantity,
            product_name=product.name,
        )


@dataclass
class Order:
    """
    Order aggregate root.

    Invariant: ``total_price == sum(item.line_total)``.
    """
    user_id: int
    items: List[OrderItem] = field(default_factory=list)
    total_price: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def place(cls, user_id: int, lines: Iterable[Tuple[Product, int]]) -> "Order":
        """
        Factory for a new pending order from priced products.

        Args:
            user_id: Internal id of the owning user
            lines: (product, quantity) pairs, products already validated

        Returns:
            New pending Order with totals computed
        """
        items = [OrderItem.snapshot(product, quantity) for product, quantity in lines]
        order = cls(user_id=user_id, items=items)
        order.total_price = order.calculate_total()
        return order

    def calculate_total(self) -> Money:
        """Sum all line totals."""
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        return total

    def verify_total(self) -> None:
        """
        Check the total invariant.

        Raises:
            ValueError: If stored total differs from the sum of its lines
        """
        calculated = self.calculate_total()
        if calculated != self.total_price:
            raise ValueError(f"Total mismatch: {calculated} vs {self.total_price}")

    @property
    def is_pending(self) -> bool:
        return self.status == OrderStatus.PENDING
