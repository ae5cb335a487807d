"""Fulfillment recorder: durable per-user product grants."""

import logging
from dataclasses import dataclass
from enum import Enum

from core.data.uow import UnitOfWork
from core.domain.entities import Order

logger = logging.getLogger(__name__)


class GrantOutcome(str, Enum):
    GRANTED = "granted"
    ALREADY_GRANTED = "already_granted"


@dataclass(frozen=True)
class FulfillmentResult:
    order_id: int
    granted: int = 0
    already_granted: int = 0


class FulfillmentRecorder:
    """
    Records what a user has paid for.

    Runs inside the caller's Unit of Work so grants commit or roll back
    together with the payment transition that triggered them.
    """

    async def grant(self, uow: UnitOfWork, user_id: int, product_id: int, order_id: int) -> GrantOutcome:
        created = await uow.grants.grant_if_absent(user_id, product_id, order_id)
        return GrantOutcome.GRANTED if created else GrantOutcome.ALREADY_GRANTED

    async def fulfill(self, uow: UnitOfWork, order: Order) -> FulfillmentResult:
        """
        Grant every product of the order to its owner.

        An order without items is a valid no-op.
        """
        granted = already = 0
        for item in order.items:
            outcome = await self.grant(uow, order.user_id, item.product_id, order.id)
            if outcome is GrantOutcome.GRANTED:
                granted += 1
            else:
                already += 1

        logger.info(
            f"[{uow.execution_id}] 📦 Order {order.id} fulfilled: "
            f"{granted} granted, {already} already granted"
        )
        return FulfillmentResult(order_id=order.id, granted=granted, already_granted=already)
