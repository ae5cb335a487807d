"""Repository interface for invoices."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.invoice import Invoice
from ..enums import InvoiceStatus


class InvoiceRepository(ABC):
    """Abstract repository for payment invoices."""

    @abstractmethod
    async def add(self, invoice: Invoice) -> Invoice:
        """Insert a new invoice and return it with its id assigned."""
        pass

    @abstractmethod
    async def find_by_external_id(self, external_invoice_id: str) -> Optional[Invoice]:
        """Resolve an invoice by the gateway's id."""
        pass

    @abstractmethod
    async def find_latest_for_order(self, order_id: int) -> Optional[Invoice]:
        """Most recently created invoice of an order."""
        pass

    @abstractmethod
    async def find_for_order(self, order_id: int) -> List[Invoice]:
        """All invoices of an order, newest first."""
        pass

    @abstractmethod
    async def transition(
        self,
        invoice_id: int,
        incoming: InvoiceStatus,
        paid_at: Optional[datetime] = None,
    ) -> bool:
        """Conditionally move an invoice forward to ``incoming``.

        The row is only updated while its current status is one from which
        ``incoming`` is a forward move, so concurrent duplicate deliveries
        serialise on the row lock and exactly one of them observes True.

        Args:
            invoice_id: Internal invoice id
            incoming: Target status
            paid_at: Payment timestamp, written together with ``completed``

        Returns:
            True if this call changed the row
        """
        pass
