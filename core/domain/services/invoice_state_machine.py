"""
Invoice state machine.

Pure transition function for invoice statuses reported by the payment
gateway. No I/O: the reconciler uses it to decide what to write, and the
conditional UPDATE in the invoice repository enforces the same rule at the
row level via ``predecessors_of``.

Forward order (rank):

    new (0) < pending (1) < expired, cancelled (2) < completed (3)

A reported status is applied only when its rank is strictly greater than the
current one. ``completed`` is therefore absorbing, duplicates are no-ops, and
a late ``completed`` after ``expired``/``cancelled`` still records the
payment the gateway actually received.
"""
from dataclasses import dataclass
from typing import FrozenSet

from ..enums import InvoiceStatus


_RANK = {
    InvoiceStatus.NEW: 0,
    InvoiceStatus.PENDING: 1,
    InvoiceStatus.EXPIRED: 2,
    InvoiceStatus.CANCELLED: 2,
    InvoiceStatus.COMPLETED: 3,
}


@dataclass(frozen=True)
class Transition:
    """Outcome of applying an incoming status to a current one."""
    previous: InvoiceStatus
    status: InvoiceStatus
    changed: bool

    @property
    def newly_paid(self) -> bool:
        """True only for the first move into ``completed``."""
        return self.changed and self.status == InvoiceStatus.COMPLETED


def rank(status: InvoiceStatus) -> int:
    return _RANK[status]


def can_transition(current: InvoiceStatus, incoming: InvoiceStatus) -> bool:
    return rank(incoming) > rank(current)


def apply_status(current: InvoiceStatus, incoming: InvoiceStatus) -> Transition:
    """
    Compute the next invoice status.

    Args:
        current: Status stored for the invoice
        incoming: Status reported by the gateway (already mapped)

    Returns:
        Transition with the resulting status and whether it changed
    """
    if can_transition(current, incoming):
        return Transition(previous=current, status=incoming, changed=True)
    return Transition(previous=current, status=current, changed=False)


def predecessors_of(incoming: InvoiceStatus) -> FrozenSet[InvoiceStatus]:
    """Statuses from which ``incoming`` may be applied."""
    return frozenset(s for s in InvoiceStatus if can_transition(s, incoming))
