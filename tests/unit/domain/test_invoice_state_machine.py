"""Unit tests for the invoice status transition function."""
import pytest

from core.domain.enums import InvoiceStatus
from core.domain.services import apply_status, can_transition, predecessors_of


NEW = InvoiceStatus.NEW
PENDING = InvoiceStatus.PENDING
COMPLETED = InvoiceStatus.COMPLETED
EXPIRED = InvoiceStatus.EXPIRED
CANCELLED = InvoiceStatus.CANCELLED


@pytest.mark.parametrize(
    "current, incoming",
    [
        (NEW, PENDING),
        (NEW, COMPLETED),
        (PENDING, COMPLETED),
        (PENDING, EXPIRED),
        (PENDING, CANCELLED),
        (EXPIRED, COMPLETED),
        (CANCELLED, COMPLETED),
    ],
)
def test_forward_moves_are_applied(current, incoming):
    transition = apply_status(current, incoming)

    assert transition.changed is True
    assert transition.previous == current
    assert transition.status == incoming


@pytest.mark.parametrize(
    "current, incoming",
    [
        (COMPLETED, PENDING),
        (COMPLETED, EXPIRED),
        (COMPLETED, CANCELLED),
        (COMPLETED, NEW),
        (PENDING, NEW),
        (EXPIRED, PENDING),
        (EXPIRED, CANCELLED),
        (CANCELLED, EXPIRED),
    ],
)
def test_backward_or_sideways_moves_are_no_ops(current, incoming):
    transition = apply_status(current, incoming)

    assert transition.changed is False
    assert transition.status == current
    assert transition.newly_paid is False


@pytest.mark.parametrize("status", list(InvoiceStatus))
def test_repeating_the_current_status_is_a_no_op(status):
    assert apply_status(status, status).changed is False


def test_newly_paid_only_on_first_completion():
    assert apply_status(PENDING, COMPLETED).newly_paid is True
    assert apply_status(COMPLETED, COMPLETED).newly_paid is False
    assert apply_status(NEW, PENDING).newly_paid is False


def test_completed_is_absorbing():
    for incoming in InvoiceStatus:
        assert can_transition(COMPLETED, incoming) is False


def test_predecessors_match_transition_rule():
    assert predecessors_of(COMPLETED) == {NEW, PENDING, EXPIRED, CANCELLED}
    assert predecessors_of(PENDING) == {NEW}
    assert predecessors_of(EXPIRED) == {NEW, PENDING}
    assert predecessors_of(NEW) == frozenset()
