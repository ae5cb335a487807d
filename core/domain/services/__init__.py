"""Pure domain services."""
from .invoice_state_machine import Transition, apply_status, can_transition, predecessors_of

__all__ = ["Transition", "apply_status", "can_transition", "predecessors_of"]
