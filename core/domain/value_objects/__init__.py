"""Domain value objects."""

from .value_objects import ExecutionID, Money
from .admin_allow_list import AdminAllowList

__all__ = [
    "AdminAllowList",
    "ExecutionID",
    "Money",
]
