from .cashier import CashierSerializer
from .session import SessionSerializer

__all__ = [
    "CashierSerializer",
    "SessionSerializer",
]
