"""Authentication package."""
from .events import ChangeNotifier
from .models import Address, LoginResult, SessionState, SessionUser
from .session import SessionManager

__all__ = [
    "Address",
    "ChangeNotifier",
    "LoginResult",
    "SessionManager",
    "SessionState",
    "SessionUser",
]
