from core.services.preferences import AppPreferences
from core.services.session_service import SessionState

__all__ = [
    "AppPreferences",
    "SessionState",
]
