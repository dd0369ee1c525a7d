from core.interfaces.repositories import (
    IUserRepository,
    ITopRepository,
    IArenaRepository,
    IMatchRepository,
    IEventRepository,
    IPublicRepository,
)
from core.interfaces.storage import IPreferenceStore
from core.interfaces.transport import IApiTransport

__all__ = [
    # Repositories
    "IUserRepository",
    "ITopRepository",
    "IArenaRepository",
    "IMatchRepository",
    "IEventRepository",
    "IPublicRepository",
    # Storage
    "IPreferenceStore",
    # Remote
    "IApiTransport",
]
