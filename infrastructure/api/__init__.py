from infrastructure.api.client import KaiqiuApiClient
from infrastructure.api.user_repository import ApiUserRepository
from infrastructure.api.top_repository import ApiTopRepository
from infrastructure.api.arena_repository import ApiArenaRepository
from infrastructure.api.match_repository import ApiMatchRepository
from infrastructure.api.event_repository import ApiEventRepository
from infrastructure.api.public_repository import ApiPublicRepository

__all__ = [
    "KaiqiuApiClient",
    "ApiUserRepository",
    "ApiTopRepository",
    "ApiArenaRepository",
    "ApiMatchRepository",
    "ApiEventRepository",
    "ApiPublicRepository",
]
