"""
API implementation of the Arena (venue) repository.
"""

from typing import List, Optional

from core.domain.models import ArenaItem, ArenaDetail, EventItem
from core.domain.result import Result, guard
from core.interfaces.repositories import IArenaRepository
from infrastructure.api.base import ApiRepository, require_page, require_text


class ApiArenaRepository(ApiRepository, IArenaRepository):
    """Venue data backed by the remote API"""

    async def get_arena_list(self, city: str, page: int = 1, keyword: Optional[str] = None) -> Result[List[ArenaItem]]:
        async def call() -> List[ArenaItem]:
            require_page(page)
            form = {"city": city, "page": str(page)}
            if keyword:
                form["keyword"] = keyword
            return await self._post("arena/lists", List[ArenaItem], form=form)
        return await guard(call)

    async def get_arena_detail(self, arena_id: str) -> Result[ArenaDetail]:
        async def call() -> ArenaDetail:
            require_text("arena_id", arena_id)
            return await self._get("arena/detail", ArenaDetail, {"arenaid": arena_id})
        return await guard(call)

    async def get_arena_match_list(self, arena_id: str) -> Result[List[EventItem]]:
        async def call() -> List[EventItem]:
            require_text("arena_id", arena_id)
            return await self._get("arena/match_list", List[EventItem], {"arenaid": arena_id})
        return await guard(call)
