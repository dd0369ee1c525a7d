"""
API implementation of the Match repository - games, brackets, score entry.
"""

import logging
from typing import List, Optional

from core.domain.models import (
    MatchListResponse, GameIdResponse, GameDetail, KnockoutResponse,
    GroupData, GroupGamesResponse, ScoreUpdate,
)
from core.domain.result import Result, guard
from core.interfaces.repositories import IMatchRepository
from infrastructure.api.base import ApiRepository, require_page, require_text

logger = logging.getLogger(__name__)


class ApiMatchRepository(ApiRepository, IMatchRepository):
    """Tournament games backed by the remote API"""

    async def get_match_list(self, city: str, page: int = 1, keyword: Optional[str] = None) -> Result[MatchListResponse]:
        async def call() -> MatchListResponse:
            require_page(page)
            form = {"city": city, "page": str(page)}
            if keyword:
                form["search"] = "1"
                form["eventTitle"] = keyword
            return await self._post("match/lists", MatchListResponse, form=form)
        return await guard(call)

    async def get_game_id_by_group(self, group_id: str, uid1: str, uid2: str) -> Result[Optional[str]]:
        async def call() -> Optional[str]:
            params = {
                "groupid": require_text("group_id", group_id),
                "uid1": require_text("uid1", uid1),
                "uid2": require_text("uid2", uid2),
            }
            response = await self._get("Match/getGameidByUIDAndGroupID", GameIdResponse, params, allow_empty=True)
            return response.gameid if response else None
        return await guard(call)

    async def get_game_id_by_match_item(
        self, event_id: str, item_id: str, uid1: str, uid2: str
    ) -> Result[Optional[str]]:
        async def call() -> Optional[str]:
            params = {
                "eventid": require_text("event_id", event_id),
                "itemid": require_text("item_id", item_id),
                "uid1": require_text("uid1", uid1),
                "uid2": require_text("uid2", uid2),
            }
            response = await self._get("Match/getGameidByUIDAndMatchItem", GameIdResponse, params, allow_empty=True)
            return response.gameid if response else None
        return await guard(call)

    async def get_game_detail(self, game_id: str) -> Result[GameDetail]:
        async def call() -> GameDetail:
            require_text("game_id", game_id)
            return await self._post("Match/getGameDetail", GameDetail, form={"gameid": game_id})
        return await guard(call)

    async def get_knockout(self, event_id: str, item_id: str) -> Result[KnockoutResponse]:
        async def call() -> KnockoutResponse:
            params = {"eventid": require_text("event_id", event_id), "itemid": require_text("item_id", item_id)}
            return await self._get("Arrange/knockout", KnockoutResponse, params)
        return await guard(call)

    async def update_tt_score(self, update: ScoreUpdate, game_id: str) -> Result[None]:
        async def call() -> None:
            params = dict(update.as_params(), gameid=require_text("game_id", game_id))
            await self._get("Match/update_tt_score", None, params, allow_empty=True)
            logger.info(f"[MATCH_REPO] Score {update.score} saved for game {game_id}")
        return await guard(call)

    async def update_score(self, update: ScoreUpdate) -> Result[None]:
        async def call() -> None:
            await self._get("Match/update_score", None, update.as_params(), allow_empty=True)
            logger.info(f"[MATCH_REPO] Score {update.score} saved for group {update.group_id}")
        return await guard(call)

    async def get_group_games(self, event_id: str, item_id: str) -> Result[List[GroupData]]:
        async def call() -> List[GroupData]:
            params = {"eventid": require_text("event_id", event_id), "itemid": require_text("item_id", item_id)}
            response = await self._get("Match/init_h_games", GroupGamesResponse, params)
            return response.groups
        return await guard(call)
