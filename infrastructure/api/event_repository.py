"""
API implementation of the Event repository.
"""

from typing import List

from core.domain.models import (
    EventDetailResponse, MemberDetail, MemberListResponse, GroupsResponse,
    HonorItem, ResultItem, ScoreChange,
)
from core.domain.result import Result, guard
from core.interfaces.repositories import IEventRepository
from infrastructure.api.base import ApiRepository, require_text


class ApiEventRepository(ApiRepository, IEventRepository):
    """Tournament details backed by the remote API"""

    def _item_params(self, event_id: str, item_id: str) -> dict:
        return {"eventid": require_text("event_id", event_id), "itemid": require_text("item_id", item_id)}

    async def get_event_detail(self, event_id: str) -> Result[EventDetailResponse]:
        async def call() -> EventDetailResponse:
            require_text("event_id", event_id)
            return await self._get("enter/detail", EventDetailResponse, {"id": event_id})
        return await guard(call)

    async def get_member_detail(self, match_id: str, item_id: str) -> Result[List[MemberDetail]]:
        async def call() -> List[MemberDetail]:
            params = {"match_id": require_text("match_id", match_id), "id": require_text("item_id", item_id)}
            response = await self._get("enter/get_member_detail", MemberListResponse, params)
            return response.list
        return await guard(call)

    async def get_groups(self, event_id: str, item_id: str) -> Result[GroupsResponse]:
        return await guard(lambda: self._get("Match/get_groups", GroupsResponse, self._item_params(event_id, item_id)))

    async def get_all_honors(self, event_id: str, item_id: str) -> Result[List[HonorItem]]:
        return await guard(lambda: self._get("Match/get_all_honors", List[HonorItem], self._item_params(event_id, item_id)))

    async def get_all_result(self, event_id: str, item_id: str) -> Result[List[ResultItem]]:
        return await guard(lambda: self._get("Match/getResult", List[ResultItem], self._item_params(event_id, item_id)))

    async def get_score_change(self, event_id: str) -> Result[List[ScoreChange]]:
        async def call() -> List[ScoreChange]:
            require_text("event_id", event_id)
            return await self._get("Match/getScoreChange2", List[ScoreChange], {"eventid": event_id})
        return await guard(call)
