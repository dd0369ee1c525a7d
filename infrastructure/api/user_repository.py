"""
API implementation of the User repository.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from config.features import features
from core.domain.errors import KaiqiuError
from core.domain.models import (
    LoginRequest, LoginResponse, UserInfo, AdvProfile, GameRecordsResponse,
    EventHistory, EventHistoryData, UserFollow, UserFollowListResponse, EventItem,
    UserItem, RankListResponse, SignResponse, ScoreHistory,
)
from core.domain.result import Result, guard
from core.interfaces.repositories import IUserRepository
from core.interfaces.transport import IApiTransport
from infrastructure.api.base import ApiRepository, parse_envelope, require_page, require_text, unwrap, validated

logger = logging.getLogger(__name__)


class ApiUserRepository(ApiRepository, IUserRepository):
    """User repository backed by the remote API"""

    def __init__(self, api: IApiTransport, lenient_event_history: Optional[bool] = None):
        super().__init__(api)
        if lenient_event_history is None:
            lenient_event_history = features.EVENT_HISTORY_LENIENT_PARSE
        self.lenient_event_history = lenient_event_history

    async def login(self, account: str, password: str) -> Result[LoginResponse]:
        async def call() -> LoginResponse:
            request = validated(LoginRequest, account=account, password=password)
            return await self._post("user/login", LoginResponse, form=request.as_form())
        return await guard(call)

    async def logout(self) -> Result[None]:
        return await guard(lambda: self._post("user/logout", None, allow_empty=True))

    async def get_user_info(self) -> Result[UserInfo]:
        return await guard(lambda: self._post("user/get_userinfo", UserInfo, form={}))

    async def get_adv_profile(self, uid: str) -> Result[AdvProfile]:
        async def call() -> AdvProfile:
            require_text("uid", uid)
            return await self._post("user/adv_profile", AdvProfile, params={"uid": uid})
        return await guard(call)

    async def get_page_games_by_uid(self, uid: str, page: int) -> Result[GameRecordsResponse]:
        async def call() -> GameRecordsResponse:
            require_text("uid", uid)
            require_page(page)
            return await self._get("User/getGames", GameRecordsResponse, {"uid": uid, "page": str(page)})
        return await guard(call)

    async def get_match_list_his_by_page(self, page: int) -> Result[List[EventHistory]]:
        """
        Event history reads the raw body and digs out data.data by hand.

        Legacy behavior turns any failure into an empty list; with
        ``lenient_event_history`` off, failures become Error results instead.
        """
        async def fetch() -> List[EventHistory]:
            body = await self._api.post("center/events", {"page": str(page), "index": "0"})
            return self._parse_event_history(body)

        async def call() -> List[EventHistory]:
            require_page(page)
            if not self.lenient_event_history:
                return await fetch()
            try:
                return await fetch()
            except (KaiqiuError, PydanticValidationError, TypeError, ValueError) as e:
                logger.warning(f"[USER_REPO] Event history unavailable, showing none: {e}")
                return []

        return await guard(call)

    @staticmethod
    def _parse_event_history(body) -> List[EventHistory]:
        envelope = parse_envelope(body)
        data = unwrap(envelope, allow_empty=True)
        if data is None:
            return []
        history = EventHistoryData.model_validate(data)
        logger.debug(f"[USER_REPO] Event history page has {len(history.data or [])} events")
        return history.data or []

    async def follow_user(self, uid: str) -> Result[None]:
        async def call() -> None:
            require_text("uid", uid)
            await self._get("User/followee", None, {"uid": uid}, allow_empty=True)
        return await guard(call)

    async def unfollow_user(self, uid: str) -> Result[None]:
        async def call() -> None:
            require_text("uid", uid)
            await self._get("User/cancelFollowee", None, {"uid": uid}, allow_empty=True)
        return await guard(call)

    async def get_user_followees_list(self) -> Result[List[UserFollow]]:
        async def call() -> List[UserFollow]:
            response = await self._get("User/getUserFolloweesList", UserFollowListResponse)
            return response.followees_list or []
        return await guard(call)

    async def get_followee_enrolled_match(self, uid: str) -> Result[List[EventItem]]:
        async def call() -> List[EventItem]:
            require_text("uid", uid)
            return await self._get("User/getFolloweeEnrolledMatch", List[EventItem], {"uid": uid})
        return await guard(call)

    async def search_users(self, keyword: str, page: int = 1) -> Result[List[UserItem]]:
        async def call() -> List[UserItem]:
            require_text("keyword", keyword)
            require_page(page)
            return await self._get("user/lists", List[UserItem], {"keyword": keyword, "page": str(page)})
        return await guard(call)

    async def get_user_rank_list(self, city: str, page: int = 1, sort: str = "2") -> Result[RankListResponse]:
        async def call() -> RankListResponse:
            require_page(page)
            form = {"city": city, "page": str(page), "sort": sort}
            return await self._post("user/lists", RankListResponse, form=form)
        return await guard(call)

    async def day_sign(self) -> Result[SignResponse]:
        return await guard(lambda: self._post("user/sign", SignResponse))

    async def get_user_tags(self, uid: str, limit_by_count: int = 6) -> Result[List[str]]:
        async def call() -> List[str]:
            require_text("uid", uid)
            params = {"uid": uid, "limitByCount": str(limit_by_count), "getNegative": "false"}
            return await self._get("User/get_tags", List[str], params)
        return await guard(call)

    async def get_user_scores(self, uid: str) -> Result[List[ScoreHistory]]:
        async def call() -> List[ScoreHistory]:
            require_text("uid", uid)
            return await self._get("User/getUserScores", List[ScoreHistory], {"uid": uid})
        return await guard(call)
