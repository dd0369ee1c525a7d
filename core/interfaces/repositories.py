"""
Repository interfaces - one narrow contract per backend domain.
Every method returns a Result and never raises; failures arrive as Error values.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from core.domain.models import (
    LoginResponse, UserInfo, AdvProfile, GameRecordsResponse, EventHistory,
    UserFollow, EventItem, UserItem, RankListResponse, SignResponse, ScoreHistory,
    TopListResponse, Top100Response,
    ArenaItem, ArenaDetail,
    MatchListResponse, GameDetail, KnockoutResponse, GroupData, ScoreUpdate,
    EventDetailResponse, MemberDetail, GroupsResponse, HonorItem, ResultItem, ScoreChange,
    CityData,
)
from core.domain.result import Result


class IUserRepository(ABC):
    """Interface for account and player data"""

    @abstractmethod
    async def login(self, account: str, password: str) -> Result[LoginResponse]:
        """Exchange credentials for a token"""
        pass

    @abstractmethod
    async def logout(self) -> Result[None]:
        """Invalidate the current token on the server"""
        pass

    @abstractmethod
    async def get_user_info(self) -> Result[UserInfo]:
        """Profile of the logged-in user"""
        pass

    @abstractmethod
    async def get_adv_profile(self, uid: str) -> Result[AdvProfile]:
        """Extended profile of any player"""
        pass

    @abstractmethod
    async def get_page_games_by_uid(self, uid: str, page: int) -> Result[GameRecordsResponse]:
        """Paged game record of a player"""
        pass

    @abstractmethod
    async def get_match_list_his_by_page(self, page: int) -> Result[List[EventHistory]]:
        """Tournaments the logged-in user took part in"""
        pass

    @abstractmethod
    async def follow_user(self, uid: str) -> Result[None]:
        pass

    @abstractmethod
    async def unfollow_user(self, uid: str) -> Result[None]:
        pass

    @abstractmethod
    async def get_user_followees_list(self) -> Result[List[UserFollow]]:
        pass

    @abstractmethod
    async def get_followee_enrolled_match(self, uid: str) -> Result[List[EventItem]]:
        pass

    @abstractmethod
    async def search_users(self, keyword: str, page: int = 1) -> Result[List[UserItem]]:
        pass

    @abstractmethod
    async def get_user_rank_list(self, city: str, page: int = 1, sort: str = "2") -> Result[RankListResponse]:
        pass

    @abstractmethod
    async def day_sign(self) -> Result[SignResponse]:
        """Daily check-in"""
        pass

    @abstractmethod
    async def get_user_tags(self, uid: str, limit_by_count: int = 6) -> Result[List[str]]:
        pass

    @abstractmethod
    async def get_user_scores(self, uid: str) -> Result[List[ScoreHistory]]:
        pass


class ITopRepository(ABC):
    """Interface for ranking lists"""

    @abstractmethod
    async def get_top_view(self, city: str) -> Result[TopListResponse]:
        pass

    @abstractmethod
    async def get_top100_data(self, city: str, tab_index: int = 1, tid: str = "2") -> Result[Top100Response]:
        pass


class IArenaRepository(ABC):
    """Interface for venues"""

    @abstractmethod
    async def get_arena_list(self, city: str, page: int = 1, keyword: Optional[str] = None) -> Result[List[ArenaItem]]:
        pass

    @abstractmethod
    async def get_arena_detail(self, arena_id: str) -> Result[ArenaDetail]:
        pass

    @abstractmethod
    async def get_arena_match_list(self, arena_id: str) -> Result[List[EventItem]]:
        pass


class IMatchRepository(ABC):
    """Interface for tournament games and score entry"""

    @abstractmethod
    async def get_match_list(self, city: str, page: int = 1, keyword: Optional[str] = None) -> Result[MatchListResponse]:
        pass

    @abstractmethod
    async def get_game_id_by_group(self, group_id: str, uid1: str, uid2: str) -> Result[Optional[str]]:
        pass

    @abstractmethod
    async def get_game_id_by_match_item(
        self, event_id: str, item_id: str, uid1: str, uid2: str
    ) -> Result[Optional[str]]:
        pass

    @abstractmethod
    async def get_game_detail(self, game_id: str) -> Result[GameDetail]:
        pass

    @abstractmethod
    async def get_knockout(self, event_id: str, item_id: str) -> Result[KnockoutResponse]:
        pass

    @abstractmethod
    async def update_tt_score(self, update: ScoreUpdate, game_id: str) -> Result[None]:
        """Submit a score for a game that already has an id"""
        pass

    @abstractmethod
    async def update_score(self, update: ScoreUpdate) -> Result[None]:
        """Submit a group-stage score"""
        pass

    @abstractmethod
    async def get_group_games(self, event_id: str, item_id: str) -> Result[List[GroupData]]:
        pass


class IEventRepository(ABC):
    """Interface for tournament details"""

    @abstractmethod
    async def get_event_detail(self, event_id: str) -> Result[EventDetailResponse]:
        pass

    @abstractmethod
    async def get_member_detail(self, match_id: str, item_id: str) -> Result[List[MemberDetail]]:
        pass

    @abstractmethod
    async def get_groups(self, event_id: str, item_id: str) -> Result[GroupsResponse]:
        pass

    @abstractmethod
    async def get_all_honors(self, event_id: str, item_id: str) -> Result[List[HonorItem]]:
        pass

    @abstractmethod
    async def get_all_result(self, event_id: str, item_id: str) -> Result[List[ResultItem]]:
        pass

    @abstractmethod
    async def get_score_change(self, event_id: str) -> Result[List[ScoreChange]]:
        pass


class IPublicRepository(ABC):
    """Interface for reference data"""

    @abstractmethod
    async def get_cities(self) -> Result[List[CityData]]:
        pass
