"""
Domain models - API payloads, session data, validated requests.
The remote API is loose with types (numbers arrive as strings and vice versa),
so payload models coerce numbers to strings and ignore unknown fields.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.domain.constants import (
    DEFAULT_CITY_ID, DEFAULT_CITY_NAME, MIN_PASSWORD_LENGTH, SCORE_OPTIONS, SUCCESS_CODE,
)


class ApiModel(BaseModel):
    """Base for every payload decoded from the API"""
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


# === ENVELOPE ===

class ApiEnvelope(ApiModel):
    """Outer wrapper of every API response"""
    code: int
    msg: Optional[str] = None
    data: Any = None

    @property
    def is_success(self) -> bool:
        return self.code == SUCCESS_CODE


# === SESSION ===

class AuthStatus(str, Enum):
    LOGGED_OUT = "logged_out"
    AUTHENTICATING = "authenticating"
    LOGGED_IN = "logged_in"


class CityData(ApiModel):
    """City selection - also the shape of the public city list"""
    id: str
    name: str

    @classmethod
    def default(cls) -> "CityData":
        return cls(id=DEFAULT_CITY_ID, name=DEFAULT_CITY_NAME)


class LoginUserInfo(ApiModel):
    token: str
    id: str
    username: Optional[str] = None

    @field_validator('token')
    @classmethod
    def token_not_blank(cls, v: str) -> str:
        return _require_text(v)


class LoginResponse(ApiModel):
    """{"userinfo": {"token": ..., "id": ..., "username": ...}}"""
    userinfo: LoginUserInfo


class UserInfo(ApiModel):
    uid: str
    image: Optional[str] = None
    username: Optional[str] = None
    nickname: Optional[str] = None
    realname: Optional[str] = None
    sex: Optional[str] = None
    city: Optional[str] = None
    score: Optional[str] = None
    credit: Optional[str] = None
    gold: Optional[str] = None


class Session(BaseModel):
    """Snapshot of the current session"""
    token: Optional[str] = None
    user_profile: Optional[UserInfo] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.token.strip())


# === USER ===

class GameRecord(ApiModel):
    """One played game in a user's record"""
    gameid: Optional[str] = None
    eventid: Optional[str] = None
    uid1: Optional[str] = None
    title: Optional[str] = None
    event_title: Optional[str] = Field(default=None, alias="eventTitle")
    result1: Optional[str] = None  # own games won
    result2: Optional[str] = None  # opponent games won
    score1: Optional[str] = None  # rating change
    username1: Optional[str] = None
    username11: Optional[str] = None  # doubles partner
    username2: Optional[str] = None
    username22: Optional[str] = None  # doubles opponent partner
    dateline: Optional[str] = None
    groupid: Optional[int] = None
    flag: Optional[int] = None
    uid2: Optional[str] = None

    @property
    def event_title_or_title(self) -> str:
        return self.event_title or self.title or ""

    @property
    def score_text(self) -> str:
        return f"{self.result1 or '0'}:{self.result2 or '0'}"

    @property
    def score_change_text(self) -> str:
        raw = (self.score1 or "").strip()
        if not raw:
            return "-"
        try:
            value = int(raw)
        except ValueError:
            return raw
        return f"+{value}" if value > 0 else str(value)

    @property
    def opponent_name(self) -> Optional[str]:
        return self.username2

    @property
    def is_win(self) -> bool:
        return _to_int(self.result1) > _to_int(self.result2)

    @property
    def is_group_match(self) -> bool:
        return self.groupid is not None and self.groupid > 0


def _to_int(value: Optional[str]) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


class GameRecordsResponse(ApiModel):
    data: Optional[List[GameRecord]] = None


class GamesWrapper(ApiModel):
    data: Optional[List[GameRecord]] = None


class AdvProfile(ApiModel):
    """Extended player profile shown on the user detail page"""
    uid: str
    realpic: Optional[str] = None
    username: Optional[str] = None
    realname: Optional[str] = None
    nickname: Optional[str] = None
    score: Optional[str] = None
    maxscore: Optional[str] = None
    max_score_the_year: Optional[str] = Field(default=None, alias="maxScoreTheYear")
    rank: Optional[str] = None
    scope: Optional[str] = None
    sex: Optional[str] = None
    age: Any = None  # 33 or 33.0 depending on the record
    resideprovince: Optional[str] = None
    description: Optional[str] = None
    bg: Optional[str] = None
    qiupai: Optional[str] = None  # blade brand
    qiupaitype: Optional[str] = None
    zhengshou: Optional[str] = None  # forehand rubber
    zhengshoutype: Optional[str] = None
    fanshou: Optional[str] = None  # backhand rubber
    fanshoutype: Optional[str] = None
    top3_of_beat_username_score: Optional[List[str]] = Field(default=None, alias="Top3OfBeatUsernameScore")
    top_player_username_score: Optional[List[str]] = Field(default=None, alias="TopPlayerUsernameScore")
    top3_man_of_beat_username_score: Optional[List[str]] = Field(default=None, alias="Top3ManOfBeatUsernameScore")
    top3_woman_of_beat_username_score: Optional[List[str]] = Field(default=None, alias="Top3WomanOfBeatUsernameScore")
    often_player: Optional[str] = Field(default=None, alias="OftenPlayer")
    all_cities: Optional[List[str]] = Field(default=None, alias="allCities")
    win: Optional[str] = None
    lose: Optional[str] = None
    total: Optional[str] = None
    beat: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    if_honor: Any = Field(default=None, alias="ifHonor")
    honors: Any = None  # list or empty string
    games: Optional[GamesWrapper] = None


class EventHistory(ApiModel):
    eventid: str
    title: Optional[str] = None
    poster: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    viewnum: Optional[str] = None
    membernum: Optional[str] = None


class EventHistoryData(ApiModel):
    """Paged event history: {"total", "per_page", "current_page", "last_page", "data": [...]}"""
    total: Optional[str] = None
    per_page: Optional[str] = None
    current_page: Optional[str] = None
    last_page: Optional[str] = None
    data: Optional[List[EventHistory]] = None


class UserFollow(ApiModel):
    uid: str = Field(alias="fuid")
    avatar: Optional[str] = Field(default=None, alias="face_url")
    realname: Optional[str] = None
    nickname: Optional[str] = None


class UserFollowListResponse(ApiModel):
    followees_list: Optional[List[UserFollow]] = Field(default=None, alias="followeesList")


class UserScores(ApiModel):
    wins: int = 0
    losses: int = 0
    win_rate: Optional[str] = Field(default=None, alias="winRate")
    total_games: int = Field(default=0, alias="totalGames")


class UserItem(ApiModel):
    """Search / rank list entry"""
    uid: str
    nickname: Optional[str] = None
    realname: Optional[str] = None
    avatar: Optional[str] = None
    city: Optional[str] = None
    sex: Optional[str] = None
    score: Optional[str] = None
    scores: Optional[UserScores] = None


class RankListResponse(ApiModel):
    list: List[UserItem] = Field(default_factory=list)
    total: int = 0


class SignResponse(ApiModel):
    msg: str = ""
    integral: int = 0


class ScoreHistory(ApiModel):
    post_score: Optional[str] = Field(default=None, alias="postScore")
    dateline: Optional[str] = None
    title: Optional[str] = None


# === EVENT ===

class EventItem(ApiModel):
    """Tournament as shown in lists"""
    eventid: str
    title: Optional[str] = None
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    arena: Optional[str] = None
    img: Optional[str] = None
    city: Optional[str] = None
    status: Optional[str] = None
    poster: Optional[str] = None
    arena_name: Optional[str] = None
    viewnum: Optional[str] = None
    membernum: Optional[str] = None
    grade: Optional[str] = None


class EventItemInfo(ApiModel):
    """Competition item inside a tournament (singles, doubles, ...)"""
    id: str
    name: Optional[str] = None
    match_type: Optional[str] = None
    qual_num: Optional[int] = Field(default=None, alias="qualNum")


class EventDetail(ApiModel):
    eventid: str
    title: Optional[str] = None
    username: Optional[str] = None
    starttime: Optional[str] = None
    endtime: Optional[str] = None
    arena_name: Optional[str] = None
    poster: Optional[str] = None
    status: Optional[str] = None
    contact: Optional[str] = None
    mobile: Optional[str] = None
    location: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    startenrolltime: Optional[str] = None
    deadline: Optional[str] = None
    weixin: Optional[str] = None
    note: Optional[str] = None
    detail: Optional[str] = None
    tagid: Optional[str] = None
    shopid: Optional[str] = None
    membernum: Optional[str] = None
    viewnum: Optional[str] = None


class EventDetailResponse(ApiModel):
    items: List[EventItemInfo] = Field(default_factory=list)
    detail: EventDetail


class MemberDetail(ApiModel):
    uid: Optional[str] = None
    name: Optional[str] = None
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    group: Optional[str] = None
    seed: Optional[int] = None
    score: Optional[int] = None
    newscore: Optional[str] = None
    paid: Optional[int] = None
    sex: Optional[int] = None
    teamid: Optional[str] = None
    mobile: Optional[str] = None
    role: Optional[int] = None


class MemberListResponse(ApiModel):
    list: List[MemberDetail] = Field(default_factory=list)


class GroupPlayerName(ApiModel):
    uid: str
    username: Optional[str] = None
    sum_score: Optional[str] = Field(default=None, alias="sumScore")
    rank: Optional[str] = None


class GroupData(ApiModel):
    group_name: str = Field(alias="groupName")
    names: List[GroupPlayerName] = Field(default_factory=list)
    scores: Dict[str, str] = Field(default_factory=dict)
    groupid: Optional[str] = None


class GroupsResponse(ApiModel):
    groups: List[GroupData] = Field(default_factory=list)


class GroupGamesResponse(ApiModel):
    groups: List[GroupData] = Field(default_factory=list)


class HonorItem(ApiModel):
    uid: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    ranking: int
    score: Optional[str] = None


class ResultItem(ApiModel):
    uid: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None
    ranking: int
    wins: int = 0
    losses: int = 0


class ScoreChange(ApiModel):
    uid: str
    nickname: Optional[str] = None
    before_score: Optional[str] = Field(default=None, alias="beforeScore")
    after_score: Optional[str] = Field(default=None, alias="afterScore")
    change: Optional[str] = None


# === MATCH ===

class MatchListResponse(ApiModel):
    data: List[EventItem] = Field(default_factory=list)


class GameIdResponse(ApiModel):
    gameid: Optional[str] = None


class PlayerInfo(ApiModel):
    uid: str
    nickname: Optional[str] = None
    avatar: Optional[str] = None


class GameDetail(ApiModel):
    gameid: str
    event_title: Optional[str] = Field(default=None, alias="eventTitle")
    player1: Optional[PlayerInfo] = None
    player2: Optional[PlayerInfo] = None
    scores: List[str] = Field(default_factory=list)
    result: Optional[str] = None


class TtGameData(ApiModel):
    """Knockout bracket game"""
    gameid: Optional[str] = None
    uid1: Optional[str] = None
    uid2: Optional[str] = None
    username1: Optional[str] = None
    username2: Optional[str] = None
    result1: Optional[str] = None
    result2: Optional[str] = None
    game_remark: Optional[str] = Field(default=None, alias="gameRemark")
    nickname1: Optional[str] = None
    nickname2: Optional[str] = None


class RoundData(ApiModel):
    roundname: str
    name: Optional[str] = None
    games: List[TtGameData] = Field(default_factory=list)


class KnockoutResponse(ApiModel):
    rounds: List[RoundData] = Field(default_factory=list)


# === TOP LISTS ===

class TopItem(ApiModel):
    tid: str
    name: Optional[str] = None
    viewnum: Optional[str] = None


class TopListResponse(ApiModel):
    list: List[TopItem] = Field(default_factory=list)
    total: int = 0


class Top100Item(ApiModel):
    uid: Optional[str] = None
    realname: Optional[str] = None
    score: Optional[str] = None
    sex: Optional[str] = None
    special: Optional[str] = None


class Top100Response(ApiModel):
    list: List[Top100Item] = Field(default_factory=list)
    tab_index: int = Field(default=1, alias="tabIndex")
    th: Optional[str] = None


# === ARENA ===

class ArenaItem(ApiModel):
    arenaid: str
    name: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    distance: Optional[str] = None


class ArenaDetail(ApiModel):
    arenaid: str
    name: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[str] = None
    lng: Optional[str] = None
    phone: Optional[str] = None
    contact: Optional[str] = None
    intro: Optional[str] = None
    images: Optional[List[str]] = None


# === REQUESTS ===

def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value


class LoginRequest(BaseModel):
    """Credentials checked before they leave the device"""
    account: str
    password: str

    @field_validator('account')
    @classmethod
    def account_not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator('password')
    @classmethod
    def password_strength(cls, v: str) -> str:
        _require_text(v)
        if len(v) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"must be at least {MIN_PASSWORD_LENGTH} characters")
        return v

    def as_form(self) -> Dict[str, str]:
        return {"account": self.account, "password": self.password}


class ScoreUpdate(BaseModel):
    """Score submitted for one game between two players"""
    group_id: str
    uid1: str
    uid2: str
    score: str  # "3:1" from SCORE_OPTIONS
    event_id: str
    item_id: str

    @field_validator('group_id', 'uid1', 'uid2', 'event_id', 'item_id')
    @classmethod
    def ids_not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator('score')
    @classmethod
    def known_score(cls, v: str) -> str:
        if v not in SCORE_OPTIONS:
            raise ValueError(f"unsupported score {v!r}")
        return v

    def as_params(self) -> Dict[str, str]:
        return {
            "groupid": self.group_id,
            "uid1": self.uid1,
            "uid2": self.uid2,
            "score": self.score,
            "eventid": self.event_id,
            "itemid": self.item_id,
        }
