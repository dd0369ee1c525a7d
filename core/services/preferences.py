"""
Typed preferences - named accessors over the raw preference store.
Decoding is forgiving: a stored value that no longer fits its model reads as absent.
"""

import logging
from typing import Any, Callable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.domain.constants import (
    KEY_TOKEN, KEY_USER_INFO, KEY_LOCATION, KEY_SELECT_CITY, KEY_CITY_SELECT_HIS,
    KEY_IS_MORE_MODE, KEY_SEARCH_PLAYER_HIS, MAX_CITY_HISTORY, MAX_SEARCH_HISTORY,
)
from core.domain.models import CityData, UserInfo
from core.interfaces.storage import IPreferenceStore

logger = logging.getLogger(__name__)


def _city_id(value: Any) -> Any:
    return value.get("id") if isinstance(value, dict) else value


class AppPreferences:
    """Session and preference data on top of an IPreferenceStore"""

    def __init__(self, store: IPreferenceStore):
        self.store = store

    # === Decoding ===

    @staticmethod
    def decode_token(raw: Any) -> Optional[str]:
        return raw if isinstance(raw, str) and raw.strip() else None

    @staticmethod
    def decode_user_info(raw: Any) -> Optional[UserInfo]:
        if raw is None:
            return None
        try:
            return UserInfo.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"[PREFS] Stored user info is unreadable: {e}")
            return None

    @staticmethod
    def decode_city(raw: Any) -> CityData:
        if raw is None:
            return CityData.default()
        try:
            return CityData.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"[PREFS] Stored city is unreadable, using default: {e}")
            return CityData.default()

    @staticmethod
    def decode_city_list(raw: Any) -> List[CityData]:
        if not isinstance(raw, list):
            return []
        cities = []
        for item in raw:
            try:
                cities.append(CityData.model_validate(item))
            except PydanticValidationError:
                logger.warning(f"[PREFS] Dropping unreadable city history entry: {item!r}")
        return cities

    @staticmethod
    def decode_string_list(raw: Any) -> List[str]:
        if not isinstance(raw, list):
            return []
        return [item for item in raw if isinstance(item, str) and item.strip()]

    @staticmethod
    def decode_bool(raw: Any) -> bool:
        return raw if isinstance(raw, bool) else False

    # === Token ===

    async def get_token(self) -> Optional[str]:
        return self.decode_token(await self.store.get(KEY_TOKEN))

    async def set_token(self, token: Optional[str]) -> None:
        await self.store.set(KEY_TOKEN, token)

    async def clear_token(self) -> None:
        await self.store.set(KEY_TOKEN, None)

    # === User info ===

    async def get_user_info(self) -> Optional[UserInfo]:
        return self.decode_user_info(await self.store.get(KEY_USER_INFO))

    async def set_user_info(self, user_info: Optional[UserInfo]) -> None:
        value = user_info.model_dump(by_alias=True) if user_info is not None else None
        await self.store.set(KEY_USER_INFO, value)

    # === Location ===

    async def get_location(self) -> List[str]:
        return self.decode_string_list(await self.store.get(KEY_LOCATION))

    async def set_location(self, parts: Optional[List[str]]) -> None:
        await self.store.set(KEY_LOCATION, list(parts) if parts is not None else None)

    # === City ===

    async def get_select_city(self) -> CityData:
        return self.decode_city(await self.store.get(KEY_SELECT_CITY))

    async def set_select_city(self, city: CityData) -> None:
        await self.store.set(KEY_SELECT_CITY, city.model_dump())

    async def get_city_history(self) -> List[CityData]:
        return self.decode_city_list(await self.store.get(KEY_CITY_SELECT_HIS))

    async def add_city_history(self, city: CityData) -> List[CityData]:
        stored = await self.store.append_to_bounded_list(
            KEY_CITY_SELECT_HIS, city.model_dump(), MAX_CITY_HISTORY, dedup_by=_city_id,
        )
        return self.decode_city_list(stored)

    # === More mode ===

    async def get_more_mode(self) -> bool:
        return self.decode_bool(await self.store.get(KEY_IS_MORE_MODE))

    async def set_more_mode(self, enabled: bool) -> None:
        await self.store.set(KEY_IS_MORE_MODE, bool(enabled))

    # === Search history ===

    async def get_search_history(self) -> List[str]:
        return self.decode_string_list(await self.store.get(KEY_SEARCH_PLAYER_HIS))

    async def add_search_history(self, keyword: str) -> List[str]:
        """Record a player search. Blank keywords are ignored."""
        if not keyword or not keyword.strip():
            return await self.get_search_history()
        stored = await self.store.append_to_bounded_list(KEY_SEARCH_PLAYER_HIS, keyword, MAX_SEARCH_HISTORY)
        return self.decode_string_list(stored)

    async def clear_search_history(self) -> None:
        await self.store.set(KEY_SEARCH_PLAYER_HIS, [])

    # === Clear all ===

    async def clear_all(self) -> None:
        await self.store.clear()

    # === Watching ===

    def watch(self, key: str, decode: Callable[[Any], Any], callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe to a key, delivering decoded values"""
        return self.store.subscribe(key, lambda raw: callback(decode(raw)))
