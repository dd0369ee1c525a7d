"""
Session state - the single object the UI reads session and preference data from.

Mirrors the preference store into observable fields on startup and funnels
every user action through the repositories and back into the store, so the
state survives a restart.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from core.domain.constants import (
    KEY_TOKEN, KEY_USER_INFO, KEY_LOCATION, KEY_SELECT_CITY, KEY_CITY_SELECT_HIS,
    KEY_IS_MORE_MODE, KEY_SEARCH_PLAYER_HIS, LOGIN_FAILED_MESSAGE,
)
from core.domain.errors import StorageError
from core.domain.models import AuthStatus, CityData, Session, UserInfo
from core.domain.result import Error, Success
from core.interfaces.repositories import IUserRepository
from core.services.preferences import AppPreferences
from core.utils.observable import ObservableValue

logger = logging.getLogger(__name__)


class SessionState:
    """Observable session + preferences, written through to the store"""

    def __init__(self, preferences: AppPreferences, user_repo: IUserRepository):
        self.preferences = preferences
        self.user_repo = user_repo

        # === State ===
        self.token: ObservableValue[Optional[str]] = ObservableValue(None)
        self.user_info: ObservableValue[Optional[UserInfo]] = ObservableValue(None)
        self.is_logged_in: ObservableValue[bool] = ObservableValue(False)
        self.auth_status: ObservableValue[AuthStatus] = ObservableValue(AuthStatus.LOGGED_OUT)
        self.location: ObservableValue[List[str]] = ObservableValue([])
        self.select_city: ObservableValue[CityData] = ObservableValue(CityData.default())
        self.city_select_his: ObservableValue[List[CityData]] = ObservableValue([])
        self.is_more_mode: ObservableValue[bool] = ObservableValue(False)
        self.search_player_his: ObservableValue[List[str]] = ObservableValue([])
        self.is_loading: ObservableValue[bool] = ObservableValue(False)
        self.error: ObservableValue[Optional[str]] = ObservableValue(None)

        self._refresh_task: Optional[asyncio.Task] = None
        self._unsubscribers: List[Callable[[], None]] = [
            preferences.watch(KEY_TOKEN, AppPreferences.decode_token, self._apply_token),
            preferences.watch(KEY_USER_INFO, AppPreferences.decode_user_info, self._apply_user_info),
            preferences.watch(KEY_LOCATION, AppPreferences.decode_string_list, self._set(self.location)),
            preferences.watch(KEY_SELECT_CITY, AppPreferences.decode_city, self._set(self.select_city)),
            preferences.watch(KEY_CITY_SELECT_HIS, AppPreferences.decode_city_list, self._set(self.city_select_his)),
            preferences.watch(KEY_IS_MORE_MODE, AppPreferences.decode_bool, self._set(self.is_more_mode)),
            preferences.watch(KEY_SEARCH_PLAYER_HIS, AppPreferences.decode_string_list, self._set(self.search_player_his)),
        ]

    # === Store mirroring ===

    @staticmethod
    def _set(field: ObservableValue) -> Callable:
        def apply(value) -> None:
            field.value = value
        return apply

    def _apply_token(self, token: Optional[str]) -> None:
        token = AppPreferences.decode_token(token)
        self.token.value = token
        self.is_logged_in.value = token is not None
        if token is None:
            self.auth_status.value = AuthStatus.LOGGED_OUT
        elif self.auth_status.value != AuthStatus.AUTHENTICATING:
            self.auth_status.value = AuthStatus.LOGGED_IN

    def _apply_user_info(self, user_info: Optional[UserInfo]) -> None:
        self.user_info.value = user_info

    async def initialize(self) -> None:
        """Reconcile in-memory state with the persisted store"""
        await self.preferences.store.load()
        self._apply_token(await self.preferences.get_token())
        self.location.value = await self.preferences.get_location()
        self.select_city.value = await self.preferences.get_select_city()
        self.city_select_his.value = await self.preferences.get_city_history()
        self.is_more_mode.value = await self.preferences.get_more_mode()
        self.search_player_his.value = await self.preferences.get_search_history()

        saved_user_info = await self.preferences.get_user_info()
        self.user_info.value = saved_user_info
        logger.info(f"[SESSION] Restored session, logged in: {self.is_logged_in.value}")

        if self.is_logged_in.value and saved_user_info is None:
            logger.info("[SESSION] Logged in without a profile, refreshing")
            self._refresh_task = asyncio.create_task(self.refresh_user_info())

    def close(self) -> None:
        """Drop store subscriptions and any pending background refresh"""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()

    # === Computed ===

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def city_name(self) -> str:
        return self.select_city.value.name

    @property
    def session(self) -> Session:
        return Session(token=self.token.value, user_profile=self.user_info.value)

    # === Actions ===
    # Preference actions only write to the store; its listeners update the observables after a durable write

    async def login(self, account: str, password: str) -> bool:
        """
        Log in and persist the session. Returns True on success.

        A failed attempt never touches a stored token, so an already logged-in
        session stays logged in and only ``error`` changes.
        """
        self.is_loading.value = True
        self.error.value = None
        self.auth_status.value = AuthStatus.AUTHENTICATING
        try:
            result = await self.user_repo.login(account, password)
            if isinstance(result, Error):
                self.error.value = result.message or LOGIN_FAILED_MESSAGE
                logger.info(f"[SESSION] Login failed: {self.error.value}")
                return False

            login_info = result.unwrap_or_raise().userinfo
            try:
                await self.preferences.set_token(login_info.token)
            except StorageError as e:
                logger.error(f"[SESSION] Could not persist token: {e}")
                self.error.value = str(e)
                return False
            self._apply_token(login_info.token)

            # Provisional profile until the full one arrives
            provisional = UserInfo(uid=login_info.id, username=login_info.username)
            await self._write(self.preferences.set_user_info(provisional))
            logger.info(f"[SESSION] Logged in as {login_info.id}")

            await self.refresh_user_info()
            return True
        finally:
            self.is_loading.value = False
            self.auth_status.value = AuthStatus.LOGGED_IN if self.is_authenticated else AuthStatus.LOGGED_OUT

    async def logout(self) -> None:
        """Best-effort remote logout; local session is cleared regardless"""
        self.is_loading.value = True
        try:
            result = await self.user_repo.logout()
            if isinstance(result, Error):
                logger.warning(f"[SESSION] Remote logout failed, clearing locally anyway: {result.message}")
            await self._clear_session()
        finally:
            self.is_loading.value = False

    async def _clear_session(self, clear_location: bool = False) -> None:
        # Local sign-out is unconditional, even when the store cannot be written
        self.token.value = None
        self.user_info.value = None
        self.is_logged_in.value = False
        self.auth_status.value = AuthStatus.LOGGED_OUT
        if clear_location:
            self.location.value = []
        try:
            await self.preferences.clear_token()
            await self.preferences.set_user_info(None)
            if clear_location:
                await self.preferences.set_location(None)
        except StorageError as e:
            logger.error(f"[SESSION] Could not clear persisted session: {e}")
            self.error.value = str(e)

    async def refresh_user_info(self) -> None:
        """Reload the profile; on failure the cached one stays visible"""
        result = await self.user_repo.get_user_info()
        if isinstance(result, Success):
            await self._write(self.preferences.set_user_info(result.value))
        elif isinstance(result, Error):
            logger.warning(f"[SESSION] Profile refresh failed, keeping cached profile: {result.message}")

    async def set_selected_city(self, city: CityData) -> None:
        await self._write(self.preferences.set_select_city(city))
        await self._write(self.preferences.add_city_history(city))

    async def set_location(self, parts: List[str]) -> None:
        await self._write(self.preferences.set_location(parts))

    async def set_more_mode(self, enabled: bool) -> None:
        await self._write(self.preferences.set_more_mode(enabled))

    async def add_search_history(self, keyword: str) -> None:
        await self._write(self.preferences.add_search_history(keyword))

    async def clear_search_history(self) -> None:
        await self._write(self.preferences.clear_search_history())

    def clear_error(self) -> None:
        self.error.value = None

    async def remove_all(self) -> None:
        """Forget the session and the picked location"""
        await self._clear_session(clear_location=True)

    async def reset(self) -> None:
        """Wipe every stored preference; every field falls back to its default"""
        await self._write(self.preferences.clear_all())

    async def _write(self, write):
        """Await a store write; failures are logged and exposed, never raised"""
        try:
            return await write
        except StorageError as e:
            logger.error(f"[SESSION] Preference write failed: {e}")
            self.error.value = str(e)
            return None
