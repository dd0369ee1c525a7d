"""
Loader - builds the store, API client, repositories and session state.
UI adapters take everything they need from the AppContext.
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from config.settings import Settings, settings as default_settings
from core.domain.constants import KEY_TOKEN
from core.services import AppPreferences, SessionState

# Infrastructure
from infrastructure.storage import JsonPreferenceStore
from infrastructure.api import (
    KaiqiuApiClient,
    ApiUserRepository,
    ApiTopRepository,
    ApiArenaRepository,
    ApiMatchRepository,
    ApiEventRepository,
    ApiPublicRepository,
)


@dataclass
class AppContext:
    """Process-wide singletons"""
    settings: Settings
    store: JsonPreferenceStore
    preferences: AppPreferences
    api: KaiqiuApiClient
    user_repo: ApiUserRepository
    top_repo: ApiTopRepository
    arena_repo: ApiArenaRepository
    match_repo: ApiMatchRepository
    event_repo: ApiEventRepository
    public_repo: ApiPublicRepository
    session: SessionState

    async def close(self) -> None:
        self.session.close()
        await self.api.close()


async def create_app_context(
    app_settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AppContext:
    """Wire everything and restore the persisted session"""
    app_settings = app_settings or default_settings

    # === STORAGE ===
    store = JsonPreferenceStore(app_settings.preferences_path)
    await store.load()
    preferences = AppPreferences(store)

    # === REMOTE ===
    # The token is read from the store on every request, so login/logout need no extra wiring
    api = KaiqiuApiClient(
        base_url=app_settings.api_base_url,
        timeout=app_settings.api_timeout_seconds,
        token_provider=lambda: store.peek(KEY_TOKEN),
        token_header=app_settings.token_header,
        transport=transport,
    )

    # === REPOSITORIES ===
    user_repo = ApiUserRepository(api)
    top_repo = ApiTopRepository(api)
    arena_repo = ApiArenaRepository(api)
    match_repo = ApiMatchRepository(api)
    event_repo = ApiEventRepository(api)
    public_repo = ApiPublicRepository(api)

    # === SESSION ===
    session = SessionState(preferences=preferences, user_repo=user_repo)
    await session.initialize()

    return AppContext(
        settings=app_settings,
        store=store,
        preferences=preferences,
        api=api,
        user_repo=user_repo,
        top_repo=top_repo,
        arena_repo=arena_repo,
        match_repo=match_repo,
        event_repo=event_repo,
        public_repo=public_repo,
        session=session,
    )
