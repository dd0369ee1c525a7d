import asyncio
import json

from core.domain.errors import NetworkError
from core.domain.models import AuthStatus, CityData, UserInfo
from core.services import AppPreferences, SessionState
from infrastructure.api import ApiUserRepository
from infrastructure.storage import JsonPreferenceStore

LOGIN_OK = {"code": 1, "msg": "", "data": {"userinfo": {"token": "tok1", "id": "42", "username": "alice"}}}
PROFILE_OK = {"code": 1, "msg": "", "data": {"uid": "42", "nickname": "Alice", "city": "北京"}}


async def _session(path, api) -> SessionState:
    session = SessionState(AppPreferences(JsonPreferenceStore(path)), ApiUserRepository(api))
    await session.initialize()
    return session


def _on_disk(path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


def test_login_persists_token_and_profile(prefs_path, fake_api) -> None:
    fake_api.reply("user/login", LOGIN_OK)
    fake_api.reply("user/get_userinfo", PROFILE_OK)
    statuses = []

    async def scenario():
        session = await _session(prefs_path, fake_api)
        session.auth_status.subscribe(statuses.append)
        ok = await session.login("alice", "secret")
        return ok, session

    ok, session = asyncio.run(scenario())
    assert ok is True
    assert session.is_authenticated and session.is_logged_in.value
    assert session.user_info.value == UserInfo(uid="42", nickname="Alice", city="北京")
    assert session.error.value is None
    assert statuses == [AuthStatus.AUTHENTICATING, AuthStatus.LOGGED_IN]
    assert _on_disk(prefs_path)["token"] == "tok1"
    assert _on_disk(prefs_path)["user_info"]["nickname"] == "Alice"
    assert fake_api.paths() == ["user/login", "user/get_userinfo"]


def test_login_keeps_provisional_profile_when_refresh_fails(prefs_path, fake_api) -> None:
    fake_api.reply("user/login", LOGIN_OK)
    fake_api.reply("user/get_userinfo", NetworkError("timeout"))

    async def scenario():
        session = await _session(prefs_path, fake_api)
        ok = await session.login("alice", "secret")
        return ok, session

    ok, session = asyncio.run(scenario())
    assert ok is True
    assert session.user_info.value == UserInfo(uid="42", username="alice")


def test_login_failure_exposes_server_message(prefs_path, fake_api) -> None:
    fake_api.reply("user/login", {"code": 0, "msg": "bad password", "data": None})

    async def scenario():
        session = await _session(prefs_path, fake_api)
        ok = await session.login("alice", "secret")
        return ok, session

    ok, session = asyncio.run(scenario())
    assert ok is False
    assert session.error.value == "bad password"
    assert not session.is_authenticated
    assert session.auth_status.value == AuthStatus.LOGGED_OUT
    assert session.is_loading.value is False
    assert not prefs_path.exists()


def test_login_failure_without_message_uses_fallback(prefs_path, fake_api) -> None:
    fake_api.reply("user/login", {"code": 0, "msg": "", "data": None})

    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session.login("alice", "secret")
        return session.error.value

    assert asyncio.run(scenario()) == "登录失败"


def test_logout_clears_session_even_if_remote_fails(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({"token": "tok1", "select_city": {"id": "21", "name": "上海市"}}), encoding="utf-8")
    fake_api.reply("user/get_userinfo", NetworkError("timeout"))
    fake_api.reply("user/logout", NetworkError("timeout"))

    async def scenario():
        session = await _session(prefs_path, fake_api)
        assert session.is_authenticated
        await session.logout()
        return session

    session = asyncio.run(scenario())
    assert not session.is_authenticated
    assert session.user_info.value is None
    assert session.auth_status.value == AuthStatus.LOGGED_OUT
    assert "token" not in _on_disk(prefs_path)
    assert _on_disk(prefs_path)["select_city"] == {"id": "21", "name": "上海市"}


def test_selected_city_survives_restart(prefs_path, fake_api) -> None:
    shanghai = CityData(id="21", name="上海市")

    async def pick():
        session = await _session(prefs_path, fake_api)
        await session.set_selected_city(shanghai)
        return session.city_select_his.value

    async def restart():
        session = await _session(prefs_path, fake_api)
        return session.select_city.value, session.city_select_his.value, session.city_name

    assert asyncio.run(pick()) == [shanghai]
    assert asyncio.run(restart()) == (shanghai, [shanghai], "上海市")


def test_defaults_on_first_start(prefs_path, fake_api) -> None:
    async def scenario():
        return await _session(prefs_path, fake_api)

    session = asyncio.run(scenario())
    assert session.select_city.value == CityData.default()
    assert session.city_name == "北京市"
    assert session.is_more_mode.value is False
    assert session.search_player_his.value == []
    assert not session.is_authenticated
    assert fake_api.calls == []


def test_refresh_failure_keeps_stale_profile(prefs_path, fake_api) -> None:
    stale = {"uid": "42", "nickname": "Old name"}
    prefs_path.write_text(json.dumps({"token": "tok1", "user_info": stale}), encoding="utf-8")
    fake_api.reply("user/get_userinfo", NetworkError("timeout"))

    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session.refresh_user_info()
        return session

    session = asyncio.run(scenario())
    assert session.user_info.value == UserInfo(uid="42", nickname="Old name")
    assert session.error.value is None
    assert _on_disk(prefs_path)["user_info"] == stale


def test_initialize_fetches_missing_profile(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({"token": "tok1"}), encoding="utf-8")
    fake_api.reply("user/get_userinfo", PROFILE_OK)

    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session._refresh_task
        return session

    session = asyncio.run(scenario())
    assert session.user_info.value.nickname == "Alice"
    assert session.auth_status.value == AuthStatus.LOGGED_IN
    assert _on_disk(prefs_path)["user_info"]["uid"] == "42"


def test_search_history_and_more_mode(prefs_path, fake_api) -> None:
    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session.add_search_history("ma long")
        await session.add_search_history("  ")
        await session.add_search_history("fan zhendong")
        await session.set_more_mode(True)
        return session

    session = asyncio.run(scenario())
    assert session.search_player_his.value == ["fan zhendong", "ma long"]
    assert session.is_more_mode.value is True

    async def clear():
        session = await _session(prefs_path, fake_api)
        await session.clear_search_history()
        return session.search_player_his.value, _on_disk(prefs_path)["search_player_his"]

    assert asyncio.run(clear()) == ([], [])


def test_remove_all_drops_session_and_location(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({
        "token": "tok1",
        "user_info": {"uid": "42"},
        "user_location": ["北京", "海淀"],
        "is_more_mode": True,
    }), encoding="utf-8")

    async def scenario():
        session = await _session(prefs_path, fake_api)
        assert session.location.value == ["北京", "海淀"]
        await session.remove_all()
        return session

    session = asyncio.run(scenario())
    assert session.location.value == [] and session.token.value is None
    assert _on_disk(prefs_path) == {"is_more_mode": True}


def test_reset_returns_every_field_to_default(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({
        "token": "tok1",
        "user_info": {"uid": "42"},
        "select_city": {"id": "21", "name": "上海市"},
        "city_select_his": [{"id": "21", "name": "上海市"}],
        "search_player_his": ["ma long"],
    }), encoding="utf-8")

    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session.reset()
        return session

    session = asyncio.run(scenario())
    assert session.select_city.value == CityData.default()
    assert session.city_select_his.value == []
    assert session.search_player_his.value == []
    assert not session.is_authenticated
    assert _on_disk(prefs_path) == {}


def test_store_changes_flow_into_state(prefs_path, fake_api) -> None:
    async def scenario():
        session = await _session(prefs_path, fake_api)
        await session.preferences.set_more_mode(True)
        await session.preferences.set_token("tok9")
        return session

    session = asyncio.run(scenario())
    assert session.is_more_mode.value is True
    assert session.token.value == "tok9"
    assert session.auth_status.value == AuthStatus.LOGGED_IN


def test_write_failure_is_exposed_not_raised(tmp_path, fake_api) -> None:
    target = tmp_path / "prefs_dir"
    target.mkdir()

    async def scenario():
        session = await _session(target, fake_api)
        await session.set_more_mode(True)
        return session

    session = asyncio.run(scenario())
    assert session.error.value is not None
    assert "Could not write" in session.error.value
    assert session.is_more_mode.value is False


def test_failed_writes_leave_state_matching_disk(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({
        "token": "tok1",
        "user_info": {"uid": "42"},
        "select_city": {"id": "21", "name": "上海市"},
        "search_player_his": ["ma long"],
    }), encoding="utf-8")

    async def scenario():
        session = await _session(prefs_path, fake_api)
        # A directory in place of the file makes every replace fail
        prefs_path.unlink()
        prefs_path.mkdir()
        await session.set_selected_city(CityData(id="3", name="天津市"))
        await session.add_search_history("fan zhendong")
        await session.reset()
        return session

    session = asyncio.run(scenario())
    assert "Could not write" in session.error.value
    assert session.select_city.value == CityData(id="21", name="上海市")
    assert session.city_select_his.value == []
    assert session.search_player_his.value == ["ma long"]
    assert session.is_authenticated
    assert session.user_info.value == UserInfo(uid="42")


def test_login_with_blank_token_stays_logged_out(prefs_path, fake_api) -> None:
    fake_api.reply("user/login", {"code": 1, "msg": "", "data": {"userinfo": {"token": "", "id": "42"}}})

    async def login():
        session = await _session(prefs_path, fake_api)
        ok = await session.login("alice", "secret")
        return ok, session

    async def restart():
        session = await _session(prefs_path, fake_api)
        return session.is_authenticated

    ok, session = asyncio.run(login())
    assert ok is False
    assert not session.is_authenticated and not session.is_logged_in.value
    assert session.auth_status.value == AuthStatus.LOGGED_OUT
    assert session.error.value
    assert not prefs_path.exists()
    assert asyncio.run(restart()) is False


def test_failed_login_keeps_existing_session(prefs_path, fake_api) -> None:
    prefs_path.write_text(json.dumps({"token": "tok1", "user_info": {"uid": "42"}}), encoding="utf-8")
    fake_api.reply("user/login", {"code": 0, "msg": "bad password", "data": None})

    async def scenario():
        session = await _session(prefs_path, fake_api)
        ok = await session.login("bob", "secret")
        return ok, session

    ok, session = asyncio.run(scenario())
    assert ok is False
    assert session.error.value == "bad password"
    assert session.is_authenticated
    assert session.auth_status.value == AuthStatus.LOGGED_IN
    assert _on_disk(prefs_path)["token"] == "tok1"
