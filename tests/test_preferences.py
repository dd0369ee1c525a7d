import asyncio
import random

from core.domain.constants import MAX_CITY_HISTORY, MAX_SEARCH_HISTORY
from core.domain.models import CityData, UserInfo
from core.services.preferences import AppPreferences
from infrastructure.storage import JsonPreferenceStore


def _prefs(path) -> AppPreferences:
    return AppPreferences(JsonPreferenceStore(path))


def test_defaults_on_empty_store(prefs_path) -> None:
    async def scenario():
        prefs = _prefs(prefs_path)
        return (
            await prefs.get_token(),
            await prefs.get_user_info(),
            await prefs.get_select_city(),
            await prefs.get_city_history(),
            await prefs.get_more_mode(),
            await prefs.get_search_history(),
            await prefs.get_location(),
        )

    token, user, city, cities, more_mode, searches, location = asyncio.run(scenario())
    assert token is None and user is None
    assert city == CityData(id="1", name="北京市")
    assert cities == [] and searches == [] and location == []
    assert more_mode is False


def test_user_info_round_trips_through_json(prefs_path) -> None:
    info = UserInfo(uid="42", nickname='Ma "Long"', city="北京")

    async def write():
        await _prefs(prefs_path).set_user_info(info)

    async def read():
        return await _prefs(prefs_path).get_user_info()

    asyncio.run(write())
    assert asyncio.run(read()) == info


def test_unreadable_user_info_reads_as_absent(prefs_path) -> None:
    prefs_path.write_text('{"user_info": {"nickname": "no uid"}}', encoding="utf-8")

    async def scenario():
        return await _prefs(prefs_path).get_user_info()

    assert asyncio.run(scenario()) is None


def test_unreadable_city_falls_back_to_default(prefs_path) -> None:
    prefs_path.write_text('{"select_city": "北京市"}', encoding="utf-8")

    async def scenario():
        return await _prefs(prefs_path).get_select_city()

    assert asyncio.run(scenario()) == CityData.default()


def test_city_names_with_quotes_and_commas_survive(prefs_path) -> None:
    odd = CityData(id="7", name='He, "Fei"}{')

    async def scenario():
        prefs = _prefs(prefs_path)
        await prefs.set_select_city(odd)
        await prefs.add_city_history(odd)
        return await prefs.get_select_city(), await prefs.get_city_history()

    city, history = asyncio.run(scenario())
    assert city == odd
    assert history == [odd]


def test_city_history_property(prefs_path) -> None:
    rng = random.Random(7)
    picks = [CityData(id=str(rng.randint(1, 9)), name=f"city-{i}") for i in range(60)]

    async def scenario():
        prefs = _prefs(prefs_path)
        history = []
        for city in picks:
            history = await prefs.add_city_history(city)
        return history

    history = asyncio.run(scenario())
    ids = [c.id for c in history]
    assert len(history) <= MAX_CITY_HISTORY
    assert len(ids) == len(set(ids))
    assert history[0] == picks[-1]

    expected = []
    for city in picks:
        expected = [city] + [c for c in expected if c.id != city.id]
        expected = expected[:MAX_CITY_HISTORY]
    assert history == expected


def test_search_history_property(prefs_path) -> None:
    rng = random.Random(11)
    words = [rng.choice(["", "  ", "ma long", "fan zhendong"] + [f"p{n}" for n in range(30)]) for _ in range(200)]

    async def scenario():
        prefs = _prefs(prefs_path)
        for word in words:
            await prefs.add_search_history(word)
        return await prefs.get_search_history()

    history = asyncio.run(scenario())
    assert len(history) <= MAX_SEARCH_HISTORY
    assert len(history) == len(set(history))
    assert all(item.strip() for item in history)

    expected = []
    for word in words:
        if not word.strip():
            continue
        expected = [word] + [w for w in expected if w != word]
        expected = expected[:MAX_SEARCH_HISTORY]
    assert history == expected


def test_blank_search_is_not_written(prefs_path) -> None:
    async def scenario():
        prefs = _prefs(prefs_path)
        await prefs.add_search_history("ma long")
        return await prefs.add_search_history("   ")

    assert asyncio.run(scenario()) == ["ma long"]


def test_clear_search_history(prefs_path) -> None:
    async def scenario():
        prefs = _prefs(prefs_path)
        await prefs.add_search_history("ma long")
        await prefs.clear_search_history()
        return await prefs.get_search_history()

    assert asyncio.run(scenario()) == []


def test_watch_delivers_decoded_values(prefs_path) -> None:
    seen = []

    async def scenario():
        prefs = _prefs(prefs_path)
        prefs.watch("select_city", AppPreferences.decode_city, seen.append)
        await prefs.set_select_city(CityData(id="21", name="上海市"))
        await prefs.clear_all()

    asyncio.run(scenario())
    assert seen == [CityData(id="21", name="上海市"), CityData.default()]
