import asyncio

import pytest

from core.domain.errors import ApiError
from core.domain.result import LOADING, Error, Loading, ResultPendingError, Success, guard


def test_map_applies_to_success_only() -> None:
    assert Success(2).map(lambda x: x * 10) == Success(20)

    cause = ApiError("nope", 0)
    err = Error(cause)
    assert err.map(lambda x: x * 10) is err
    assert LOADING.map(lambda x: x * 10) is LOADING


def test_flat_map_chains_and_short_circuits() -> None:
    assert Success(3).flat_map(lambda x: Success(x + 1)) == Success(4)

    cause = ValueError("bad")
    assert Success(3).flat_map(lambda x: Error(cause)) == Error(cause)

    calls = []
    err = Error(cause)
    assert err.flat_map(lambda x: calls.append(x) or Success(x)) is err
    assert LOADING.flat_map(lambda x: calls.append(x) or Success(x)) is LOADING
    assert calls == []


def test_unwrap_or_raise() -> None:
    assert Success("v").unwrap_or_raise() == "v"

    cause = ApiError("bad password", 0)
    with pytest.raises(ApiError) as excinfo:
        Error(cause).unwrap_or_raise()
    assert excinfo.value is cause

    with pytest.raises(ResultPendingError):
        LOADING.unwrap_or_raise()


def test_flags_and_get_or_none() -> None:
    assert Success(1).is_success and not Success(1).is_error
    assert Error(ValueError()).is_error
    assert LOADING.is_loading and Loading() is LOADING
    assert Success(1).get_or_none() == 1
    assert Error(ValueError()).get_or_none() is None
    assert LOADING.get_or_none() is None


def test_error_message_prefers_carried_message() -> None:
    assert Error(ApiError("bad password", 0)).message == "bad password"
    assert Error(ValueError("plain")).message == "plain"


def test_guard_wraps_return_value() -> None:
    async def fetch():
        return {"id": 1}

    assert asyncio.run(guard(fetch)) == Success({"id": 1})
    assert asyncio.run(guard(lambda: 5)) == Success(5)


def test_guard_captures_failure_as_error() -> None:
    cause = ApiError("server down", 500)

    async def fetch():
        raise cause

    result = asyncio.run(guard(fetch))
    assert isinstance(result, Error)
    assert result.cause is cause


def test_guard_lets_cancellation_through() -> None:
    async def scenario():
        started = asyncio.Event()

        async def slow():
            started.set()
            await asyncio.sleep(10)

        task = asyncio.create_task(guard(slow))
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
