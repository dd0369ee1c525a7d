"""
Result wrapper - uniform outcome of a remote operation.

A call ends as ``Success(value)`` or ``Error(cause)``; ``LOADING`` is the
transient state a caller holds while the call is in flight. Failures travel
as values, so UI code renders loading/error/success without try/except.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")


class ResultPendingError(RuntimeError):
    """Raised when unwrapping a result that is still loading"""


class Result(Generic[T]):
    """Base of Success / Error / Loading"""

    @property
    def is_success(self) -> bool:
        return isinstance(self, Success)

    @property
    def is_error(self) -> bool:
        return isinstance(self, Error)

    @property
    def is_loading(self) -> bool:
        return isinstance(self, Loading)

    def get_or_none(self) -> Optional[T]:
        return self.value if isinstance(self, Success) else None

    def unwrap_or_raise(self) -> T:
        """Return the success value; raise the carried cause, or ResultPendingError while loading."""
        if isinstance(self, Success):
            return self.value
        if isinstance(self, Error):
            raise self.cause
        raise ResultPendingError("Result is still loading")

    def map(self, transform: Callable[[T], R]) -> "Result[R]":
        """Transform the success value; Error and Loading pass through unchanged."""
        if isinstance(self, Success):
            return Success(transform(self.value))
        return self  # type: ignore[return-value]

    def flat_map(self, transform: Callable[[T], "Result[R]"]) -> "Result[R]":
        """Chain a dependent result; short-circuits on Error and Loading."""
        if isinstance(self, Success):
            return transform(self.value)
        return self  # type: ignore[return-value]


@dataclass(frozen=True)
class Success(Result[T]):
    value: T


@dataclass(frozen=True)
class Error(Result[Any]):
    cause: Exception

    @property
    def message(self) -> str:
        return getattr(self.cause, "message", None) or str(self.cause)


class Loading(Result[Any]):
    _instance: Optional["Loading"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Loading"


LOADING = Loading()


async def guard(operation: Callable[[], Union[T, Awaitable[T]]]) -> Result[T]:
    """
    Run ``operation`` and capture its outcome.

    A normal return becomes ``Success(value)``, any ``Exception`` becomes
    ``Error(cause)``. Cancellation is not an Exception and propagates.
    """
    try:
        value = operation()
        if inspect.isawaitable(value):
            value = await value
    except Exception as e:
        return Error(e)
    return Success(value)
