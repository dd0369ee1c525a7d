"""
Preference storage interface - durable key-value store for session data.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Hashable, List, Optional

Listener = Callable[[Any], None]


class IPreferenceStore(ABC):
    """Interface for the process-wide preference store"""

    @abstractmethod
    async def load(self) -> None:
        """Read persisted data into memory. Never raises."""
        pass

    @abstractmethod
    async def get(self, key: str, default: Any = None) -> Any:
        """Get a value; unreadable or absent values return default"""
        pass

    @abstractmethod
    def peek(self, key: str, default: Any = None) -> Any:
        """Synchronous read of the in-memory snapshot"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Upsert a value; None removes the key. Raises StorageError on write failure."""
        pass

    @abstractmethod
    async def append_to_bounded_list(
        self,
        key: str,
        item: Any,
        max_size: int,
        dedup_by: Optional[Callable[[Any], Hashable]] = None,
    ) -> List[Any]:
        """Dedup, prepend, truncate to max_size and persist. Returns the new list."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove every key"""
        pass

    @abstractmethod
    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        """Call listener with the new value after each durable change of key. Returns unsubscribe."""
        pass
