"""
JSON-file implementation of the preference store.
Single durable file, in-memory snapshot, atomic replace on every write.
"""

import asyncio
import concurrent.futures
import json
import logging
import os
import tempfile
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Hashable, List, Optional

from core.domain.errors import StorageError
from core.interfaces.storage import IPreferenceStore, Listener

logger = logging.getLogger(__name__)


# One worker keeps file writes in issue order.
_io_executor = concurrent.futures.ThreadPoolExecutor(
    max_workers=1,
    thread_name_prefix="preferences-io",
)


def run_sync(func):
    """
    Decorator to run blocking file I/O in async context.
    Uses the dedicated single-thread executor instead of the default one.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_io_executor, lambda: func(*args, **kwargs))
    return wrapper


def _identity(value: Any) -> Any:
    return value


class JsonPreferenceStore(IPreferenceStore):
    """Preference store persisted as one JSON object on disk"""

    def __init__(self, path: Path):
        self._path = Path(path)
        self._data: Dict[str, Any] = {}
        self._loaded = False
        self._load_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._pending: Optional[asyncio.Future] = None
        self._listeners: Dict[str, List[Listener]] = {}

    @property
    def path(self) -> Path:
        return self._path

    # === Reads ===

    @run_sync
    def _read_file_sync(self) -> Dict[str, Any]:
        try:
            if not self._path.exists():
                return {}
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"[STORE] Could not read {self._path}, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"[STORE] {self._path} does not hold an object, starting empty")
            return {}
        return data

    async def load(self) -> None:
        async with self._load_lock:
            if self._loaded:
                return
            self._data = await self._read_file_sync()
            self._loaded = True
            logger.debug(f"[STORE] Loaded {len(self._data)} keys from {self._path}")

    async def get(self, key: str, default: Any = None) -> Any:
        await self.load()
        return self._data.get(key, default)

    def peek(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    # === Writes ===

    @run_sync
    def _write_file_sync(self, data: Dict[str, Any]) -> None:
        """Atomically write data as JSON: temp file in the same directory, then rename."""
        tmp_path = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            raise StorageError(f"Could not write {self._path}: {e}") from e

    async def _persist(self, data: Dict[str, Any], changed: List[str]) -> None:
        await self._write_file_sync(data)
        self._data = data
        self._notify(changed)

    async def _drain_pending(self) -> None:
        # A writer cancelled mid-write leaves its shielded task running; let it finish first
        pending = self._pending
        if pending is None:
            return
        if not pending.done():
            await asyncio.wait({pending})
        if not pending.cancelled():
            pending.exception()  # mark retrieved; its caller already saw it or was cancelled
        self._pending = None

    def _report_orphaned_write(self, future: asyncio.Future) -> None:
        # Write whose caller was cancelled; nobody else will see its failure
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error(f"[STORE] Write to {self._path} failed after its caller was cancelled: {error}")

    async def _mutate(self, mutate: Callable[[Dict[str, Any]], Any]) -> Any:
        """Apply mutate to a copy of the snapshot and persist it before returning."""
        await self.load()
        async with self._write_lock:
            await self._drain_pending()
            updated = dict(self._data)
            result = mutate(updated)
            changed = [
                key for key in set(self._data) | set(updated)
                if self._data.get(key) != updated.get(key)
            ]
            if not changed:
                return result
            self._pending = asyncio.ensure_future(self._persist(updated, changed))
            try:
                await asyncio.shield(self._pending)
            except asyncio.CancelledError:
                self._pending.add_done_callback(self._report_orphaned_write)
                raise
            self._pending = None
            return result

    async def set(self, key: str, value: Any) -> None:
        def apply(data: Dict[str, Any]) -> None:
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value

        await self._mutate(apply)

    async def append_to_bounded_list(
        self,
        key: str,
        item: Any,
        max_size: int,
        dedup_by: Optional[Callable[[Any], Hashable]] = None,
    ) -> List[Any]:
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        key_of = dedup_by or _identity
        item_key = key_of(item)

        def apply(data: Dict[str, Any]) -> List[Any]:
            current = data.get(key)
            if current is None:
                current = []
            elif not isinstance(current, list):
                logger.warning(f"[STORE] {key} is not a list, resetting it")
                current = []
            trimmed = [x for x in current if key_of(x) != item_key]
            trimmed.insert(0, item)
            trimmed = trimmed[:max_size]
            data[key] = trimmed
            return trimmed

        return await self._mutate(apply)

    async def clear(self) -> None:
        await self._mutate(lambda data: data.clear())

    # === Change listeners ===

    def subscribe(self, key: str, listener: Listener) -> Callable[[], None]:
        self._listeners.setdefault(key, []).append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(key, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def _notify(self, keys: List[str]) -> None:
        for key in keys:
            value = self._data.get(key)
            for listener in list(self._listeners.get(key, [])):
                try:
                    listener(value)
                except Exception:
                    logger.exception(f"[STORE] Listener for {key} failed")
