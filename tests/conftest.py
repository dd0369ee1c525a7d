from typing import Any, Dict, List, Optional, Tuple

import pytest

from core.domain.errors import NetworkError
from core.interfaces.transport import IApiTransport


class FakeTransport(IApiTransport):
    """Scripted remote API: one canned body (or exception) per path"""

    def __init__(self):
        self.responses: Dict[str, Any] = {}
        self.calls: List[Tuple[str, str, Optional[dict], Optional[dict]]] = []

    def reply(self, path: str, body: Any) -> None:
        self.responses[path] = body

    def paths(self) -> List[str]:
        return [call[1] for call in self.calls]

    def _answer(self, method: str, path: str, params, form) -> Any:
        self.calls.append((method, path, params, form))
        if path not in self.responses:
            raise NetworkError(f"no scripted response for {path}")
        outcome = self.responses[path]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def get(self, path, params=None):
        return self._answer("GET", path, params, None)

    async def post(self, path, form=None, params=None):
        return self._answer("POST", path, params, form)


@pytest.fixture
def fake_api() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def prefs_path(tmp_path):
    return tmp_path / "kaiqiu_preferences.json"
