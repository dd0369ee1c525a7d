"""
HTTP client for the Kaiqiu API.
Single point of network access; the session token is attached by a request hook.
"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from config.features import features
from core.domain.errors import NetworkError
from core.interfaces.transport import IApiTransport

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class KaiqiuApiClient(IApiTransport):
    """httpx implementation of the remote call interface"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token_provider: Optional[TokenProvider] = None,
        token_header: str = "token",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token_provider = token_provider
        self._token_header = token_header
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"accept": "application/json"},
            event_hooks={
                "request": [self._attach_token],
                "response": [self._log_response],
            },
        )

    async def _attach_token(self, request: httpx.Request) -> None:
        token = self._token_provider() if self._token_provider else None
        if token:
            request.headers[self._token_header] = token

    async def _log_response(self, response: httpx.Response) -> None:
        if features.LOG_HTTP_TRAFFIC:
            request = response.request
            logger.debug(f"[API] {request.method} {request.url} -> {response.status_code}")

    async def _send(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"[API] {method} {path} failed with HTTP {status}")
            raise NetworkError(f"HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            logger.warning(f"[API] {method} {path} transport error: {e!r}")
            raise NetworkError(str(e) or type(e).__name__) from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"[API] {method} {path} returned a non-JSON body")
            raise NetworkError("Malformed response body", status_code=response.status_code) from e

    async def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return await self._send("GET", path, params=params)

    async def post(
        self,
        path: str,
        form: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        # The server only understands form-encoded bodies
        return await self._send("POST", path, data=form or {}, params=params)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "KaiqiuApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
