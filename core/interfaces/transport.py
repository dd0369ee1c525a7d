"""
Remote call interface - the HTTP client behind every repository.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class IApiTransport(ABC):
    """Interface for calls to the remote API.

    Both methods return the decoded JSON body as-is; interpreting the
    {code, msg, data} envelope is the repository's job.
    Transport failures raise NetworkError.
    """

    @abstractmethod
    async def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET with query parameters"""
        pass

    @abstractmethod
    async def post(
        self,
        path: str,
        form: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST a form-encoded body"""
        pass
