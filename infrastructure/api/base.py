"""Shared plumbing for the API-backed repositories."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.domain.errors import ApiError, NetworkError, ValidationError
from core.domain.models import ApiEnvelope
from core.interfaces.transport import IApiTransport

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_envelope(body: Any) -> ApiEnvelope:
    """Decode the {code, msg, data} wrapper; anything else is a malformed response."""
    try:
        return ApiEnvelope.model_validate(body)
    except PydanticValidationError as e:
        raise NetworkError("Response is not an API envelope") from e


def unwrap(envelope: ApiEnvelope, allow_empty: bool = False) -> Any:
    """Return the payload of a successful envelope, raise ApiError otherwise.

    A failure without a server message carries an empty message; callers pick their own fallback.
    """
    if not envelope.is_success:
        raise ApiError(envelope.msg or "", envelope.code)
    if envelope.data is None and not allow_empty:
        raise ApiError(envelope.msg or "Empty response", envelope.code)
    return envelope.data


def validated(model: Type[M], **values: Any) -> M:
    """Build a request model, turning pydantic errors into ValidationError."""
    try:
        return model(**values)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or model.__name__
        raise ValidationError(field, first.get("msg", "invalid value")) from e


def require_text(field: str, value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, "must not be blank")
    return value


def require_page(page: int) -> int:
    if page < 1:
        raise ValidationError("page", "must be 1 or greater")
    return page


class ApiRepository:
    """Base class: holds the transport and decodes envelopes into typed payloads.

    Sub-classes wrap every public method in ``guard`` so the helpers here
    may raise freely.
    """

    def __init__(self, api: IApiTransport):
        self._api = api

    def _decode(self, envelope: ApiEnvelope, payload_type: Any, allow_empty: bool = False) -> Any:
        data = unwrap(envelope, allow_empty=allow_empty)
        if payload_type is None or data is None:
            return None
        try:
            return TypeAdapter(payload_type).validate_python(data)
        except PydanticValidationError as e:
            logger.warning(f"[API] Unexpected payload for {payload_type}: {e.error_count()} errors")
            raise ApiError("Unexpected response payload", envelope.code) from e

    async def _get(
        self,
        path: str,
        payload_type: Any,
        params: Optional[Dict[str, str]] = None,
        allow_empty: bool = False,
    ) -> Any:
        envelope = parse_envelope(await self._api.get(path, params))
        return self._decode(envelope, payload_type, allow_empty)

    async def _post(
        self,
        path: str,
        payload_type: Any,
        form: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        allow_empty: bool = False,
    ) -> Any:
        envelope = parse_envelope(await self._api.post(path, form, params))
        return self._decode(envelope, payload_type, allow_empty)
