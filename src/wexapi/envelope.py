"""Two-phase decoding of API responses.

Every response is first read as the common envelope
``{"success": ..., "error": ..., "return": ...}``. A falsy ``success`` with
an ``error`` message fails straight away. Otherwise the payload is decoded
into the requested type: the ``return`` member for the trade API, the whole
document for the public API, which does not wrap its data.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from wexapi import wire
from wexapi.errors import EnvelopeDecodeError, ResultDecodeError, ServerError
from wexapi.wire import TolerantBool

logger = logging.getLogger(__name__)

T = TypeVar("T")

RESULT_KEY = "return"


class BaseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: TolerantBool = False
    error: str | None = None
    result: Any = Field(None, alias=RESULT_KEY)


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def describe(exc: ValidationError) -> str:
    """One-line summary of a pydantic validation failure."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def parse_envelope(body: bytes | str) -> tuple[BaseResponse, Any]:
    """Parse the raw body, returning the envelope and the full JSON document."""
    try:
        document = wire.loads(body)
    except ValueError as e:
        raise EnvelopeDecodeError(e) from e
    try:
        envelope = BaseResponse.model_validate(document)
    except ValidationError as e:
        raise EnvelopeDecodeError(describe(e)) from e
    if not envelope.success and envelope.error is not None:
        logger.warning("Server responded with error: %s", envelope.error)
        raise ServerError(envelope.error)
    return envelope, document


def decode_result(payload: Any, target: type[T] | Any) -> T:
    try:
        return _adapter(target).validate_python(payload)
    except ValidationError as e:
        raise ResultDecodeError(describe(e)) from e


def decode(body: bytes | str, target: type[T] | Any, *, unwrap: bool = True) -> T:
    """Decode a response body into ``target``.

    With ``unwrap`` the payload is the envelope's ``return`` member, which
    must be present; without it the whole document is decoded.
    """
    envelope, document = parse_envelope(body)
    if not unwrap:
        return decode_result(document, target)
    if RESULT_KEY not in document:
        raise ResultDecodeError(f"missing {RESULT_KEY!r} in response")
    return decode_result(envelope.result, target)
