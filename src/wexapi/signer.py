"""Credentials and HMAC-SHA512 signing of trade API requests."""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import urlencode

from pydantic import BaseModel, SecretStr

from wexapi.errors import RequestBuildError

KEY_HEADER = "Key"
SIGN_HEADER = "Sign"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

RESERVED_PARAMS = frozenset({"method", "nonce"})


class Credentials(BaseModel):
    key: str = ""
    secret: SecretStr = SecretStr("")


@dataclass(frozen=True)
class SignedPayload:
    body: bytes
    signature: str = field(repr=False)
    headers: dict[str, str] = field(default_factory=dict, repr=False)


def encode_form(method: str, nonce: int, params: Mapping[str, str] | None = None) -> bytes:
    """Form-encode ``method``, ``nonce`` and ``params`` with keys sorted."""
    values = {"method": method, "nonce": str(nonce)}
    for key, value in (params or {}).items():
        if key in RESERVED_PARAMS:
            raise RequestBuildError(f"parameter {key!r} is reserved")
        values[key] = value
    return urlencode(sorted(values.items())).encode("ascii")


def sign(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def sign_request(
    credentials: Credentials,
    method: str,
    nonce: int,
    params: Mapping[str, str] | None = None,
) -> SignedPayload:
    """Build the body and headers of a trade API call.

    The returned ``body`` is exactly what was signed and must be sent as-is.
    """
    body = encode_form(method, nonce, params)
    signature = sign(credentials.secret.get_secret_value(), body)
    headers = {
        KEY_HEADER: credentials.key,
        SIGN_HEADER: signature,
        "Content-Type": FORM_CONTENT_TYPE,
    }
    return SignedPayload(body=body, signature=signature, headers=headers)
