"""Decoders for the non-standard JSON encodings used by the WEX API.

The exchange is loose about its wire format: booleans arrive as ``0``/``1``,
quoted or not, timestamps are bare unix seconds, order-book levels are
``[rate, amount]`` arrays and order collections are objects keyed by the
stringified order ID. Each encoding gets an explicit decode function here,
bound to a pydantic type through ``PlainValidator`` so no generic coercion
ever touches these fields.

JSON must be parsed with ``parse_float=Decimal`` (see ``loads``) so that
monetary values keep the exact digits the server sent.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import PlainValidator

from wexapi.errors import WireFormatError

MAX_UINT64 = 2**64 - 1

ORDER_PARAMS_COUNT = 2
ORDER_RATE_INDEX = 0
ORDER_AMOUNT_INDEX = 1

_TRUE_TOKENS = frozenset({"1", "true"})
_FALSE_TOKENS = frozenset({"0", "false"})
_UINT_RE = re.compile(r"[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def loads(data: bytes | str) -> Any:
    """Parse JSON keeping every non-integer number as an exact ``Decimal``."""
    return json.loads(data, parse_float=Decimal)


def parse_bool(value: Any) -> bool:
    """Accept exactly 0, 1, "0", "1", true, false, "true" and "false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        token = str(value)
    elif isinstance(value, str):
        token = value.strip('"')
    else:
        raise WireFormatError(f"boolean unmarshal error: invalid input {value!r}")
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise WireFormatError(f"boolean unmarshal error: invalid input {token}")


def parse_timestamp(value: Any) -> datetime:
    """Unix seconds to an aware UTC datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise WireFormatError(f"timestamp must be integer unix seconds, got {value!r}")
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise WireFormatError(f"timestamp {value} out of range") from e


def parse_decimal(value: Any) -> Decimal:
    """Exact decimal from a JSON number or numeric string; floats are refused."""
    if isinstance(value, bool):
        raise WireFormatError(f"can't convert {value!r} to decimal")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        return Decimal(value)
    elif isinstance(value, str):
        if not _DECIMAL_RE.fullmatch(value):
            raise WireFormatError(f"can't convert {value!r} to decimal")
        result = Decimal(value)
    else:
        raise WireFormatError(f"can't convert {type(value).__name__} {value!r} to decimal")
    if not result.is_finite():
        raise WireFormatError(f"can't convert {value!r} to decimal")
    return result


def parse_uint(token: str) -> int:
    """Unsigned decimal integer as used for order IDs in map keys."""
    if not isinstance(token, str) or not _UINT_RE.fullmatch(token):
        raise WireFormatError(f"parse id {token!r}: invalid syntax")
    value = int(token)
    if value > MAX_UINT64:
        raise WireFormatError(f"parse id {token!r}: value out of range")
    return value


def order_entry(value: Any) -> tuple[Decimal, Decimal]:
    """Split a ``[rate, amount]`` order-book level."""
    if not isinstance(value, (list, tuple)) or len(value) != ORDER_PARAMS_COUNT:
        raise WireFormatError(f"order entry must be a [rate, amount] array, got {value!r}")
    return parse_decimal(value[ORDER_RATE_INDEX]), parse_decimal(value[ORDER_AMOUNT_INDEX])


def id_keyed(value: Any, id_field: str = "id") -> list[dict[str, Any]]:
    """Flatten ``{"<id>": {...}}`` into a list of records carrying ``id_field``.

    Order follows the source object, which the exchange does not guarantee.
    """
    if not isinstance(value, Mapping):
        raise WireFormatError(f"unmarshal to id raw: expected object, got {type(value).__name__}")
    records = []
    for key, raw in value.items():
        record_id = parse_uint(key)
        if not isinstance(raw, Mapping):
            raise WireFormatError(f"unmarshal trade order {key}: expected object")
        records.append({**raw, id_field: record_id})
    return records


TolerantBool = Annotated[bool, PlainValidator(parse_bool)]
EpochTime = Annotated[datetime, PlainValidator(parse_timestamp)]
# None only as a field default; an explicit null on the wire is rejected.
OptionalEpochTime = Annotated[datetime | None, PlainValidator(parse_timestamp)]
ExactDecimal = Annotated[Decimal, PlainValidator(parse_decimal)]
