"""Two-phase envelope decoding."""

from decimal import Decimal

import pytest

from wexapi.envelope import BaseResponse, decode, parse_envelope
from wexapi.errors import DecodeError, EnvelopeDecodeError, ResultDecodeError, ServerError
from wexapi.models import UserInfo

from conftest import INVALID_METHOD_RESPONSE


def test_error_response():
    with pytest.raises(ServerError) as exc:
        decode(INVALID_METHOD_RESPONSE, UserInfo)
    assert str(exc.value) == "server respond with error: Invalid method"
    assert exc.value.message == "Invalid method"


@pytest.mark.parametrize("success", ["0", '"0"', "false", '"false"'])
def test_error_response_any_falsy_encoding(success):
    with pytest.raises(ServerError):
        decode(f'{{"success":{success},"error":"bad"}}', UserInfo)


def test_invalid_json_is_envelope_phase():
    with pytest.raises(EnvelopeDecodeError) as exc:
        decode("/", UserInfo)
    assert str(exc.value).startswith("unmarshal to base response: ")
    assert exc.value.phase == "envelope"


@pytest.mark.parametrize("body", ["[]", '"text"', '{"success":"yes"}', '{"success":1,"error":5}'])
def test_bad_envelope_shape(body):
    with pytest.raises(EnvelopeDecodeError):
        decode(body, UserInfo)


def test_invalid_return_is_result_phase():
    with pytest.raises(ResultDecodeError) as exc:
        decode('{"success":1,"return":"//"}', UserInfo)
    assert str(exc.value).startswith("unmarshal to result: ")
    assert isinstance(exc.value, DecodeError)
    assert exc.value.phase == "result"


def test_missing_return():
    with pytest.raises(ResultDecodeError):
        decode('{"success":1}', UserInfo)


def test_unwraps_return():
    info = decode('{"success":1,"return":{"funds":{"btc":23.998},"open_orders":1}}', UserInfo)
    assert info.funds == {"btc": Decimal("23.998")}
    assert info.open_orders == 1


def test_falsy_success_without_error_still_decodes():
    info = decode('{"success":0,"return":{"open_orders":2}}', UserInfo)
    assert info.open_orders == 2


def test_whole_document_when_not_unwrapping():
    result = decode('{"btc_usd":{"high":1.5}}', dict[str, dict], unwrap=False)
    assert result == {"btc_usd": {"high": Decimal("1.5")}}


def test_public_error_body_still_checked():
    with pytest.raises(ServerError):
        decode(INVALID_METHOD_RESPONSE, dict[str, dict], unwrap=False)


def test_parse_envelope_returns_document():
    envelope, document = parse_envelope(b'{"success":"1","return":[1,2]}')
    assert isinstance(envelope, BaseResponse)
    assert envelope.success is True
    assert envelope.result == [1, 2]
    assert document["return"] == [1, 2]
