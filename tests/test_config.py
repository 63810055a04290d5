"""Configuration loading and client construction options."""

import httpx

from wexapi import Client, ClientConfig, NonceGenerator
from wexapi.config import PUBLIC_API_ENDPOINT, load_config, load_credentials
from wexapi.nonce import MAX_NONCE

from conftest import FakeServer


def test_defaults_when_file_missing(tmp_path):
    cfg = load_config(tmp_path / "missing.toml", env={})
    assert cfg == ClientConfig()
    assert cfg.public_endpoint == PUBLIC_API_ENDPOINT
    assert cfg.timeout == 10.0
    assert cfg.nonce_max == MAX_NONCE


def test_toml_file(tmp_path):
    p = tmp_path / "wex.toml"
    p.write_text('[client]\npublic_endpoint = "https://mirror.example/api/3"\ntimeout = 3.5\n')
    cfg = load_config(p, env={})
    assert cfg.public_endpoint == "https://mirror.example/api/3"
    assert cfg.timeout == 3.5


def test_env_overrides_file(tmp_path):
    p = tmp_path / "wex.toml"
    p.write_text('[client]\ntimeout = 3.5\n')
    cfg = load_config(p, env={"WEX_TIMEOUT": "7", "WEX_TRADE_ENDPOINT": "https://t.example/tapi"})
    assert cfg.timeout == 7.0
    assert cfg.trade_endpoint == "https://t.example/tapi"


def test_repo_default_config_loads():
    cfg = load_config(env={})
    assert cfg.trade_endpoint == "https://wex.nz/tapi"


def test_load_credentials():
    creds = load_credentials({"WEX_API_KEY": "k", "WEX_API_SECRET": "s"})
    assert creds.key == "k"
    assert creds.secret.get_secret_value() == "s"
    assert load_credentials({}).key == ""


def test_custom_endpoints_are_used():
    server = FakeServer('{"btc_usd":{}}')
    cfg = ClientConfig(public_endpoint="https://mirror.example/api/3")
    with httpx.Client(transport=httpx.MockTransport(server)) as http:
        Client(config=cfg, http_client=http).ticker("btc_usd")
    assert str(server.requests[0].url) == "https://mirror.example/api/3/ticker/btc_usd"


def test_timeout_override_applies_to_injected_transport():
    with httpx.Client(transport=httpx.MockTransport(FakeServer())) as http:
        Client(http_client=http, timeout=2.5)
        assert http.timeout == httpx.Timeout(2.5)


def test_injected_transport_left_open():
    with httpx.Client(transport=httpx.MockTransport(FakeServer())) as http:
        with Client(http_client=http):
            pass
        assert not http.is_closed


def test_owned_transport_closed():
    cli = Client(timeout=1.0)
    cli.close()
    assert cli._http.is_closed
    assert cli._http.timeout == httpx.Timeout(1.0)


def test_zero_timeout_is_kept():
    cli = Client(timeout=0)
    assert cli._http.timeout == httpx.Timeout(0)
    cli.close()


def test_nonce_limit_from_config():
    cli = Client(config=ClientConfig(nonce_max=5))
    assert cli._nonce.maximum == 5
    cli.close()
    assert Client(nonce=NonceGenerator(start=1, maximum=9))._nonce.maximum == 9
