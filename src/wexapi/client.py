"""Synchronous client for the WEX public and trade APIs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, TypeVar

import httpx

from wexapi import envelope
from wexapi.config import ClientConfig
from wexapi.errors import RequestBuildError, StatusCodeError, TransportError, WireFormatError
from wexapi.models import (
    CancelOrder, InfoResponse, Market, OrderBook, Trade, TradeOrder,
    TradeOrders, UserInfo, UserTrade, Withdraw,
)
from wexapi.nonce import NonceGenerator
from wexapi.signer import Credentials, sign_request
from wexapi.wire import parse_decimal

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decimal_param(value: Decimal | int | str) -> str:
    try:
        return format(parse_decimal(value), "f")
    except WireFormatError as e:
        raise RequestBuildError(e) from e


class Client:
    """One key pair, one nonce sequence, one HTTP connection pool.

    ``http_client`` replaces the transport; a client passed in is never closed
    by this object. ``timeout`` (seconds) applies to whichever transport is used.
    """

    def __init__(
        self,
        key: str = "",
        secret: str = "",
        *,
        config: ClientConfig | None = None,
        http_client: httpx.Client | None = None,
        timeout: float | None = None,
        nonce: NonceGenerator | None = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._credentials = Credentials(key=key, secret=secret)
        if http_client is None:
            self._http = httpx.Client(timeout=self._config.timeout if timeout is None else timeout)
            self._owns_http = True
        else:
            self._http = http_client
            self._owns_http = False
            if timeout is not None:
                self._http.timeout = httpx.Timeout(timeout)
        self._nonce = nonce or NonceGenerator(maximum=self._config.nonce_max)

    @classmethod
    def from_credentials(cls, credentials: Credentials, **kwargs: Any) -> Client:
        return cls(credentials.key, credentials.secret.get_secret_value(), **kwargs)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ── Transport ──

    def _send(self, request: httpx.Request) -> bytes:
        try:
            response = self._http.send(request)
        except httpx.HTTPError as e:
            raise TransportError(e) from e
        if response.status_code != httpx.codes.OK:
            logger.warning("%s %s responded with status %d",
                           request.method, request.url.path, response.status_code)
            raise StatusCodeError(response.status_code)
        return response.content

    def _build(self, method: str, url: str, **kwargs: Any) -> httpx.Request:
        try:
            return self._http.build_request(method, url, **kwargs)
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise RequestBuildError(e) from e

    def _public_request(self, target: Any, path: str, params: Mapping[str, str] | None = None) -> Any:
        url = f"{self._config.public_endpoint}/{path}"
        request = self._build("GET", url, params=params)
        logger.debug("Public request %s", path)
        body = self._send(request)
        return envelope.decode(body, target, unwrap=False)

    def _trade_request(self, target: Any, method: str, params: Mapping[str, str] | None = None) -> Any:
        nonce = self._nonce.next()
        payload = sign_request(self._credentials, method, nonce, params)
        request = self._build(
            "POST", self._config.trade_endpoint,
            content=payload.body, headers=payload.headers,
        )
        logger.debug("Trade request %s nonce=%d", method, nonce)
        body = self._send(request)
        return envelope.decode(body, target)

    # ── Public API ──

    def info(self) -> InfoResponse:
        """Active pairs with their precision, price limits, minimum amount and fee."""
        return self._public_request(InfoResponse, "info")

    def ticker(self, pair: str) -> Market:
        """Latest high/low/average, volumes, last trade and best buy/sell for ``pair``."""
        markets = self._public_request(dict[str, Market], f"ticker/{pair}")
        return markets.get(pair, Market())

    def depth(self, pair: str, limit: int | None = None) -> OrderBook:
        """Active asks and bids for ``pair``."""
        books = self._public_request(dict[str, OrderBook], f"depth/{pair}", _limit(limit))
        return books.get(pair, OrderBook())

    def trades(self, pair: str, limit: int | None = None) -> list[Trade]:
        """Most recent trades for ``pair``."""
        history = self._public_request(dict[str, list[Trade]], f"trades/{pair}", _limit(limit))
        return history.get(pair, [])

    # ── Trade API ──

    def get_info(self) -> UserInfo:
        """Balances, key rights, transaction and open order counts, server time.

        Needs the ``info`` right.
        """
        return self._trade_request(UserInfo, "getInfo")

    def trade(
        self,
        pair: str,
        trade_type: str,
        rate: Decimal | int | str,
        amount: Decimal | int | str,
    ) -> UserTrade:
        """Place an order. ``trade_type`` is ``"buy"`` or ``"sell"``.

        Needs the ``trade`` right.
        """
        params = {
            "pair": pair,
            "type": trade_type,
            "rate": _decimal_param(rate),
            "amount": _decimal_param(amount),
        }
        return self._trade_request(UserTrade, "Trade", params)

    def active_orders(self, pair: str | None = None) -> list[TradeOrder]:
        """Open orders, optionally restricted to one pair. Order is unspecified."""
        params = {"pair": pair} if pair else None
        return self._trade_request(TradeOrders, "ActiveOrders", params)

    def order_info(self, order_id: int) -> TradeOrder:
        orders = self._trade_request(TradeOrders, "OrderInfo", {"order_id": str(order_id)})
        for order in orders:
            if order.id == order_id:
                return order
        return TradeOrder(id=order_id)

    def cancel_order(self, order_id: int) -> CancelOrder:
        return self._trade_request(CancelOrder, "CancelOrder", {"order_id": str(order_id)})

    def withdraw_coin(self, currency: str, address: str, amount: Decimal | int | str) -> Withdraw:
        """Send ``amount`` of ``currency`` to an external address.

        Needs the ``withdraw`` right.
        """
        params = {
            "coinName": currency,
            "address": address,
            "amount": _decimal_param(amount),
        }
        return self._trade_request(Withdraw, "WithdrawCoin", params)


def _limit(limit: int | None) -> dict[str, str] | None:
    return None if limit is None else {"limit": str(limit)}
