"""Typed payloads returned by the public and trade APIs."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainValidator, model_validator

from wexapi.wire import ExactDecimal, OptionalEpochTime, TolerantBool, id_keyed, order_entry

ZERO = Decimal(0)

Funds = dict[str, ExactDecimal]


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ── Public API ──

class PairInfo(_Payload):
    decimal_places: int = 0
    min_price: ExactDecimal = ZERO
    max_price: ExactDecimal = ZERO
    min_amount: ExactDecimal = ZERO
    fee: ExactDecimal = ZERO
    hidden: TolerantBool = False


class InfoResponse(_Payload):
    server_time: OptionalEpochTime = None
    pairs: dict[str, PairInfo] = {}


class Market(_Payload):
    high: ExactDecimal = ZERO
    low: ExactDecimal = ZERO
    average: ExactDecimal = Field(ZERO, alias="avg")
    volume: ExactDecimal = Field(ZERO, alias="vol")
    volume_in_currency: ExactDecimal = Field(ZERO, alias="vol_cur")
    last: ExactDecimal = ZERO
    buy: ExactDecimal = ZERO
    sell: ExactDecimal = ZERO
    updated: OptionalEpochTime = None


class Order(_Payload):
    """One order-book level, sent as ``[rate, amount]``. ``total`` is derived."""

    rate: ExactDecimal = ZERO
    amount: ExactDecimal = ZERO
    total: ExactDecimal = ZERO

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            rate, amount = order_entry(data)
            return {"rate": rate, "amount": amount}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k != "total"}
        return data

    @model_validator(mode="after")
    def _total(self) -> Order:
        self.calculate_total()
        return self

    def calculate_total(self) -> None:
        self.total = ZERO
        if self.amount == ZERO:
            return
        self.total = self.rate * self.amount


def order_from_wire(value: Any) -> Order:
    """Book levels on the wire are only ever ``[rate, amount]`` arrays."""
    if isinstance(value, Order):
        return value
    rate, amount = order_entry(value)
    return Order(rate=rate, amount=amount)


OrderEntry = Annotated[Order, PlainValidator(order_from_wire)]


class OrderBook(_Payload):
    asks: list[OrderEntry] = []
    bids: list[OrderEntry] = []


class Trade(_Payload):
    id: int = Field(0, alias="tid")
    type: str = ""
    rate: ExactDecimal = Field(ZERO, alias="price")
    amount: ExactDecimal = ZERO
    timestamp: OptionalEpochTime = None


# ── Trade API ──

class Rights(_Payload):
    info: int = 0
    trade: int = 0
    withdraw: int = 0


class UserInfo(_Payload):
    funds: Funds = {}
    rights: Rights = Rights()
    transaction_count: int = 0
    open_orders: int = 0
    server_time: OptionalEpochTime = None


class UserTrade(_Payload):
    received: ExactDecimal = ZERO
    remains: ExactDecimal = ZERO
    order_id: int = 0
    funds: Funds = {}


class TradeOrder(_Payload):
    id: int = 0
    pair: str = ""
    type: str = ""
    start_amount: ExactDecimal = ZERO
    amount: ExactDecimal = ZERO
    rate: ExactDecimal = ZERO
    timestamp_created: OptionalEpochTime = None
    status: int = 0


# Wire shape is {"<order id>": {...}}; decoded order is not guaranteed.
TradeOrders = Annotated[list[TradeOrder], BeforeValidator(id_keyed)]


class CancelOrder(_Payload):
    order_id: int = 0
    funds: Funds = {}


class Withdraw(_Payload):
    trade_id: int = Field(0, alias="tId")
    amount_sent: ExactDecimal = Field(ZERO, alias="amountSent")
    funds: Funds = {}
