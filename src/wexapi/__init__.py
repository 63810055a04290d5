"""Client for the WEX exchange public and trade APIs."""

from wexapi.client import Client
from wexapi.config import ClientConfig, load_config, load_credentials
from wexapi.errors import (
    DecodeError, EnvelopeDecodeError, NonceExhaustedError, RequestBuildError,
    ResultDecodeError, ServerError, StatusCodeError, TransportError, WexError,
)
from wexapi.models import (
    CancelOrder, InfoResponse, Market, Order, OrderBook, PairInfo, Rights,
    Trade, TradeOrder, UserInfo, UserTrade, Withdraw,
)
from wexapi.nonce import NonceGenerator
from wexapi.signer import Credentials

__all__ = [
    "CancelOrder", "Client", "ClientConfig", "Credentials", "DecodeError",
    "EnvelopeDecodeError", "InfoResponse", "Market", "NonceExhaustedError",
    "NonceGenerator", "Order", "OrderBook", "PairInfo", "RequestBuildError",
    "ResultDecodeError", "Rights", "ServerError", "StatusCodeError", "Trade",
    "TradeOrder", "TransportError", "UserInfo", "UserTrade", "WexError",
    "Withdraw", "load_config", "load_credentials",
]
