"""Exchange client layer -- Coinbase REST integration via requests."""

from cbpro.exchange.auth import CoinbaseAuth, Credentials, sign
from cbpro.exchange.client import ExchangeClient
from cbpro.exchange.coinbase_client import CoinbaseClient
from cbpro.exchange.types import Order, Ticker

__all__ = [
    "CoinbaseAuth",
    "CoinbaseClient",
    "Credentials",
    "ExchangeClient",
    "Order",
    "Ticker",
    "sign",
]
