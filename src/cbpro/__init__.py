"""Authenticated client for the Coinbase Pro REST trading API."""

from cbpro.config import ClientSettings
from cbpro.exceptions import APIError, CbproError, ConfigurationError, OrderValidationError
from cbpro.exchange import CoinbaseClient, Order, Ticker
from cbpro.models import (
    CommonOrderFields,
    LimitOrderRequest,
    MarketOrderRequest,
    OrderRequest,
    OrderSide,
    OrderStop,
    OrderType,
)

__all__ = [
    "APIError",
    "CbproError",
    "ClientSettings",
    "CoinbaseClient",
    "CommonOrderFields",
    "ConfigurationError",
    "LimitOrderRequest",
    "MarketOrderRequest",
    "Order",
    "OrderRequest",
    "OrderSide",
    "OrderStop",
    "OrderType",
    "OrderValidationError",
    "Ticker",
]
