"""Abstract exchange client interface.

Callers depend only on this interface, keeping Coinbase-specific
transport and signing details in the concrete implementation.
"""

from abc import ABC, abstractmethod

from cbpro.exchange.types import Order, Ticker
from cbpro.models import OrderRequest


class ExchangeClient(ABC):
    """Abstract base class for exchange REST clients."""

    @abstractmethod
    def ticker(self, product_id: str) -> Ticker:
        """Fetch the current ticker for a product, e.g. "BTC-USD"."""
        ...

    @abstractmethod
    def place_order(self, order: OrderRequest) -> Order:
        """Validate, sign and submit an order."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release pooled connections."""
        ...

    def __enter__(self) -> "ExchangeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
