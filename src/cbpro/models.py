"""Order request models and their validation rules.

Trading quantities (price, size, funds, stop_price) are carried as strings
end to end. They are never parsed into floats, so the exact decimal text
the caller supplied is what the exchange receives.

Validation mutates the request into the canonical form the exchange
expects (enum members, defaults filled, stop_price cleared when there is
no stop) or raises OrderValidationError on the first rule that fails.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cbpro.exceptions import OrderValidationError


class OrderType(str, Enum):
    """Order type."""

    LIMIT = "limit"
    MARKET = "market"


class OrderSide(str, Enum):
    """Order direction."""

    BUY = "buy"
    SELL = "sell"


class OrderStop(str, Enum):
    """Stop kind. NONE is never sent; the exchange expects the key to be absent."""

    NONE = "none"
    LOSS = "loss"
    ENTRY = "entry"


TIME_IN_FORCE_VALUES = ("GTC", "GTT", "IOC", "FOK")
DEFAULT_TIME_IN_FORCE = "GTC"
CANCEL_AFTER_VALUES = ("", "min", "hour", "day")


def _text(value: Any) -> str:
    """Render a field value the way it appears on the wire and in messages."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass
class CommonOrderFields:
    """Fields shared by limit and market orders.

    Used standalone only in tests; real submissions go through
    LimitOrderRequest or MarketOrderRequest, which embed it as ``common``.
    """

    type: OrderType | str = ""
    side: OrderSide | str = ""
    product_id: str = ""
    client_oid: str = ""
    stp: str = ""
    stop: OrderStop | str = OrderStop.NONE
    stop_price: str = ""

    def validate(self) -> None:
        """Check type, side, product id and stop settings, in that order."""
        try:
            self.type = OrderType(self.type)
        except ValueError:
            raise OrderValidationError(
                f"order type '{_text(self.type)}' invalid or unknown",
                field="type",
                value=self.type,
            ) from None

        try:
            self.side = OrderSide(self.side)
        except ValueError:
            raise OrderValidationError(
                f"order side '{_text(self.side)}' invalid or unknown",
                field="side",
                value=self.side,
            ) from None

        if not self.product_id:
            raise OrderValidationError("order requires ProductID", field="product_id")

        try:
            self.stop = OrderStop(self.stop or OrderStop.NONE)
        except ValueError:
            raise OrderValidationError(
                f"order stop '{_text(self.stop)}' invalid or unknown",
                field="stop",
                value=self.stop,
            ) from None

        if self.stop is OrderStop.NONE:
            # A stop price without a stop kind is dropped, not rejected
            self.stop_price = ""
        elif not self.stop_price:
            raise OrderValidationError(
                f"order stop {self.stop.value} need to have a StopPrice",
                field="stop_price",
            )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.client_oid:
            payload["client_oid"] = self.client_oid
        payload["type"] = _text(self.type)
        payload["side"] = _text(self.side)
        payload["product_id"] = self.product_id
        if self.stp:
            payload["stp"] = self.stp
        stop = _text(self.stop)
        if stop and stop != OrderStop.NONE.value:
            payload["stop"] = stop
        if self.stop_price:
            payload["stop_price"] = self.stop_price
        return payload


@dataclass
class LimitOrderRequest:
    """Request to place a limit order."""

    common: CommonOrderFields = field(default_factory=CommonOrderFields)
    price: str = ""
    size: str = ""
    time_in_force: str = ""
    cancel_after: str = ""
    post_only: bool = False

    def validate(self) -> None:
        """Normalize to a submittable limit order.

        The order type is always forced to LIMIT before the common checks
        run, whatever the caller put in ``common.type``.
        """
        self.common.type = OrderType.LIMIT
        self.common.validate()

        if not self.price:
            raise OrderValidationError("LimitOrder requires Price", field="price")
        if not self.size:
            raise OrderValidationError("LimitOrder requires Size", field="size")

        if not self.time_in_force:
            self.time_in_force = DEFAULT_TIME_IN_FORCE
        elif self.time_in_force not in TIME_IN_FORCE_VALUES:
            raise OrderValidationError(
                f"TimeInForce '{self.time_in_force}' invalid or unknown",
                field="time_in_force",
                value=self.time_in_force,
            )
        elif self.time_in_force in ("IOC", "FOK") and self.post_only:
            raise OrderValidationError(
                f"PostOnly flag cannot be used with TimeInForce {self.time_in_force}",
                field="post_only",
                value=self.post_only,
            )

        if self.cancel_after not in CANCEL_AFTER_VALUES:
            raise OrderValidationError(
                f"CancelAfter '{self.cancel_after}' invalid or unknown",
                field="cancel_after",
                value=self.cancel_after,
            )

    def to_payload(self) -> dict[str, Any]:
        payload = self.common.to_payload()
        payload["price"] = self.price
        payload["size"] = self.size
        payload["time_in_force"] = self.time_in_force
        if self.cancel_after:
            payload["cancel_after"] = self.cancel_after
        if self.post_only:
            payload["post_only"] = True
        return payload


@dataclass
class MarketOrderRequest:
    """Request to place a market order, sized by base amount, quote funds, or both."""

    common: CommonOrderFields = field(default_factory=CommonOrderFields)
    size: str = ""
    funds: str = ""

    def validate(self) -> None:
        self.common.type = OrderType.MARKET
        self.common.validate()

        if not self.size and not self.funds:
            raise OrderValidationError("MarketOrder requires Size or Funds", field="size")

    def to_payload(self) -> dict[str, Any]:
        payload = self.common.to_payload()
        payload["size"] = self.size
        payload["funds"] = self.funds
        return payload


OrderRequest = LimitOrderRequest | MarketOrderRequest
